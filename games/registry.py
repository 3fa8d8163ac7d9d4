"""
Game Registry - Auto-discovery and management of hub games.

Games are discovered by scanning the games/ directory for subdirectories
containing a game_mode.py with a class inheriting from BaseGame. Metadata
and CLI arguments come from the game class attributes.

Usage:
    from games.registry import get_registry

    registry = get_registry()
    available = registry.list_games()  # ['catch', 'memory']

    info = registry.get_game_info('catch')
    args = registry.get_game_arguments('catch')

    game = registry.create_game('memory', scheduler=scheduler, recorder=recorder)
"""

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from games.common.base_game import BaseGame
from hub.logging import get_logger

log = get_logger('registry')

GAMES_DIR = Path(__file__).parent


@dataclass
class GameInfo:
    """Information about a registered game."""
    name: str
    slug: str
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.CatchGame'

    # CLI arguments (from game class)
    arguments: List[Dict[str, Any]] = field(default_factory=list)


class GameRegistry:
    """
    Registry for auto-discovering and creating hub games.

    Discovery works by:
    1. Looking for game_mode.py in each game directory
    2. Finding the class that inherits from BaseGame
    3. Reading metadata from class attributes (NAME, SLUG, DESCRIPTION, etc.)
    """

    def __init__(self, games_dir: Path = GAMES_DIR):
        self._games_dir = Path(games_dir)
        self._games: Dict[str, GameInfo] = {}
        self._game_classes: Dict[str, Type[BaseGame]] = {}
        self._discover_games()

    def _discover_games(self) -> None:
        skip_dirs = {'common', '__pycache__'}

        if not self._games_dir.exists():
            return

        for game_dir in sorted(self._games_dir.iterdir()):
            if not game_dir.is_dir():
                continue
            if game_dir.name.startswith('_') or game_dir.name.startswith('.'):
                continue
            if game_dir.name.lower() in skip_dirs:
                continue
            if (game_dir / 'game_mode.py').exists():
                self._register_game(game_dir)

    def _register_game(self, game_dir: Path) -> None:
        """Register the BaseGame subclass found in a game directory."""
        module_path = f"games.{game_dir.name}"
        game_class = self._find_game_class(module_path)
        if game_class is None:
            log.warning("No BaseGame subclass in %s/game_mode.py", game_dir.name)
            return
        self.register(game_class, module_path)

    def _find_game_class(self, module_path: str) -> Optional[Type[BaseGame]]:
        """Find a BaseGame subclass defined in module_path.game_mode."""
        try:
            module = importlib.import_module(f"{module_path}.game_mode")
        except ImportError as e:
            log.warning("Failed to load %s: %s", module_path, e)
            return None

        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Only classes defined in this module
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseGame) and obj is not BaseGame:
                return obj
        return None

    def register(self, game_class: Type[BaseGame], module_path: str = '') -> GameInfo:
        """Add a game class under its SLUG."""
        slug = game_class.SLUG.lower()
        info = GameInfo(
            name=game_class.NAME,
            slug=slug,
            description=game_class.DESCRIPTION,
            version=game_class.VERSION,
            author=game_class.AUTHOR,
            module_path=module_path or game_class.__module__.rsplit('.', 1)[0],
            arguments=game_class.get_arguments(),
        )
        self._games[slug] = info
        self._game_classes[slug] = game_class
        return info

    def list_games(self) -> List[str]:
        """Get sorted list of available game slugs."""
        return sorted(self._games.keys())

    def get_game_info(self, slug: str) -> Optional[GameInfo]:
        return self._games.get(slug.lower())

    def get_game_arguments(self, slug: str) -> List[Dict[str, Any]]:
        """Get CLI arguments for a specific game (empty if unknown)."""
        info = self._games.get(slug.lower())
        if info is None:
            return []
        return info.arguments

    def get_game_class(self, slug: str) -> Optional[Type[BaseGame]]:
        return self._game_classes.get(slug.lower())

    def create_game(self, slug: str, **kwargs) -> BaseGame:
        """
        Create a game instance.

        Args:
            slug: Game identifier
            **kwargs: Constructor arguments (scheduler is required)

        Raises:
            ValueError: If game not found
        """
        game_class = self._game_classes.get(slug.lower())
        if game_class is None:
            available = ', '.join(self.list_games())
            raise ValueError(f"Unknown game: {slug}. Available: {available}")
        return game_class(**kwargs)


# Singleton instance for convenience
_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Get the shared registry, discovering games on first use."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
