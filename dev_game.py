#!/usr/bin/env python3
"""
Development Mode Game Launcher

Plays the hub games in a pygame window with keyboard and mouse input.
Scores are credited to the logged-in player in the local profile store.

Uses the game registry for auto-discovery. Game-specific arguments are
dynamically loaded from each game's ARGUMENTS list.

Usage:
    # List available games
    python dev_game.py --list

    # Create an account, then play
    python dev_game.py catch --register --user alice --password secret
    python dev_game.py memory --user alice --password secret --difficulty medium

    # Show the logged-in player's stats / log out
    python dev_game.py --stats
    python dev_game.py --logout

    # See game-specific options
    python dev_game.py catch --help
"""

import argparse
import sys
import os

import pygame

# Ensure project root is on path
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.common import GameState
from games.registry import get_registry
from hub.auth import AuthError
from hub.logging import get_logger, close_all_sinks
from hub.session import HubSession

log = get_logger('dev_game')

TEXT_COLOR = (235, 235, 245)
HUD_HEIGHT = 40


def _add_game_arguments(parser, registry, slug):
    """Add a game's ARGUMENTS to parser."""
    for arg_def in registry.get_game_arguments(slug):
        kwargs = {}
        if 'type' in arg_def:
            type_val = arg_def['type']
            # Handle type as string or actual type
            if isinstance(type_val, str):
                kwargs['type'] = {'str': str, 'int': int, 'float': float}.get(type_val, str)
            else:
                kwargs['type'] = type_val
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']
        parser.add_argument(arg_def['name'], **kwargs)


def _print_stats(hub):
    stats = hub.current_stats()
    if stats is None:
        print("Not logged in")
        return
    print(f"Player: {stats.username}")
    print(f"  Total score:  {stats.score}")
    print(f"  Games played: {stats.games_played}")
    print(f"  Average:      {stats.average_score:.1f}")


def _authenticate(hub, args):
    """Register and/or log in from CLI credentials. Returns False on failure."""
    if args.user is None:
        if hub.current_user is None:
            print("Not logged in - scores will not be saved (use --user/--password)")
        return True

    try:
        if args.register:
            hub.auth.register(args.user, args.password or '')
            print("Account created! Please log in.")
        hub.auth.login(args.user, args.password or '')
    except AuthError as e:
        print(f"ERROR: {e.message}")
        return False
    print(f"Welcome, {hub.current_user}")
    return True


def _draw_text(screen, font, text, pos, center=False):
    surface = font.render(text, True, TEXT_COLOR)
    rect = surface.get_rect()
    if center:
        rect.center = pos
    else:
        rect.topleft = pos
    screen.blit(surface, rect)


def _render_catch(screen, font, game):
    from games.CatchGame import config

    screen.fill(config.BACKGROUND_COLOR)
    offset = HUD_HEIGHT

    player = game.player_bounds
    pygame.draw.rect(screen, config.PLAYER_COLOR,
                     pygame.Rect(player.x, player.y + offset, player.width, player.height),
                     border_radius=6)
    for drop in game.drops:
        color = config.BAD_DROP_COLOR if drop.is_bad else config.GOOD_DROP_COLOR
        center = (int(drop.x + drop.size / 2), int(drop.y + drop.size / 2 + offset))
        pygame.draw.circle(screen, color, center, int(drop.size / 2))

    _draw_text(screen, font,
               f"{game.difficulty.upper()}  Score: {game.score}  Lives: {game.lives}  Time: {game.time_left}",
               (10, 10))


def _memory_card_rects(game):
    from games.MemoryMatrix import config

    rects = []
    for card in game.cards:
        row, col = divmod(card.id, game.columns)
        x = config.CARD_GAP + col * (config.CARD_SIZE + config.CARD_GAP)
        y = HUD_HEIGHT + config.CARD_GAP + row * (config.CARD_SIZE + config.CARD_GAP)
        rects.append((card, pygame.Rect(x, y, config.CARD_SIZE, config.CARD_SIZE)))
    return rects


def _render_memory(screen, font, game):
    from games.MemoryMatrix import config
    from games.MemoryMatrix.deck import CardState

    screen.fill(config.BACKGROUND_COLOR)
    for card, rect in _memory_card_rects(game):
        if card.state == CardState.HIDDEN:
            pygame.draw.rect(screen, config.CARD_HIDDEN_COLOR, rect, border_radius=8)
            continue
        color = config.CARD_MATCHED_COLOR if card.state == CardState.MATCHED else config.CARD_FLIPPED_COLOR
        pygame.draw.rect(screen, color, rect, border_radius=8)
        symbol = font.render(card.symbol, True, (20, 20, 30))
        screen.blit(symbol, symbol.get_rect(center=rect.center))

    _draw_text(screen, font,
               f"{game.difficulty.upper()}  Moves: {game.moves}  Time: {game.elapsed_seconds}s  "
               f"Pairs: {game.pairs_found}/{game.total_pairs}",
               (10, 10))


def main():
    """Main entry point for development game launcher."""

    # Get game registry
    registry = get_registry()
    available_games = registry.list_games()

    # Phase 1: Parse just enough to identify the game
    # Use parse_known_args to allow unknown game-specific args through
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('game', nargs='?')
    pre_args, _ = pre_parser.parse_known_args()

    # Phase 2: Build full parser with game-specific arguments
    parser = argparse.ArgumentParser(
        description='Development Mode Game Launcher - Play hub games locally',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available games: {', '.join(available_games)}

Examples:
  python dev_game.py --list
  python dev_game.py catch --register --user alice --password secret
  python dev_game.py memory --user alice --password secret
  python dev_game.py <game> --help       # See game-specific options
        """
    )
    parser.add_argument('game', nargs='?', choices=available_games, help='Game to play')
    parser.add_argument('--list', '-l', action='store_true',
                        help='List all available games and exit')
    parser.add_argument('--user', '-u', type=str, default=None, help='Username to log in as')
    parser.add_argument('--password', '-p', type=str, default=None, help='Password')
    parser.add_argument('--register', action='store_true',
                        help='Create the account before logging in')
    parser.add_argument('--stats', action='store_true',
                        help="Show the logged-in player's stats and exit")
    parser.add_argument('--logout', action='store_true', help='Log out and exit')

    if pre_args.game in available_games:
        _add_game_arguments(parser, registry, pre_args.game)

    args = parser.parse_args()

    # Handle --list
    if args.list:
        print("\nAvailable Games (Development Mode)")
        print("=" * 50)
        for slug in available_games:
            info = registry.get_game_info(slug)
            if info:
                print(f"\n  {slug}")
                print(f"    Name: {info.name}")
                print(f"    Description: {info.description}")
                print(f"    Version: {info.version}")
                game_args = registry.get_game_arguments(slug)
                if game_args:
                    print(f"    Options: {', '.join(a['name'] for a in game_args)}")
        print()
        return 0

    hub = HubSession.open()

    if args.logout:
        hub.logout()
        print("Logged out")
        return 0

    if not _authenticate(hub, args):
        return 1

    if args.stats:
        _print_stats(hub)
        return 0

    # Require a game
    if args.game is None:
        parser.print_help()
        return 1

    # Collect game kwargs from all parsed arguments
    skip_args = {'game', 'list', 'user', 'password', 'register', 'stats', 'logout'}
    game_kwargs = {
        k: v for k, v in vars(args).items()
        if k not in skip_args and v is not None
    }

    try:
        game = hub.create_game(args.game, **game_kwargs)
    except ValueError as e:
        print(f"ERROR: Failed to create game: {e}")
        return 1

    pygame.init()
    if args.game == 'catch':
        width, height = game.field_width, game.field_height + HUD_HEIGHT
    else:
        from games.MemoryMatrix import config as memory_config
        rows = -(-len(memory_config.MEMORY_PROFILES['hard'].symbols) * 2 // 6)
        width = 6 * (memory_config.CARD_SIZE + memory_config.CARD_GAP) + memory_config.CARD_GAP
        height = HUD_HEIGHT + rows * (memory_config.CARD_SIZE + memory_config.CARD_GAP) + 60
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(f"{registry.get_game_info(args.game).name} - Development Mode")
    font = pygame.font.SysFont(None, 28)

    print("=" * 60)
    print(f"Development Mode: {game.NAME}")
    print("=" * 60)
    print("Controls:")
    print("  - SPACE to start / restart")
    if args.game == 'catch':
        print("  - LEFT/RIGHT to move, N for next difficulty")
    else:
        print("  - Click cards to flip them")
    print("  - ESC to quit")
    print("=" * 60)

    game.start()

    clock = pygame.time.Clock()
    running = True
    reported = False

    while running:
        elapsed_ms = clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE and not game.is_running:
                    game.start()
                    reported = False
                elif args.game == 'catch' and event.key == pygame.K_LEFT:
                    game.press('left')
                elif args.game == 'catch' and event.key == pygame.K_RIGHT:
                    game.press('right')
                elif args.game == 'catch' and event.key == pygame.K_n and game.state == GameState.ENDED:
                    game.advance_difficulty()
                    reported = False
            elif event.type == pygame.KEYUP and args.game == 'catch':
                if event.key == pygame.K_LEFT:
                    game.release('left')
                elif event.key == pygame.K_RIGHT:
                    game.release('right')
            elif event.type == pygame.MOUSEBUTTONDOWN and args.game == 'memory':
                for card, rect in _memory_card_rects(game):
                    if rect.collidepoint(event.pos):
                        game.flip(card.id)
                        break

        hub.scheduler.advance(elapsed_ms)

        if args.game == 'catch':
            _render_catch(screen, font, game)
        else:
            _render_memory(screen, font, game)
        if game.message:
            _draw_text(screen, font, game.message, (width // 2, height - 20), center=True)
        pygame.display.flip()

        if game.state.is_finished and not reported:
            reported = True
            log.info("%s finished: %s", game.SLUG, game.message)
            _print_stats(hub)

    pygame.quit()
    close_all_sinks()
    return 0


if __name__ == "__main__":
    sys.exit(main())
