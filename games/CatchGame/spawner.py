"""
CatchGame - Drop spawner.

Creates drops at a random horizontal position along the top of the field,
with fall speed and good/bad kind drawn from the difficulty profile.
"""
import random

from games.CatchGame import config
from games.CatchGame.config import CatchProfile
from games.CatchGame.drop import Drop, DropKind


class DropSpawner:
    """Spawns drops for one difficulty profile."""

    def __init__(
        self,
        profile: CatchProfile,
        rng: random.Random,
        field_width: float = config.FIELD_WIDTH,
        drop_size: float = config.DROP_SIZE,
    ):
        """Initialize the spawner.

        Args:
            profile: Difficulty profile supplying speed range and bad chance
            rng: Random source
            field_width: Playfield width in pixels
            drop_size: Drop width/height in pixels
        """
        self.profile = profile
        self.field_width = field_width
        self.drop_size = drop_size
        self._rng = rng

    def spawn(self) -> Drop:
        """Create and return a new drop.

        x is uniform in [0, field_width - drop_size], speed uniform in
        [speed_min, speed_max].
        """
        kind = DropKind.BAD if self._rng.random() < self.profile.bad_chance else DropKind.GOOD
        x = self._rng.random() * max(self.field_width - self.drop_size, 0)
        speed = self._rng.uniform(self.profile.speed_min, self.profile.speed_max)

        return Drop(
            x=x,
            y=config.DROP_SPAWN_Y,
            speed=speed,
            kind=kind,
            size=self.drop_size,
        )
