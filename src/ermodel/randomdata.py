"""Pluggable randomness for example values."""

import uuid
from typing import Optional, Sequence
import numpy as np
from faker import Faker
from ermodel.config.settings import get_settings
from ermodel.config.logging import get_logger

logger = get_logger(__name__)


class RandomValueSource:
    """
    Source of random example values.

    Wraps a numpy Generator, and a Faker instance seeded from it, so that
    callers (and tests) can pass a seeded source and get repeatable output.
    Not synchronized: share one source per thread.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        locale: Optional[str] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the source.

        Args:
            rng: Generator to draw from; created from seed when omitted
            locale: Faker locale (default: settings.example_locale)
            seed: Seed used when rng is omitted (default: settings.seed)
        """
        settings = get_settings()
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else settings.seed)
        self.rng = rng
        self.locale = locale or settings.example_locale
        self._faker: Optional[Faker] = None

    @property
    def faker(self) -> Faker:
        if self._faker is None:
            self._faker = Faker(self.locale)
            self._faker.seed_instance(int(self.rng.integers(0, 2**32 - 1)))
            logger.debug(f"Created Faker for locale {self.locale}")
        return self._faker

    def integer(self, low: int, high: int) -> int:
        """Random integer in [low, high]."""
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")
        return int(self.rng.integers(low, high, endpoint=True))

    def uniform(self, low: float, high: float) -> float:
        """Random float in [low, high], finite for any finite bounds."""
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")
        t = float(self.rng.random())
        # interpolate rather than scale (high - low) which can overflow
        return low * (1.0 - t) + high * t

    def guid(self) -> str:
        return str(uuid.UUID(bytes=self.rng.bytes(16), version=4))

    def string(self, length: int) -> str:
        """Random string of letters of exactly length characters."""
        if length <= 0:
            return ""
        return self.faker.pystr(min_chars=length, max_chars=length)

    def choice(self, values: Sequence[str]) -> str:
        if not values:
            raise ValueError("cannot choose from an empty sequence")
        return values[int(self.rng.integers(0, len(values)))]
