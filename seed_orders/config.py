"""Run configuration for the seeding driver.

The driver itself only takes a ``DriverConfig`` instance. ``from_env`` exists
for the console scripts, which read their settings from the environment the
same way the services do.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError

MIN_STEP_DELAY = 0.5


@dataclass(frozen=True)
class Band:
    """Share of created orders (by creation order) to pay up to ``fraction``."""

    fraction: float
    share: float


# First third to 50%, next third to 80%, next third to 100%; the remainder
# keeps only the installment paid at creation.
DEFAULT_BANDS: Tuple[Band, ...] = (
    Band(fraction=0.5, share=1 / 3),
    Band(fraction=0.8, share=1 / 3),
    Band(fraction=1.0, share=1 / 3),
)


@dataclass(frozen=True)
class DriverConfig:
    base_url: str = "http://localhost:5000"
    token: str = ""
    timeout: float = 30.0
    payment_method: str = "WALLET"
    submit_delay: float = 1.5
    step_delay: float = 1.2
    bands: Tuple[Band, ...] = DEFAULT_BANDS

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.submit_delay <= 0:
            raise ConfigError(f"submit_delay must be positive, got {self.submit_delay}")
        if self.step_delay < MIN_STEP_DELAY:
            raise ConfigError(f"step_delay must be at least {MIN_STEP_DELAY}s, got {self.step_delay}")
        for band in self.bands:
            if not 0 < band.fraction <= 1:
                raise ConfigError(f"band fraction must be in (0, 1], got {band.fraction}")
            if band.share < 0:
                raise ConfigError(f"band share must not be negative, got {band.share}")
        # small tolerance so three 1/3 shares are accepted
        if sum(band.share for band in self.bands) > 1 + 1e-9:
            raise ConfigError("band shares add up to more than 1")

    @classmethod
    def from_env(cls) -> "DriverConfig":
        try:
            return cls(
                base_url=os.getenv("SEED_BASE_URL", "http://localhost:5000"),
                token=os.getenv("SEED_USER_TOKEN", ""),
                timeout=float(os.getenv("SEED_TIMEOUT", "30")),
                payment_method=os.getenv("SEED_PAYMENT_METHOD", "WALLET"),
                submit_delay=float(os.getenv("SEED_SUBMIT_DELAY", "1.5")),
                step_delay=float(os.getenv("SEED_STEP_DELAY", "1.2")),
            )
        except ValueError as exc:
            raise ConfigError(f"invalid numeric setting: {exc}") from exc
