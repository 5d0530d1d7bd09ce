"""Errors that end a seeding run.

Per-unit failures never raise; they are captured as ``ErrorInfo`` values by
the remote client. Only problems that make the whole run meaningless are
exceptions.
"""


class SeedError(Exception):
    """Base class for fatal seeding errors."""


class FixtureError(SeedError):
    """The fixture catalog could not be built (e.g. empty address pool)."""


class ConfigError(SeedError):
    """A configuration value is out of range."""
