"""Seed an installment-order backend with paced, banded test orders."""

from .client import ErrorCategory, ErrorInfo, Outcome, RemoteClient
from .config import Band, DEFAULT_BANDS, DriverConfig
from .driver import Failure, Success, run_batch
from .errors import ConfigError, FixtureError, SeedError
from .fixtures import Address, Fixture, PlanConfig, generate_fixtures
from .progression import ProgressionOutcome, additional_steps, advance, assign_bands, run_progression
from .report import Report, build_report, format_report
from .runner import seed
