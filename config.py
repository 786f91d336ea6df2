"""
Browser test harness configuration.

This module defines configuration classes for the environments the UI
suite runs in (a developer machine and CI). Values are loaded from
environment variables with sensible defaults. CI gets whole-test reruns
and longer timeouts because shared runners are slower and the site under
test is a public one.

All timeouts are in milliseconds, matching Playwright's API.
"""

import os


class Config:
    """Base configuration with default settings."""

    BASE_URL: str = os.environ.get("SUPPORT_BASE_URL", "https://support.xbox.com").rstrip("/")

    # Per-call defaults applied to every page and to ``expect``.
    NAVIGATION_TIMEOUT: int = 30_000
    ACTION_TIMEOUT: int = 15_000
    EXPECT_TIMEOUT: int = 10_000

    VIEWPORT: dict = {"width": 1920, "height": 1080}
    LOCALE: str = "en-US"
    TIMEZONE_ID: str = "America/Los_Angeles"

    # Whole-test reruns; individual operations are never retried.
    RERUNS: int = 0
    TIMEOUT_MULTIPLIER: float = 1.0


class LocalConfig(Config):
    """Developer machine configuration."""


class CIConfig(Config):
    """CI pipeline configuration."""

    RERUNS: int = 2
    TIMEOUT_MULTIPLIER: float = 1.5


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def is_ci() -> bool:
    """Return True when running inside a CI pipeline."""
    return bool(os.environ.get("CI"))


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name ("local" or "ci"). If None, "ci" is used
             when the CI environment variable is set, otherwise "local".

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = "ci" if is_ci() else "local"
    return config.get(env, config["default"])
