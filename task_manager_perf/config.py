"""
Performance suite configuration.

Defines configuration profiles for the task-type load scenario.  Values
are read from environment variables with sensible defaults, so the same
locustfile can target a local stack, a staging deployment, or the shared
development server without edits.  The ``get_config`` factory selects a
profile based on the ``PERF_PROFILE`` environment variable (or an
explicit key).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

# Target used when TASK_MANAGER_API is not present in the environment.
DEFAULT_TASK_MANAGER_API = "https://wenet.u-hopper.com/dev/task_manager"

MATCH_STRUCTURAL = "structural"
MATCH_CHARACTERS = "characters"

PAGE_SCAN_FIRST = "first"
PAGE_SCAN_ALL = "all"

_TRUTHY = {"1", "true", "yes", "on"}


def resolve_base_url(environ: Mapping[str, str] | None = None) -> str:
    """
    Return the task manager base URL.

    Any value present under ``TASK_MANAGER_API`` wins, the empty string
    included; otherwise the shared development server is used.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``.
    """
    if environ is None:
        environ = os.environ
    value = environ.get("TASK_MANAGER_API")
    if isinstance(value, str):
        return value
    return DEFAULT_TASK_MANAGER_API


def parse_page_scan(value: str) -> str:
    """
    Normalise a page scan mode.

    Raises:
        ValueError: If *value* is neither ``first`` nor ``all``.
    """
    mode = str(value).strip().lower()
    if mode not in (PAGE_SCAN_FIRST, PAGE_SCAN_ALL):
        raise ValueError(
            f"Unknown page scan mode {value!r}; expected one of: {PAGE_SCAN_ALL}, {PAGE_SCAN_FIRST}"
        )
    return mode


def env_flag(name: str, default: bool = False) -> bool:
    """Interpret an environment variable as a boolean switch."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer setting, rejecting non-numeric values."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def env_float(name: str, default: float) -> float:
    """Read a float setting, rejecting non-numeric values."""
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class Config:
    """
    Base (shared) configuration for the load scenario.

    All profiles inherit from ``Config`` so that common defaults only
    need to be stated once.  Individual settings can be overridden by
    environment variables.
    """

    # Base URL of the task manager API.  Locust's ``--host`` still wins
    # over this value when given on the command line.
    TASK_MANAGER_API: str = resolve_base_url()

    # How a fetched task type is compared with the created one.
    MATCH_MODE: str = os.environ.get("TASK_TYPE_MATCH_MODE", MATCH_STRUCTURAL)

    # Whether the listing check looks at the first page only or walks
    # every page with offset/limit.
    PAGE_SCAN: str = os.environ.get("TASK_TYPE_PAGE_SCAN", PAGE_SCAN_FIRST)
    PAGE_LIMIT: int = env_int("TASK_TYPE_PAGE_LIMIT", 10)

    # Follow the delete with a GET that must answer 404.
    CONFIRM_DELETE: bool = env_flag("TASK_TYPE_CONFIRM_DELETE")

    # Think-time between iterations, in seconds.
    WAIT_MIN: float = env_float("PERF_WAIT_MIN", 0.0)
    WAIT_MAX: float = env_float("PERF_WAIT_MAX", 0.0)


class StrictConfig(Config):
    """
    Profile that verifies presence on every page and confirms deletes.

    Use it when the listing is large enough that the created task type
    rarely lands on the first page.
    """

    PAGE_SCAN: str = os.environ.get("TASK_TYPE_PAGE_SCAN", PAGE_SCAN_ALL)
    CONFIRM_DELETE: bool = env_flag("TASK_TYPE_CONFIRM_DELETE", default=True)


class CompatibilityConfig(Config):
    """Reproduces the legacy character-signature comparison."""

    MATCH_MODE: str = os.environ.get("TASK_TYPE_MATCH_MODE", MATCH_CHARACTERS)
    PAGE_SCAN: str = PAGE_SCAN_FIRST


class TestingConfig(Config):
    """
    Test-suite overrides.

    Points the base URL at a non-routable host so unit tests never hit
    a real task manager.
    """

    TASK_MANAGER_API: str = os.environ.get("TEST_TASK_MANAGER_API", "http://task-manager.test")
    MATCH_MODE: str = MATCH_STRUCTURAL
    PAGE_SCAN: str = PAGE_SCAN_FIRST
    PAGE_LIMIT: int = 10
    CONFIRM_DELETE: bool = False


# Lookup table mapping profile names to their config classes.
config = {
    "default": Config,
    "strict": StrictConfig,
    "compatibility": CompatibilityConfig,
    "testing": TestingConfig,
}


def get_config(profile: str | None = None) -> type[Config]:
    """
    Return the configuration class for the given profile.

    Args:
        profile: One of ``"default"``, ``"strict"``, ``"compatibility"``
            or ``"testing"``.  When *None*, the ``PERF_PROFILE``
            environment variable is consulted, falling back to
            ``"default"`` if unset.

    Returns:
        The ``Config`` subclass matching the requested profile, or
        ``Config`` if the key is unrecognised.
    """
    if profile is None:
        profile = os.environ.get("PERF_PROFILE", "default")
    return config.get(profile, config["default"])
