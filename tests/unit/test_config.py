"""
Unit tests for configuration profiles and environment parsing.
"""

from __future__ import annotations

import pytest

from task_manager_perf import config as perf_config
from task_manager_perf.config import (
    DEFAULT_TASK_MANAGER_API,
    CompatibilityConfig,
    Config,
    StrictConfig,
    env_flag,
    env_float,
    env_int,
    get_config,
    parse_page_scan,
    resolve_base_url,
)

pytestmark = pytest.mark.unit


def test_base_url_defaults_to_development_server():
    assert resolve_base_url({}) == DEFAULT_TASK_MANAGER_API
    assert DEFAULT_TASK_MANAGER_API == "https://wenet.u-hopper.com/dev/task_manager"


def test_base_url_taken_from_environment():
    environ = {"TASK_MANAGER_API": "http://localhost:8084"}

    assert resolve_base_url(environ) == "http://localhost:8084"


def test_base_url_keeps_empty_string_when_present():
    assert resolve_base_url({"TASK_MANAGER_API": ""}) == ""


def test_base_url_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TASK_MANAGER_API", "http://staging.test/task_manager")

    assert resolve_base_url() == "http://staging.test/task_manager"


@pytest.mark.parametrize(
    ("profile", "expected"),
    [
        ("default", Config),
        ("strict", StrictConfig),
        ("compatibility", CompatibilityConfig),
        ("testing", perf_config.TestingConfig),
        ("unknown", Config),
    ],
)
def test_get_config_maps_profile_names(profile, expected):
    assert get_config(profile) is expected


def test_get_config_reads_perf_profile(monkeypatch):
    monkeypatch.setenv("PERF_PROFILE", "strict")

    assert get_config() is StrictConfig


def test_testing_profile_points_at_non_routable_host():
    assert perf_config.TestingConfig.TASK_MANAGER_API == "http://task-manager.test"
    assert perf_config.TestingConfig.MATCH_MODE == "structural"
    assert perf_config.TestingConfig.CONFIRM_DELETE is False


def test_strict_profile_scans_all_pages_and_confirms_delete():
    assert StrictConfig.PAGE_SCAN == "all"
    assert StrictConfig.CONFIRM_DELETE is True
    assert StrictConfig.MATCH_MODE == "structural"


def test_compatibility_profile_uses_character_signatures():
    assert CompatibilityConfig.MATCH_MODE == "characters"
    assert CompatibilityConfig.PAGE_SCAN == "first"


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("TRUE", True), (" yes ", True), ("0", False), ("off", False)])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)

    assert env_flag("SOME_FLAG") is expected


def test_env_flag_default_when_unset(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)

    assert env_flag("SOME_FLAG", default=True) is True


def test_env_int_parses_and_defaults(monkeypatch):
    monkeypatch.setenv("PAGE_LIMIT", "25")
    assert env_int("PAGE_LIMIT", 10) == 25

    monkeypatch.setenv("PAGE_LIMIT", "")
    assert env_int("PAGE_LIMIT", 10) == 10


def test_env_int_rejects_garbage(monkeypatch):
    monkeypatch.setenv("PAGE_LIMIT", "ten")

    with pytest.raises(ValueError, match="PAGE_LIMIT must be an integer"):
        env_int("PAGE_LIMIT", 10)


def test_env_float_rejects_garbage(monkeypatch):
    monkeypatch.setenv("WAIT", "soon")

    with pytest.raises(ValueError, match="WAIT must be a number"):
        env_float("WAIT", 0.0)


@pytest.mark.parametrize(("raw", "expected"), [("all", "all"), ("ALL", "all"), (" First ", "first")])
def test_parse_page_scan_normalises_case(raw, expected):
    assert parse_page_scan(raw) == expected


@pytest.mark.parametrize("raw", ["full", "", "pages"])
def test_parse_page_scan_rejects_unknown_modes(raw):
    with pytest.raises(ValueError, match="Unknown page scan mode"):
        parse_page_scan(raw)
