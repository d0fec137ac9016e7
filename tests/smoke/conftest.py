"""
Smoke-test fixtures for a live task manager.

Provides the ``task_manager_url`` session-scoped fixture.  Smoke tests
only run when ``TASK_MANAGER_API`` names a deployment; without it the
whole suite is skipped so local and CI unit runs never touch a shared
server by accident.
"""

from __future__ import annotations

import os

import pytest
import requests


@pytest.fixture(scope="session")
def task_manager_url() -> str:
    """Yield the live task manager base URL, skipping when none is set."""
    url = os.environ.get("TASK_MANAGER_API")
    if not url:
        pytest.skip("TASK_MANAGER_API is not set; skipping live smoke tests")
    return url.rstrip("/")


@pytest.fixture
def http() -> requests.Session:
    """Provide a JSON session closed after each test."""
    with requests.Session() as session:
        session.headers.update({"Accept": "application/json"})
        yield session
