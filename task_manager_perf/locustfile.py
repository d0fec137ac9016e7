# ruff: noqa: E402
"""
Locust entrypoint for the task manager performance scenario.

This is the file that the ``locust`` CLI discovers and loads.  It
imports every concrete user class and logs the resolved target and
configuration profile when Locust initialises.

Usage examples::

    # Run against the shared development server:
    locust -f task_manager_perf/locustfile.py

    # Target another deployment:
    TASK_MANAGER_API=http://localhost:8084 locust -f task_manager_perf/locustfile.py

    # Walk every listing page and confirm deletes:
    PERF_PROFILE=strict locust -f task_manager_perf/locustfile.py --headless -u 20 -t 2m
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from locust import events

# Locust may be invoked from any directory.  Inserting the project root
# onto ``sys.path`` keeps ``from task_manager_perf...`` imports working.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from task_manager_perf.scenarios.base import SETTINGS
from task_manager_perf.scenarios.task_types import TaskTypeLifecycleUser

__all__ = ["TaskTypeLifecycleUser"]

logger = logging.getLogger(__name__)


@events.init.add_listener
def _log_target(environment, **_kwargs):
    """Log where the load goes and which checks are active."""
    host = environment.host or SETTINGS.TASK_MANAGER_API
    logger.info(
        "Task manager load test against %s (profile=%s, match=%s, page scan=%s, confirm delete=%s)",
        host,
        SETTINGS.__name__,
        SETTINGS.MATCH_MODE,
        SETTINGS.PAGE_SCAN,
        SETTINGS.CONFIRM_DELETE,
    )
