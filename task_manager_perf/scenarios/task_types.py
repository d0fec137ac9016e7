"""
Task-type lifecycle Locust scenario.

Defines :class:`TaskTypeLifecycleUser`, which walks one task type
through its whole life on every iteration:

1. create it (``POST /tasks``)
2. read it back alone (``GET /taskTypes/<id>``) and inside the listing
   (``GET /tasks``)
3. delete it (``DELETE /taskTypes/<id>``)

Every virtual user creates and deletes its own task type, so users
never share remote state.  Checks are soft: a failure is recorded in
Locust's statistics and the iteration carries on.
"""

from __future__ import annotations

import logging

from locust import tag, task

from task_manager_perf.scenarios.base import TaskManagerUser
from task_manager_perf.steps import LifecycleResult, run_task_type_lifecycle

logger = logging.getLogger(__name__)


@tag("task_types")
class TaskTypeLifecycleUser(TaskManagerUser):
    """Create, verify and delete a task type once per iteration."""

    @task
    def task_type_lifecycle(self) -> LifecycleResult:
        """Run one full lifecycle and log it when any check failed."""
        result = run_task_type_lifecycle(self.client, self.settings)
        if not result.passed:
            logger.info(
                "Task type lifecycle failed: created=%s retrieved=%s listed=%s deleted=%s",
                result.created is not None,
                result.retrieved,
                result.listed,
                result.deleted,
            )
        return result
