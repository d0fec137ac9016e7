"""
Shared abstract Locust user class for task manager scenarios.

:class:`TaskManagerUser` resolves the active configuration profile once
at import time and exposes it to subclasses as ``settings``.  Concrete
user classes only declare ``@task`` methods that delegate to the
functions in :mod:`task_manager_perf.steps`.
"""

from __future__ import annotations

import logging

from locust import HttpUser, between

from task_manager_perf.config import Config, get_config

logger = logging.getLogger(__name__)

SETTINGS = get_config()


class TaskManagerUser(HttpUser):
    """
    Base user pointed at the configured task manager.

    ``abstract = True`` tells Locust not to spawn this class directly,
    only its concrete subclasses.  ``host`` comes from
    ``TASK_MANAGER_API``; Locust's ``--host`` option overrides it.

    Attributes:
        settings: Configuration profile shared by every virtual user.
    """

    abstract = True

    host = SETTINGS.TASK_MANAGER_API
    wait_time = between(SETTINGS.WAIT_MIN, SETTINGS.WAIT_MAX)

    settings: type[Config] = SETTINGS

    def on_start(self) -> None:
        logger.debug("Virtual user %s starting against %s", type(self).__name__, self.host)
