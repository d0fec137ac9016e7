"""
Performance testing package for the task manager API (Locust-based).

Contains the Locust user classes, the request steps they run, the
comparison helpers used by their checks, and a CI threshold checker
that together load-test the task-type endpoints of the task manager.

Each virtual user repeatedly walks one task type through its whole
life: create it, read it back alone and inside the listing, then
delete it.  Every check is a soft assertion recorded by Locust; a
failed check never stops the user.
"""

import logging

# Configure logging the same way for the locustfile and the CLI helpers.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__version__ = "0.1.0"
