"""
Request steps of the task-type lifecycle scenario.

Each step issues one request (or, for a full page scan, a handful of
requests) through a Locust ``HttpSession`` using ``catch_response=True``
so the step itself decides whether the response counts as a success.
Steps never raise on a failed check: they mark the response failed and
report the outcome through their return value, which the lifecycle
runner threads into the next step.

Key Concepts Demonstrated:
- ``catch_response=True`` for in-band soft assertions
- Explicit state passing (created task type → later steps) instead of
  a shared enclosing variable
- Named requests so Locust aggregates ``/taskTypes/<id>`` calls under
  one statistics row
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from task_manager_perf.config import PAGE_SCAN_ALL, Config, parse_page_scan
from task_manager_perf.helpers import json_headers, safe_json, task_type_payload
from task_manager_perf.matching import (
    Matcher,
    get_matcher,
    page_contains,
    page_parts,
    structurally_equal,
    validate_page,
)

logger = logging.getLogger(__name__)

CREATE_PATH = "/tasks"
PAGE_PATH = "/tasks"
TASK_TYPE_PATH = "/taskTypes/{task_type_id}"


@dataclass
class LifecycleResult:
    """
    Outcome of one scenario iteration.

    Attributes:
        created: Task type returned by the create call, or ``None`` when
            no usable task type came back.
        retrieved: The single fetch passed its checks.
        listed: The listing passed its checks.
        deleted: The delete answered ``204``.
        deletion_confirmed: ``None`` when not requested, otherwise whether
            the deleted id answered ``404``.
    """

    created: dict[str, Any] | None = None
    retrieved: bool = False
    listed: bool = False
    deleted: bool = False
    deletion_confirmed: bool | None = None

    @property
    def passed(self) -> bool:
        """``True`` when every check that ran succeeded."""
        return (
            self.created is not None
            and self.retrieved
            and self.listed
            and self.deleted
            and self.deletion_confirmed is not False
        )


def _task_type_url(task_type: dict[str, Any]) -> str:
    return TASK_TYPE_PATH.format(task_type_id=task_type["id"])


def check_page_limit(limit: int) -> int:
    """Reject page sizes the listing cannot be walked with."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"Page limit must be a positive integer, got {limit!r}")
    return limit


def _fail(response: Any, message: str) -> None:
    logger.warning("Check failed: %s", message)
    response.failure(message)


def create_task_type(client: Any, payload: dict[str, Any] | None = None) -> dict[str, Any] | None:
    """
    POST a new task type and return the server's representation.

    The status check and the body check are evaluated independently, so
    a task type that came back with an unexpected status is still
    returned (and later cleaned up) as long as it carries an ``id``.

    Args:
        client: The Locust HTTP session.
        payload: Task-type record to create.  Defaults to
            :func:`~task_manager_perf.helpers.task_type_payload`.

    Returns:
        The created task type, or ``None`` when the body is not a JSON
        object with an ``id``.
    """
    if payload is None:
        payload = task_type_payload()

    with client.post(
        CREATE_PATH,
        json=payload,
        headers=json_headers(),
        name="/tasks [POST]",
        catch_response=True,
    ) as response:
        failures = []
        if response.status_code != 201:
            failures.append(f"Expected 201, got {response.status_code}")

        body = safe_json(response)
        created = body if isinstance(body, dict) else None
        if created is None:
            failures.append("Create response missing task type payload")
        elif "id" not in created:
            failures.append("Create response missing id")
            created = None

        if failures:
            _fail(response, "; ".join(failures))
        else:
            response.success()

    return created


def retrieve_task_type(
    client: Any,
    task_type: dict[str, Any],
    matcher: Matcher = structurally_equal,
) -> bool:
    """
    GET the task type by id and compare it with the created one.

    The status and the payload are checked independently; a failure
    message names every check that failed.
    """
    with client.get(
        _task_type_url(task_type),
        headers=json_headers(),
        name="/taskTypes/[id] [GET]",
        catch_response=True,
    ) as response:
        failures = []
        if response.status_code != 200:
            failures.append(f"Expected 200, got {response.status_code}")

        received = safe_json(response)
        if received is None:
            failures.append("Task type response is not valid JSON")
        elif not matcher(received, task_type):
            failures.append("Retrieved task type does not match the created one")

        if failures:
            _fail(response, "; ".join(failures))
            return False

        response.success()
        return True


def retrieve_task_type_page(
    client: Any,
    task_type: dict[str, Any],
    matcher: Matcher = structurally_equal,
    *,
    scan_all: bool = False,
    limit: int = 10,
) -> bool:
    """
    GET the task-type listing and check the created task type against it.

    By default only the first page is requested and judged by
    :func:`~task_manager_perf.matching.validate_page`, which lets a
    partial page pass without a presence check.  With *scan_all* the
    listing is walked with ``offset``/``limit`` until the task type is
    found or the collection is exhausted.

    Offsets are not stable while other virtual users create and delete
    their own task types: the listing can shift between two page
    fetches, so under concurrent load a full scan may skip the created
    task type and report a failure it would not report in isolation.

    Args:
        client: The Locust HTTP session.
        task_type: The created task type to look for.
        matcher: Comparison applied to each entry.
        scan_all: Walk every page instead of trusting a partial one.
        limit: Page size requested while scanning.

    Returns:
        ``True`` when the listing passed its checks.

    Raises:
        ValueError: If *scan_all* is set and *limit* is below 1.
    """
    if scan_all:
        check_page_limit(limit)

    offset = 0
    while True:
        params = {"offset": offset, "limit": limit} if scan_all else None
        with client.get(
            PAGE_PATH,
            params=params,
            headers=json_headers(),
            name="/tasks [GET]",
            catch_response=True,
        ) as response:
            failures = []
            if response.status_code != 200:
                failures.append(f"Expected 200, got {response.status_code}")

            page = safe_json(response)
            parts = page_parts(page)
            if parts is None:
                failures.append("Page response missing total or taskTypes")
                _fail(response, "; ".join(failures))
                return False

            total, entries = parts
            if not scan_all:
                if not validate_page(page, task_type, matcher):
                    failures.append("Created task type not found in page")
                if failures:
                    _fail(response, "; ".join(failures))
                    return False
                response.success()
                return True

            found = page_contains(entries, task_type, matcher)
            if not found and (not entries or offset + len(entries) >= total):
                failures.append(f"Created task type not found in {total} task types")

            if failures:
                _fail(response, "; ".join(failures))
                return False

            response.success()
            if found:
                return True

        offset += len(entries)
        logger.debug("Task type %s not on this page, continuing at offset %d", task_type["id"], offset)


def delete_task_type(client: Any, task_type: dict[str, Any]) -> bool:
    """DELETE the task type and expect ``204 No Content``."""
    with client.delete(
        _task_type_url(task_type),
        headers=json_headers(),
        name="/taskTypes/[id] [DELETE]",
        catch_response=True,
    ) as response:
        if response.status_code != 204:
            _fail(response, f"Expected 204, got {response.status_code}")
            return False

        response.success()
        return True


def confirm_task_type_deleted(client: Any, task_type: dict[str, Any]) -> bool:
    """GET a deleted task type and expect ``404 Not Found``."""
    with client.get(
        _task_type_url(task_type),
        headers=json_headers(),
        name="/taskTypes/[id] [GET deleted]",
        catch_response=True,
    ) as response:
        if response.status_code != 404:
            _fail(response, f"Expected 404 after delete, got {response.status_code}")
            return False

        response.success()
        return True


def run_task_type_lifecycle(
    client: Any,
    settings: type[Config] = Config,
    payload: dict[str, Any] | None = None,
) -> LifecycleResult:
    """
    Run create → retrieve → list → delete once.

    All checks are soft: a failed retrieve or listing still leads to the
    delete so the remote collection does not fill up with test data.
    Only a create that yields no id ends the iteration early, since no
    later request can be addressed without it.

    Args:
        client: The Locust HTTP session.
        settings: Configuration profile driving match mode, page scan
            and delete confirmation.
        payload: Task type to create; defaults to the fixed record.

    Returns:
        A :class:`LifecycleResult` describing each check group.
    """
    # Settle every setting before the create, so a bad value cannot strand
    # a task type on the server.
    matcher = get_matcher(settings.MATCH_MODE)
    scan_all = parse_page_scan(settings.PAGE_SCAN) == PAGE_SCAN_ALL
    if scan_all:
        check_page_limit(settings.PAGE_LIMIT)
    result = LifecycleResult()

    result.created = create_task_type(client, payload)
    if result.created is None:
        logger.warning("No task type created, skipping the rest of the iteration")
        return result

    result.retrieved = retrieve_task_type(client, result.created, matcher)
    result.listed = retrieve_task_type_page(
        client,
        result.created,
        matcher,
        scan_all=scan_all,
        limit=settings.PAGE_LIMIT,
    )
    result.deleted = delete_task_type(client, result.created)

    if settings.CONFIRM_DELETE and result.deleted:
        result.deletion_confirmed = confirm_task_type_deleted(client, result.created)

    return result
