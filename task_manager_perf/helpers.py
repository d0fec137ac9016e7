"""
Helper utilities for the task-type load scenario.

Provides the payload factory, the JSON header set and a tolerant JSON
decoder that every step relies on.  Keeping these in one module means
the request shape can be adjusted in one place.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

DEFAULT_TASK_TYPE_NAME = "k6 task type test"
DEFAULT_TRANSACTION_LABELS = ("k6_transaction_label",)


def safe_json(response: Any) -> Any | None:
    """
    Return the decoded response body, or ``None`` if it is not JSON.

    Responses may carry non-JSON bodies (e.g. on 5xx errors or gateway
    timeouts).  Decoding through this wrapper keeps ``ValueError`` out
    of the steps, so a bad body becomes a failed check instead of an
    aborted iteration.
    """
    try:
        return response.json()
    except ValueError:
        return None


def json_headers() -> dict[str, str]:
    """Build the headers sent with every JSON request."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def task_type_payload(
    name: str = DEFAULT_TASK_TYPE_NAME,
    labels: Sequence[str] = DEFAULT_TRANSACTION_LABELS,
    description: str | None = None,
) -> dict[str, Any]:
    """
    Build a task-type create payload.

    With no arguments this returns the fixed record the scenario has
    always posted, so runs stay comparable with historical results.

    Args:
        name: Display name of the task type.
        labels: One transaction descriptor is emitted per label, in order.
        description: Optional human readable description.

    Returns:
        A JSON-serialisable dictionary matching the task-type schema.
    """
    payload: dict[str, Any] = {"name": name}
    if description is not None:
        payload["description"] = description
    payload["transactions"] = [{"label": label} for label in labels]
    return payload
