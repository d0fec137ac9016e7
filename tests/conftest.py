"""
Shared pytest fixtures for the task manager performance suite.

Provides fake Locust responses and an HTTP session stand-in so the
scenario steps can be exercised without a network, plus data fixtures
for task types.

Key Concepts Demonstrated:
- Stub objects that honour Locust's ``catch_response`` protocol
- Factory fixtures built on Faker for varied task-type payloads
- Environment overrides applied before the package under test is
  imported
"""

from __future__ import annotations

# gevent patches ssl when locust is imported; that has to happen before
# requests (or anything else) imports ssl during collection.
import locust  # noqa: F401

import os
import uuid
from typing import Any

import pytest
from faker import Faker

# Select the testing profile before any task_manager_perf import.
os.environ["PERF_PROFILE"] = "testing"
os.environ["TEST_TASK_MANAGER_API"] = "http://task-manager.test"

fake = Faker()

# Sentinel body for responses that are not JSON at all.
NOT_JSON = object()


class FakeResponse:
    """Stand-in for Locust's ``ResponseContextManager``."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body
        self.outcome: str | None = None
        self.message: str | None = None

    def json(self) -> Any:
        if self._body is NOT_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body

    def success(self) -> None:
        self.outcome = "success"
        self.message = None

    def failure(self, message: str) -> None:
        self.outcome = "failure"
        self.message = message

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *_exc: Any) -> bool:
        return False


class FakeClient:
    """
    Stand-in for ``locust.clients.HttpSession``.

    Responses are registered per ``(method, path)`` and served in order;
    the last one registered keeps being served once the queue is down
    to a single entry.  Every call is recorded in ``calls``.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[FakeResponse]] = {}
        self.calls: list[dict[str, Any]] = []

    def add(self, method: str, path: str, *responses: FakeResponse) -> "FakeClient":
        self.routes.setdefault((method, path), []).extend(responses)
        return self

    def request(self, method: str, path: str, **kwargs: Any) -> FakeResponse:
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        self.calls.append({"method": method, "path": path, "response": response, **kwargs})
        return response

    def get(self, path: str, **kwargs: Any) -> FakeResponse:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> FakeResponse:
        return self.request("POST", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> FakeResponse:
        return self.request("DELETE", path, **kwargs)

    def responses_for(self, method: str, path: str) -> list[FakeResponse]:
        return [call["response"] for call in self.calls if call["method"] == method and call["path"] == path]


@pytest.fixture
def fake_client() -> FakeClient:
    """Provide an empty fake HTTP session."""
    return FakeClient()


@pytest.fixture
def created_task_type() -> dict[str, Any]:
    """
    Provide the task type the server returns for the default payload.

    Includes server-added fields so comparisons exercise more than the
    submitted keys.
    """
    return {
        "id": "15837028-645a-4a55-9aaf-ceb846439eba",
        "name": "k6 task type test",
        "transactions": [{"label": "k6_transaction_label"}],
        "_creationTs": 1600000000,
        "_lastUpdateTs": 1600000000,
    }


@pytest.fixture
def task_type_factory():
    """
    Factory fixture for created task types with random content.

    Example:
        def test_something(task_type_factory):
            task_type = task_type_factory(labels=["accept", "refuse"])
    """

    def _create(name: str | None = None, labels: list[str] | None = None) -> dict[str, Any]:
        return {
            "id": str(uuid.uuid4()),
            "name": name or fake.sentence(nb_words=3),
            "description": fake.paragraph(),
            "transactions": [
                {"label": label}
                for label in (labels if labels is not None else fake.words(nb=3, unique=True))
            ],
        }

    return _create
