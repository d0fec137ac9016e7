"""
Equivalence checks between a created task type and what the API returns.

Two comparison strategies are available:

- :func:`structurally_equal` — deep equality over decoded JSON, blind to
  key order and (by default) to array order.  This is the default.
- :func:`characters_equal` — compares the sorted characters of the
  compact JSON serialisation.  It is kept so results can be compared
  against older runs, but it is a weak check: two different objects
  whose serialisations use the same characters compare equal, e.g.
  ``{"name": "ab", "description": "ba"}`` and
  ``{"name": "ba", "description": "ab"}``.

:func:`validate_page` applies the listing policy on top of a chosen
comparison.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

from task_manager_perf.config import MATCH_CHARACTERS, MATCH_STRUCTURAL

Matcher = Callable[[Any, Any], bool]


def structurally_equal(received: Any, expected: Any, *, ignore_order: bool = True) -> bool:
    """
    Compare two decoded JSON values for deep equality.

    Args:
        received: Value returned by the API.
        expected: Reference value.
        ignore_order: Treat arrays as multisets instead of sequences.

    Returns:
        ``True`` when both values describe the same document.
    """
    if isinstance(received, dict) and isinstance(expected, dict):
        if received.keys() != expected.keys():
            return False
        return all(
            structurally_equal(received[key], expected[key], ignore_order=ignore_order)
            for key in received
        )

    if isinstance(received, list) and isinstance(expected, list):
        if len(received) != len(expected):
            return False
        if not ignore_order:
            return all(
                structurally_equal(left, right, ignore_order=False)
                for left, right in zip(received, expected)
            )
        # Equality is transitive, so greedy pairing is enough for a multiset match.
        remaining = list(expected)
        for item in received:
            for index, candidate in enumerate(remaining):
                if structurally_equal(item, candidate, ignore_order=True):
                    del remaining[index]
                    break
            else:
                return False
        return True

    # JSON keeps true and 1 apart even though Python does not.
    if isinstance(received, bool) or isinstance(expected, bool):
        return type(received) is type(expected) and received == expected

    return received == expected


def character_signature(value: Any) -> str:
    """Return the sorted characters of the compact JSON form of *value*."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return "".join(sorted(text))


def characters_equal(received: Any, expected: Any) -> bool:
    """Compare two values by their character signatures."""
    return character_signature(received) == character_signature(expected)


_MATCHERS: dict[str, Matcher] = {
    MATCH_STRUCTURAL: structurally_equal,
    MATCH_CHARACTERS: characters_equal,
}


def get_matcher(mode: str) -> Matcher:
    """
    Return the comparison function for a match mode.

    Raises:
        ValueError: If *mode* is not a known match mode.
    """
    try:
        return _MATCHERS[mode]
    except KeyError:
        known = ", ".join(sorted(_MATCHERS))
        raise ValueError(f"Unknown match mode {mode!r}; expected one of: {known}") from None


def page_contains(entries: Iterable[Any], reference: Any, matcher: Matcher = structurally_equal) -> bool:
    """Return ``True`` when any entry matches *reference*."""
    return any(matcher(entry, reference) for entry in entries)


def page_parts(page: Any) -> tuple[int, list[Any]] | None:
    """
    Split a task-type page into ``(total, taskTypes)``.

    Returns ``None`` when the page is not an object or either field is
    missing or of the wrong type.
    """
    if not isinstance(page, dict):
        return None
    total = page.get("total")
    entries = page.get("taskTypes")
    if isinstance(total, bool) or not isinstance(total, int):
        return None
    if not isinstance(entries, list):
        return None
    return total, entries


def validate_page(page: Any, reference: Any, matcher: Matcher = structurally_equal) -> bool:
    """
    Decide whether a listing page is consistent with the created task type.

    - An empty collection fails: it cannot hold the created task type.
    - When ``total`` exceeds the page length the page passes without a
      presence check, since the task type may sit on another page.
    - Otherwise the whole collection is on this page and one entry must
      match *reference*.
    """
    parts = page_parts(page)
    if parts is None:
        return False

    total, entries = parts
    if total == 0:
        return False
    if total > len(entries):
        return True
    return page_contains(entries, reference, matcher)
