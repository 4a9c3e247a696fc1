#!/usr/bin/env python3

import json
from dataclasses import dataclass
from typing import Any, Dict, Union


class EventPayloadError(ValueError):
    """Raised when the workflow event payload lacks a required field."""


@dataclass(frozen=True)
class OpenedEvent:
    """A pull request was opened; the whole PR diff is reviewed."""
    owner: str
    repo: str
    pull_number: int


@dataclass(frozen=True)
class SynchronizeEvent:
    """New commits were pushed; only the before..after diff is reviewed."""
    owner: str
    repo: str
    pull_number: int
    before: str
    after: str


@dataclass(frozen=True)
class UnsupportedEvent:
    owner: str
    repo: str
    pull_number: int
    action: str


ReviewEvent = Union[OpenedEvent, SynchronizeEvent, UnsupportedEvent]


def _require(payload: Dict[str, Any], *keys: str) -> Any:
    value: Any = payload
    for key in keys:
        if not isinstance(value, dict) or key not in value or value[key] is None:
            raise EventPayloadError(f"Event payload is missing '{'.'.join(keys)}'")
        value = value[key]
    return value


def parse_event(payload: Dict[str, Any]) -> ReviewEvent:
    """
    Validates the event payload and narrows it to the event kind.

    Args:
        payload: Decoded GitHub Actions event payload

    Returns:
        OpenedEvent, SynchronizeEvent or UnsupportedEvent

    Raises:
        EventPayloadError: If a required field is missing or has the wrong type
    """
    owner = _require(payload, "repository", "owner", "login")
    repo = _require(payload, "repository", "name")
    number = _require(payload, "number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise EventPayloadError(f"Event payload field 'number' must be an integer, got {number!r}")

    action = payload.get("action") or ""
    if action == "opened":
        return OpenedEvent(owner, repo, number)
    if action == "synchronize":
        return SynchronizeEvent(owner, repo, number, _require(payload, "before"), _require(payload, "after"))
    return UnsupportedEvent(owner, repo, number, action)


def load_event(event_path: str) -> ReviewEvent:
    """Reads the GitHub Actions event payload from disk."""
    with open(event_path, "r") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise EventPayloadError(f"Event payload at {event_path} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise EventPayloadError(f"Event payload at {event_path} is not a JSON object")
    return parse_event(payload)
