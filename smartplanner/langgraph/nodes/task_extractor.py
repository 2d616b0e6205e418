"""Extraction of structured task fields from natural-language input.

Each field is pulled out by its own pass, in a fixed order. A pass removes
the text it claimed before the next pass runs, so later passes never
re-match it:

1. tags (``#word``)
2. priority (``!high``, ``!med``, ``!medium``, ``!low``)
3. duration (``30m``, ``2h``, ``45min``, ``1hr``)
4. date (today, tomorrow, next week, or the next weekday by name)
5. time (``2pm``, ``14:00``)

Whatever is left, with whitespace collapsed, becomes the task title.
"""

import logging
import re
from datetime import date, timedelta

from ...config import (
    DURATION_PATTERN,
    PRIORITY_PATTERN,
    STRICT_TIME_PATTERN,
    TAG_PATTERN,
    TASK_PARSER_CONFIG,
    TIME_PATTERN,
    WEEKDAYS,
)
from ...models.capture import ParsedTask
from ...utils.error_handling import create_error_response
from ..state import CaptureState

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_RELATIVE_DATES: list[tuple[re.Pattern, int]] = [
    (re.compile(r"\btoday\b", re.IGNORECASE), 0),
    (re.compile(r"\btomorrow\b", re.IGNORECASE), 1),
    (re.compile(r"\bnext week\b", re.IGNORECASE), 7),
]
_WEEKDAY_PATTERN = re.compile(rf"\b({'|'.join(WEEKDAYS)})\b", re.IGNORECASE)


def _cut(text: str, match: re.Match) -> str:
    """Remove the matched span from ``text``."""
    return (text[: match.start()] + text[match.end():]).strip()


def extract_tags(text: str) -> tuple[list[str], str]:
    """Pull every ``#tag`` out of the text, keeping their order."""
    tags = TAG_PATTERN.findall(text)
    if not tags:
        return [], text
    return tags, TAG_PATTERN.sub("", text).strip()


def extract_priority(text: str) -> tuple[str | None, str]:
    """Pull the first priority marker out of the text."""
    match = PRIORITY_PATTERN.search(text)
    if not match:
        return None, text
    priority = match.group(1).lower()
    if priority == "med":
        priority = "medium"
    return priority, _cut(text, match)


def extract_duration(text: str) -> tuple[int | None, str]:
    """Pull the first duration out of the text, in minutes."""
    match = DURATION_PATTERN.search(text)
    if not match:
        return None, text
    amount = int(match.group(1))
    unit = match.group(2).lower()
    minutes = amount * 60 if unit.startswith("h") else amount
    return minutes, _cut(text, match)


def extract_date(text: str, today: date | None = None) -> tuple[date | None, str]:
    """Resolve the first date keyword in the text.

    today, tomorrow and next week are checked before weekday names. A
    weekday always resolves to its next occurrence strictly after today,
    so naming today's weekday means a week from now.
    """
    today = today or date.today()

    for pattern, days in _RELATIVE_DATES:
        match = pattern.search(text)
        if match:
            return today + timedelta(days=days), _cut(text, match)

    match = _WEEKDAY_PATTERN.search(text)
    if not match:
        return None, text

    target = WEEKDAYS.index(match.group(1).lower())
    days_ahead = target - today.weekday()
    if days_ahead <= 0:
        days_ahead += 7
    return today + timedelta(days=days_ahead), _cut(text, match)


def extract_time(text: str, require_meridiem: bool | None = None) -> tuple[str | None, str]:
    """Pull the first clock time out of the text as display text.

    By default bare one or two digit numbers also count as times; set
    ``TASK_PARSER_CONFIG["require_meridiem"]`` to only accept ``2pm`` or
    ``14:00`` style times.
    """
    if require_meridiem is None:
        require_meridiem = TASK_PARSER_CONFIG["require_meridiem"]
    pattern = STRICT_TIME_PATTERN if require_meridiem else TIME_PATTERN

    match = pattern.search(text)
    if not match:
        return None, text
    return match.group(0), _cut(text, match)


def parse_task_input(text: str, today: date | None = None) -> ParsedTask:
    """Parse natural language input into task fields.

    Args:
        text: Raw task text, e.g. ``"Call Bob tomorrow 2pm 30m !high #sales"``
        today: Reference date for relative dates (defaults to today)

    Returns:
        ParsedTask with the extracted fields and the cleaned title

    """
    tags, remaining = extract_tags(text)
    priority, remaining = extract_priority(remaining)
    duration, remaining = extract_duration(remaining)
    task_date, remaining = extract_date(remaining, today)
    task_time, remaining = extract_time(remaining)

    return ParsedTask(
        text=_WHITESPACE.sub(" ", remaining).strip(),
        date=task_date,
        time=task_time,
        duration=duration,
        priority=priority,
        tags=tags,
    )


def extract_task_fields(state: CaptureState) -> dict:
    """Parse the capture input as a task and build its commit payload."""
    if state.get("error"):
        return {}

    try:
        parsed = parse_task_input(state.get("input_text") or "", state.get("today"))
    except Exception as e:
        logger.error(f"Task extraction failed: {e}")
        return create_error_response(e, parsed_task=None, task_payload=None)

    logger.debug(f"Parsed task '{parsed.text}' with tags {parsed.tags}")
    recent_items = state.get("recent_items")
    if recent_items is not None:
        recent_items.remember_task(parsed)

    return {
        "parsed_task": parsed.to_dict(),
        "task_payload": parsed.to_task_payload(),
    }
