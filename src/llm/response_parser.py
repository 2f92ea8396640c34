from __future__ import annotations

import logging
import re
from typing import Optional

from planner_ai.errors import ParseError
from planner_ai.models import PlannerResponse, ScheduleItem

logger = logging.getLogger(__name__)

DEFAULT_EXPLANATION = "Schedule optimized based on task requirements."

_EXPLANATION_RE = re.compile(r"EXPLANATION:\s*(.*?)(?=SCHEDULE:|$)", re.IGNORECASE | re.DOTALL)
_SCHEDULE_RE = re.compile(r"SCHEDULE:\s*(.*)$", re.IGNORECASE | re.DOTALL)

# "9:00 AM: Task", "14:30 - Task", "- 7am Task"
_LINE_RE = re.compile(
    r"^\s*(?:[-*•]\s*)?"
    r"(?P<time>\d{1,2}(?::\d{2})?(?!\d)(?:\s*[AP]\.?M\.?(?![A-Z]))?)"
    r"\s*(?:-|:)?\s*"
    r"(?P<desc>.*?)\s*$",
    re.IGNORECASE,
)


def parse_schedule_line(line: str) -> Optional[ScheduleItem]:
    """Return the item on ``line`` or None when it has no time token or text."""
    match = _LINE_RE.match(line)
    if not match:
        return None

    description = match.group("desc")
    if not description:
        return None

    time_token = " ".join(match.group("time").split())
    return ScheduleItem(time=time_token, task_description=description)


def parse_schedule_response(text: str) -> PlannerResponse:
    """Best-effort parse of an EXPLANATION/SCHEDULE reply.

    Lines without a leading time token are skipped. A missing SCHEDULE
    section gives an empty schedule; deciding whether that is acceptable is
    left to the caller.
    """
    try:
        m = _EXPLANATION_RE.search(text)
        explanation = (m.group(1).strip() if m else "") or DEFAULT_EXPLANATION

        m = _SCHEDULE_RE.search(text)
        lines = m.group(1).strip().splitlines() if m else []

        items = []
        for line in lines:
            if not line.strip():
                continue
            item = parse_schedule_line(line)
            if item is None:
                logger.debug(f"Skipping schedule line without time token: {line!r}")
                continue
            items.append(item)

        return PlannerResponse(schedule=items, explanation=explanation)
    except Exception as e:
        logger.error(f"Error parsing LLM response: {e}")
        raise ParseError(
            "Failed to parse the AI response. Please try again.", str(e)
        ) from e
