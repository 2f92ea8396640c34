"""Prompt text sent to the schedule providers.

The wording below is part of the contract with the model: the parser relies on
the EXPLANATION/SCHEDULE layout it asks for. Treat edits as API changes.
"""
from __future__ import annotations

from typing import Iterable

from planner_ai.models import Task

SYSTEM_PROMPT = (
    "You are a helpful assistant that helps users organize and optimize "
    "their daily tasks into a schedule."
)

_INSTRUCTIONS = """
Please create an optimized daily schedule with specific times and a brief explanation of your reasoning. 

When formulating task descriptions in the schedule, be sure to use descriptive words that indicate the category of the task, such as:
- For eating tasks, include words like "breakfast", "lunch", "dinner", "food", etc.
- For work-related tasks, include words like "work", "meeting", "email", etc.
- For fitness tasks, include words like "workout", "exercise", "gym", "run", etc.
- For reading or studying, include words like "read", "study", "learning", etc.
- For shopping, include words like "shop", "buy", "purchase", etc.

Format your response exactly like this:

EXPLANATION: [Your explanation of why you ordered the tasks this way]

SCHEDULE:
[Time]: [Task description with category-specific words]
[Time]: [Task description with category-specific words]
...
"""


def build_schedule_prompt(tasks: Iterable[Task]) -> str:
    bullets = "\n".join(f"- {t.description}" for t in tasks)
    return f"\nGiven these tasks:\n{bullets}\n{_INSTRUCTIONS}"
