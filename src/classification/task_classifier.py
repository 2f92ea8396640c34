from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Literal

# Buckets used by the offline scheduler. Order is precedence: a task lands in
# the first bucket whose keyword it contains.
ScheduleBucket = Literal["meal", "exercise", "work", "other"]

_BUCKET_KEYWORDS: Dict[str, tuple] = {
    "meal": ("eat", "lunch", "breakfast", "dinner"),
    "exercise": ("exercise", "gym", "workout"),
    "work": ("work", "meet", "call"),
}


@dataclass(frozen=True)
class TaskCategory:
    key: str
    name: str
    color: str  # hex, no leading '#'
    label: str  # short placeholder text


TASK_CATEGORIES: Dict[str, TaskCategory] = {
    "work": TaskCategory("work", "Work", "6366f1", "WORK"),
    "meeting": TaskCategory("meeting", "Meeting", "8b5cf6", "MEET"),
    "study": TaskCategory("study", "Study", "a78bfa", "STUDY"),
    "exercise": TaskCategory("exercise", "Exercise", "10b981", "GYM"),
    "food": TaskCategory("food", "Food", "f59e0b", "FOOD"),
    "shopping": TaskCategory("shopping", "Shopping", "ec4899", "SHOP"),
    "cleaning": TaskCategory("cleaning", "Cleaning", "06b6d4", "CLEAN"),
    "relaxation": TaskCategory("relaxation", "Relaxation", "3b82f6", "RELAX"),
    "sleep": TaskCategory("sleep", "Sleep", "6366f1", "SLEEP"),
    "travel": TaskCategory("travel", "Travel", "f97316", "TRAVEL"),
    "entertainment": TaskCategory("entertainment", "Entertainment", "ec4899", "FUN"),
    "social": TaskCategory("social", "Social", "f59e0b", "SOCIAL"),
    "health": TaskCategory("health", "Health", "14b8a6", "HEALTH"),
    "default": TaskCategory("default", "Task", "6366f1", "TASK"),
}

KEYWORD_TO_CATEGORY: Dict[str, str] = {
    # work
    "work": "work", "job": "work", "project": "work", "email": "work",
    "report": "work", "office": "work", "business": "work",
    # meetings
    "meeting": "meeting", "call": "meeting", "presentation": "meeting",
    "conference": "meeting", "zoom": "meeting", "interview": "meeting",
    # study
    "study": "study", "read": "study", "learn": "study", "homework": "study",
    "research": "study", "class": "study", "book": "study", "lecture": "study",
    # exercise
    "exercise": "exercise", "workout": "exercise", "gym": "exercise",
    "run": "exercise", "jog": "exercise", "fitness": "exercise",
    "sport": "exercise", "training": "exercise",
    # food
    "eat": "food", "lunch": "food", "dinner": "food", "breakfast": "food",
    "cook": "food", "meal": "food", "food": "food", "restaurant": "food",
    # shopping
    "shop": "shopping", "buy": "shopping", "purchase": "shopping",
    "store": "shopping", "mall": "shopping", "grocery": "shopping",
    "market": "shopping",
    # cleaning
    "clean": "cleaning", "laundry": "cleaning", "wash": "cleaning",
    "dishes": "cleaning", "tidy": "cleaning", "organize": "cleaning",
    "dust": "cleaning", "vacuum": "cleaning",
    # relaxation
    "relax": "relaxation", "rest": "relaxation", "break": "relaxation",
    "meditate": "relaxation", "yoga": "relaxation",
    # sleep
    "sleep": "sleep", "nap": "sleep", "bed": "sleep",
    # travel
    "travel": "travel", "trip": "travel", "drive": "travel",
    "commute": "travel", "flight": "travel", "journey": "travel",
    "vacation": "travel",
    # entertainment
    "play": "entertainment", "game": "entertainment", "movie": "entertainment",
    "watch": "entertainment", "tv": "entertainment", "show": "entertainment",
    "entertainment": "entertainment",
    # social
    "friend": "social", "party": "social", "visit": "social", "meet": "social",
    "date": "social", "family": "social",
    # health
    "doctor": "health", "appointment": "health", "medicine": "health",
    "therapy": "health", "dentist": "health", "checkup": "health",
}

_NON_LETTERS = re.compile(r"[^a-z]")


class TaskClassifier:
    """Keyword heuristics over task descriptions; no model involved."""

    def bucket(self, description: str) -> ScheduleBucket:
        text = description.lower()
        for bucket, keywords in _BUCKET_KEYWORDS.items():
            if any(k in text for k in keywords):
                return bucket  # type: ignore[return-value]
        return "other"

    def category(self, description: str) -> TaskCategory:
        """Whole-word keyword match first, then any keyword as a substring."""
        if not description:
            return TASK_CATEGORIES["default"]

        text = description.lower()
        for word in text.split():
            key = KEYWORD_TO_CATEGORY.get(_NON_LETTERS.sub("", word))
            if key:
                return TASK_CATEGORIES[key]

        for keyword, key in KEYWORD_TO_CATEGORY.items():
            if keyword in text:
                return TASK_CATEGORIES[key]

        return TASK_CATEGORIES["default"]
