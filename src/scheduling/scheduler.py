from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence

from classification.task_classifier import TaskClassifier
from planner_ai.models import PlannerResponse, ScheduleItem, Task

MOCK_EXPLANATION = (
    "Your optimized schedule balances productivity with wellbeing. Work tasks are "
    "distributed to maximize focus periods, while meals and exercise are strategically "
    "placed to maintain energy throughout the day. Personal tasks are arranged to "
    "create a balanced daily flow."
)

DAY_START_HOUR = 9


def format_hour(hour: int) -> str:
    """24h hour -> '9:00 AM' style, wrapping past midnight."""
    h = hour % 24
    suffix = "PM" if h >= 12 else "AM"
    h12 = h % 12 or 12
    return f"{h12}:00 {suffix}"


class Scheduler:
    """Offline stand-in for the model: keyword buckets and increasing clock times.

    ``rng`` only drives the 1-2 hour gap between tasks; pass a seeded
    ``random.Random`` for reproducible output.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        classifier: Optional[TaskClassifier] = None,
    ):
        self.rng = rng or random.Random()
        self.classifier = classifier or TaskClassifier()

    def order(self, tasks: Sequence[Task]) -> List[Task]:
        meals: List[Task] = []
        exercise: List[Task] = []
        work: List[Task] = []
        other: List[Task] = []
        buckets = {"meal": meals, "exercise": exercise, "work": work, "other": other}
        for t in tasks:
            buckets[self.classifier.bucket(t.description)].append(t)

        def has(t: Task, word: str) -> bool:
            return word in t.description.lower()

        breakfast = [t for t in meals if has(t, "breakfast")]
        lunch = [t for t in meals if t not in breakfast and has(t, "lunch")]
        later_meals = [t for t in meals if t not in breakfast and t not in lunch]

        work_split = math.ceil(len(work) / 2)
        first_third = math.ceil(len(other) / 3)
        second_third = math.ceil(2 * len(other) / 3)

        morning = breakfast + work[:work_split] + other[:first_third]
        midday = lunch + exercise + work[work_split:] + other[first_third:second_third]
        evening = later_meals + other[second_third:]

        return morning + midday + evening

    def schedule(self, tasks: Sequence[Task]) -> PlannerResponse:
        items = []
        hour = DAY_START_HOUR
        for t in self.order(tasks):
            items.append(ScheduleItem(time=format_hour(hour), task_description=t.description))
            hour += 1 + self.rng.randint(0, 1)

        return PlannerResponse(schedule=items, explanation=MOCK_EXPLANATION)
