from __future__ import annotations
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    #: Display name used in error titles and logs.
    name: str = "LLM"
    timeout_s: float = 30.0

    @abstractmethod
    async def generate(self, *, system: str, user: str) -> str:
        """
        Must return the model output as TEXT (LLMClient parses the schedule out of it).
        Failures are raised as planner_ai.errors.PlannerError subclasses.
        """
        raise NotImplementedError
