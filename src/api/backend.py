import asyncio
import logging
from typing import Optional, Sequence

import httpx

from imaging.service import ImageService
from llm.llm_client import LLMClient
from planner_ai.errors import InvalidRequestError
from planner_ai.models import ApiConfig, PlannerResponse, Task
from scheduling.scheduler import Scheduler

logger = logging.getLogger(__name__)


class BackendAPI:
    """Central orchestration component of the planner relay."""

    def __init__(
        self,
        config: ApiConfig,
        llm_client: Optional[LLMClient] = None,
        scheduler: Optional[Scheduler] = None,
        image_service: Optional[ImageService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.llm_client = llm_client or LLMClient.from_config(config, transport=transport)
        self.scheduler = scheduler or Scheduler()
        self.image_service = image_service or ImageService.from_config(config, transport=transport)

    async def generate_schedule(
        self, tasks: Sequence[Task], include_images: bool = False
    ) -> PlannerResponse:
        """Turn a task list into a schedule, by model or by the offline heuristic."""
        if not tasks:
            raise InvalidRequestError("Tasks array is required and must not be empty")

        # 1. Mock mode never touches the network
        if self.config.use_mock_responses:
            logger.info("Using mock schedule response")
            response = self.scheduler.schedule(tasks)
        # 2. Exactly one upstream call otherwise
        else:
            response = await self.llm_client.generate_schedule(tasks)

        logger.info(f"Generated schedule with {len(response.schedule)} items")

        # 3. Optional illustrations, best effort
        if include_images and response.schedule:
            response = await self.attach_images(response)

        return response

    async def attach_images(self, response: PlannerResponse) -> PlannerResponse:
        descriptions = list(dict.fromkeys(item.task_description for item in response.schedule))
        urls = await asyncio.gather(
            *(self.image_service.get_task_image(d) for d in descriptions)
        )
        # Results are keyed by description; completion order does not matter.
        by_description = dict(zip(descriptions, urls))

        items = [
            item.model_copy(update={"image_url": by_description[item.task_description]})
            for item in response.schedule
        ]
        return response.model_copy(update={"schedule": items})
