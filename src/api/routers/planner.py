import logging
import time
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from api.backend import BackendAPI
from api.dependencies import get_backend, get_image_service
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS, TASKS_SCHEDULED_TOTAL
from imaging.service import ImageService
from planner_ai.models import Task

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


class ScheduleRequestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tasks: List[Task] = Field(default_factory=list)
    include_images: bool = Field(False, alias="includeImages")


class ImageRequestIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_description: str = Field("", alias="taskDescription")


def _record(endpoint: str, status: str, start: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)


@router.post("/generate-schedule")
async def generate_schedule(
    payload: ScheduleRequestIn,
    backend: BackendAPI = Depends(get_backend),
) -> dict:
    start = time.time()
    status = "error"
    logger.info(f"Received schedule request with {len(payload.tasks)} tasks")
    try:
        response = await backend.generate_schedule(
            payload.tasks, include_images=payload.include_images
        )
        status = "ok"
    finally:
        _record("/api/generate-schedule", status, start)

    TASKS_SCHEDULED_TOTAL.inc(len(response.schedule))
    return response.to_wire()


@router.post("/generate-image")
async def generate_image(
    payload: ImageRequestIn,
    images: ImageService = Depends(get_image_service),
) -> dict:
    start = time.time()
    status = "error"
    try:
        result = await images.generate_image(payload.task_description)
        status = "ok"
    finally:
        _record("/api/generate-image", status, start)

    return result.model_dump(by_alias=True)
