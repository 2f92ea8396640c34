from __future__ import annotations

import uuid
from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


ApiProvider = Literal["openai", "anthropic"]


class Task(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    description: str = Field(..., min_length=1)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("description must not be blank")
        return v2


class ScheduleItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time: str
    task_description: str = Field(..., alias="taskDescription")
    details: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class PlannerResponse(BaseModel):
    schedule: List[ScheduleItem] = Field(default_factory=list)
    explanation: str

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ImageResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")
    is_mock: bool = Field(default=False, alias="isMock")


class ApiConfig(BaseModel):
    """Process-wide relay configuration.

    Built once by ``planner_ai.config.load_api_config`` and handed to the app
    factory; nothing reads the environment after that.
    """

    api_key: str = ""
    api_provider: ApiProvider = "openai"
    use_mock_responses: bool = False

    use_mock_images: bool = False
    image_api_key: str = ""

    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-3-opus-20240229"
    image_model: str = "dall-e-3"

    openai_base_url: str = "https://api.openai.com/v1"
    anthropic_base_url: str = "https://api.anthropic.com/v1"

    openai_timeout_s: float = Field(30.0, gt=0)
    anthropic_timeout_s: float = Field(30.0, gt=0)
    image_timeout_s: float = Field(30.0, gt=0)

    rate_limit_report_delay_s: float = Field(0.5, ge=0)

    def public_view(self) -> dict:
        # Never hand the raw key to the browser.
        return {
            "openaiApiKey": "configured" if self.api_key else "",
            "apiProvider": self.api_provider,
            "useMockResponses": self.use_mock_responses,
        }
