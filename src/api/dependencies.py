from fastapi import Request

from api.backend import BackendAPI
from imaging.service import ImageService
from planner_ai.models import ApiConfig


def get_api_config(request: Request) -> ApiConfig:
    return request.app.state.api_config


def get_backend(request: Request) -> BackendAPI:
    return request.app.state.backend


def get_image_service(request: Request) -> ImageService:
    return request.app.state.backend.image_service
