from fastapi import Request

from domain.ports import UserRepository
from infrastructure.config import Settings
from infrastructure.container import container


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository() -> UserRepository:
    return container.get("user_repository")
