"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from hexdiff.models.view import ViewSettings
from hexdiff.services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    view: ViewSettings | None = None
    search: dict | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    view: dict
    search: dict
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(
        view=config.get("view", {}),
        search=config.get("search", {}),
        server=config.get("server", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    if request.view is not None:
        # Only the keys the client sent replace stored values
        update = request.view.model_dump(by_alias=True, exclude_unset=True)
        current_config["view"] = {**current_config.get("view", {}), **update}
    if request.search:
        current_config["search"] = {**current_config.get("search", {}), **request.search}
    if request.server:
        current_config["server"] = {**current_config.get("server", {}), **request.server}

    config_manager.save_config(current_config)

    return {"status": "success", "message": "Configuration updated"}
