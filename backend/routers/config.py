"""Configuration API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from services.config_manager import ConfigManager, RenderSettings

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update render settings; omitted fields keep their value"""

    context_lines: int | None = Field(default=None, ge=0)
    max_diff_input_chars: int | None = Field(default=None, gt=0)
    default_file_label: str | None = Field(default=None, min_length=1)


class ConfigResponse(BaseModel):
    """Configuration response"""

    render: RenderSettings


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current render settings"""
    return ConfigResponse(render=ConfigManager.get_instance().render_settings())


@router.put("", response_model=ConfigResponse)
async def update_config(request: ConfigUpdateRequest) -> ConfigResponse:
    """Update render settings"""
    config_manager = ConfigManager.get_instance()
    current = config_manager.render_settings()
    updated = current.model_copy(update=request.model_dump(exclude_none=True))

    try:
        config_manager.save_config({"render": updated.model_dump(by_alias=True)})
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ConfigResponse(render=config_manager.render_settings())
