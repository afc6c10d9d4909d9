"""Config-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from confighub.models.config import AudioDriverType, DirectXHubType

NULLABLE_DETAIL_FIELDS = frozenset({"language", "env_vars", "command_line"})


class ConfigDetailsIn(BaseModel):
    """Complete set of tunable fields supplied when a config is created."""

    language: str | None = None
    game_resolution: str = Field(..., min_length=1, description="Game resolution, e.g. 1280x720")
    directx_hub: DirectXHubType
    env_vars: str | None = None
    command_line: str | None = None
    compat_layer: str = Field(..., min_length=1)
    gpu_driver: str = Field(..., min_length=1)
    audio_driver: AudioDriverType
    dxvk_version: str = Field(..., min_length=1)
    vkd3d_version: str = Field(..., min_length=1)
    cpu_translator: str = Field(..., min_length=1)
    cpu_core_limit: str = Field(..., min_length=1)
    vram_limit: str = Field(..., min_length=1)
    components: list[str] = Field(default_factory=list)


class ConfigDetailsPatch(BaseModel):
    """Partial detail update.

    Omitted fields are left unchanged. ``null`` clears a nullable field and is
    rejected for every other field.
    """

    language: str | None = None
    game_resolution: str | None = Field(None, min_length=1)
    directx_hub: DirectXHubType | None = None
    env_vars: str | None = None
    command_line: str | None = None
    compat_layer: str | None = Field(None, min_length=1)
    gpu_driver: str | None = Field(None, min_length=1)
    audio_driver: AudioDriverType | None = None
    dxvk_version: str | None = Field(None, min_length=1)
    vkd3d_version: str | None = Field(None, min_length=1)
    cpu_translator: str | None = Field(None, min_length=1)
    cpu_core_limit: str | None = Field(None, min_length=1)
    vram_limit: str | None = Field(None, min_length=1)
    components: list[str] | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> ConfigDetailsPatch:
        for name in self.model_fields_set:
            if name not in NULLABLE_DETAIL_FIELDS and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ConfigCreate(BaseModel):
    """Schema for creating a new config (version 1)."""

    game_id: int
    gamehub_version: str = Field(..., min_length=1)
    video_url: HttpUrl | None = None
    tags: list[str] = Field(default_factory=list)
    details: ConfigDetailsIn


class ConfigChanges(BaseModel):
    """Partial update of a config's top-level fields and details."""

    gamehub_version: str | None = Field(None, min_length=1)
    video_url: HttpUrl | None = None
    tags: list[str] | None = None
    details: ConfigDetailsPatch | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> ConfigChanges:
        for name in ("gamehub_version", "tags", "details"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ConfigUpdate(ConfigChanges):
    """PATCH body: partial changes plus the mandatory change summary."""

    change_summary: str = Field(..., description="Human-authored summary of the edit")


class ConfigDetailsOut(BaseModel):
    """Live tunable fields of a config."""

    language: str | None
    game_resolution: str
    directx_hub: DirectXHubType
    env_vars: str | None
    command_line: str | None
    compat_layer: str
    gpu_driver: str
    audio_driver: AudioDriverType
    dxvk_version: str
    vkd3d_version: str
    cpu_translator: str
    cpu_core_limit: str
    vram_limit: str
    components: list[str]

    model_config = ConfigDict(from_attributes=True)


class VersionAuthor(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class ConfigVersionOut(BaseModel):
    """One immutable entry of a config's history."""

    id: int
    config_id: int
    user_id: int
    version_number: int
    config_snapshot: dict[str, Any]
    change_summary: str
    created_at: datetime
    updated_by: VersionAuthor | None = None

    model_config = ConfigDict(from_attributes=True)


class GameRef(BaseModel):
    id: int
    name: str
    image_url: str

    model_config = ConfigDict(from_attributes=True)


class ConfigSummary(BaseModel):
    """Config as shown in listings."""

    id: int
    game_id: int
    user_id: int
    gamehub_version: str
    video_url: str | None
    is_legacy: bool
    is_hidden: bool
    upvotes: int
    downvotes: int
    slug: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime
    game: GameRef | None = None

    model_config = ConfigDict(from_attributes=True)


class ConfigOut(ConfigSummary):
    """Config with its live details and version history, newest first."""

    details: ConfigDetailsOut | None = None
    versions: list[ConfigVersionOut] = Field(default_factory=list)


class ConfigListResponse(BaseModel):
    configs: list[ConfigSummary]
    total: int


class RevertResponse(BaseModel):
    message: str = "Configuration reverted successfully"
    config: ConfigOut
