from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models import Profile


class AddProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    profile_name: str = Field(default="", alias="profileName")
    parameters: Dict[str, str] = Field(default_factory=dict)

    @field_validator("profile_name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> Any:
        # A null name is reported as "required" by the route, not as a schema error.
        return "" if value is None else value


class UpdateProfileRequest(BaseModel):
    parameters: Dict[str, str] = Field(default_factory=dict)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    profile_name: str = Field(alias="profileName")
    parameters: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(profile_name=profile.name, parameters=dict(profile.parameters))


class ValidationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    profile_name: str = Field(alias="profileName")
    action: str
    is_valid: bool = Field(alias="isValid")


class MessageResponse(BaseModel):
    message: str
