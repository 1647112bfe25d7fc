"""
Pydantic schemas mirroring the HTTP contract.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, validator

from ..compositor import RenderRequest


class RenderQuery(BaseModel):
    """
    Raw query string for the render endpoint.

    Colours left unset fall back to the configured defaults.
    """

    primary_muscles: str = ""
    secondary_muscles: str = ""
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    transparent: str = "0"
    model_config = ConfigDict(extra="ignore")

    @validator("primary_muscles", "secondary_muscles", "transparent", pre=True)
    def _coerce_str(cls, value: object) -> str:
        return "" if value is None else str(value)

    def to_request(self, *, default_primary: str, default_secondary: str) -> RenderRequest:
        return RenderRequest.from_strings(
            primary_muscles=self.primary_muscles,
            secondary_muscles=self.secondary_muscles,
            primary_color=self.primary_color or default_primary,
            secondary_color=self.secondary_color or default_secondary,
            transparent=self.transparent,
        )


class ErrorModel(BaseModel):
    error: str
    details: str = ""


class MuscleModel(BaseModel):
    id: str
    available: bool = False


class MuscleCollection(BaseModel):
    muscles: List[MuscleModel] = Field(default_factory=list)


class HealthModel(BaseModel):
    status: str = "ok"
    assets: bool = False
