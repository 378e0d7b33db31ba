from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from .poses.catalog import Gender, parse_gender


class OnboardingProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    schema_version: int = Field(default=1, alias="schema")
    gender: Gender = Gender.UNSPECIFIED
    weight_kg: Optional[float] = Field(default=None, alias="weight")
    height_cm: Optional[float] = Field(default=None, alias="height")
    goals: list[str] = Field(default_factory=list)
    onboarding_completed: bool = False

    @field_validator("gender", mode="before")
    @classmethod
    def _normalize_gender(cls, value: object) -> Gender:
        return parse_gender(value)

    @field_validator("weight_kg", "height_cm", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        # Onboarding forms submit empty strings for skipped numeric answers.
        if value in ("", None):
            return None
        return value

    def loggable_weight(self) -> Optional[float]:
        if self.weight_kg is None or self.weight_kg <= 0:
            return None
        return float(self.weight_kg)
