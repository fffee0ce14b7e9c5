# skintriage/models/practitioner.py

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class PractitionerLocation(Coordinate):
    address: Optional[str] = None


class PractitionerRecord(BaseModel):
    """A doctor profile as read from the practitioner registry."""
    model_config = ConfigDict(validate_by_name=True, serialize_by_alias=True)

    id: str = Field(..., alias="user_id")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    specialties: List[str] = Field(default_factory=list)
    years_experience: int = Field(default=0, ge=0)
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: PractitionerLocation
    is_verified: bool = False
    is_active: bool = True

    @field_validator("specialties", "years_experience", "is_verified", "is_active", mode="before")
    @classmethod
    def null_to_default(cls, value, info: ValidationInfo):
        # Nullable registry columns come back as null; treat that as unset
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class RankedPractitioner(PractitionerRecord):
    distance_km: float = Field(..., ge=0, alias="distance")
    is_synthetic: bool = False


class FallbackPolicy(str, Enum):
    DISABLED = "disabled"
    SYNTHETIC_FILL = "synthetic_fill"
