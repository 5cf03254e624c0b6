"""
Pydantic models for the trial license provider API.

This module centralizes response models shared across the routers.
"""

from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from license import License

# API Version Constants
API_VERSION = "1"


class LicenseModel(BaseModel):
    """A trial license as served to clients (camelCase keys)."""
    model_config = ConfigDict(populate_by_name=True)

    key: str
    generation_date: datetime = Field(..., alias="generationDate")
    expiration_date: datetime = Field(..., alias="expirationDate")
    initial_validity_days: int = Field(..., alias="initialValidityDays")
    nb_valid_days: int = Field(..., alias="nbValidDays")
    valid: bool

    @classmethod
    def from_license(cls, lic: License) -> "LicenseModel":
        return cls.model_validate(lic.to_dict())


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    timestamp: str
    catalog: Dict[str, Any]


class APIErrorResponse(BaseModel):
    """Flattened structured error body."""
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
