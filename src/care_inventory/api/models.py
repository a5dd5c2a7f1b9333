"""Pydantic models for API request payloads."""

from datetime import date as date_type

from pydantic import BaseModel, Field

from care_inventory.domain.items import RemainingHandling


class ConsumptionRequest(BaseModel):
    """Staff record of serving part of a care item."""

    served_quantity: float = Field(gt=0)
    consumption_rate: float = Field(ge=0.0, le=1.0)
    remaining_handling: RemainingHandling | None = None
    recorded_by: str = Field(min_length=1)
    note: str | None = None


class SkipDateRequest(BaseModel):
    """Family request to mark a day as "no service"."""

    date: date_type
    reason: str | None = None
    created_by: str = "family"
