"""
Pydantic schemas for MeasuredWork
"""

from pydantic import ConfigDict, Field
from typing import Optional

from models import EntityBase, MeasuredWork, MeasurementUnit


class MeasuredWorkCreate(EntityBase):
    """Schema for adding a measured work to a cost model"""
    element_code: str = Field(min_length=1)
    element_name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=500)
    quantity: float = Field(ge=0, strict=True, allow_inf_nan=False)
    unit: MeasurementUnit
    unit_rate: float = Field(ge=0, strict=True, allow_inf_nan=False)
    notes: str = Field(None, max_length=500)


class MeasuredWorkUpdate(EntityBase):
    """
    Schema for updating a measured work.

    Every field is optional, but a field that is sent must be valid: null is
    only accepted for notes. Unknown fields are rejected.
    """
    model_config = ConfigDict(extra='forbid')

    element_code: str = Field(None, min_length=1)
    element_name: str = Field(None, min_length=1, max_length=200)
    description: str = Field(None, min_length=1, max_length=500)
    quantity: float = Field(None, ge=0, strict=True, allow_inf_nan=False)
    unit: MeasurementUnit = None
    unit_rate: float = Field(None, ge=0, strict=True, allow_inf_nan=False)
    notes: Optional[str] = Field(None, max_length=500)


class MeasuredWorkResponse(EntityBase):
    """Schema for a single measured work"""
    success: bool = True
    message: str
    data: MeasuredWork
