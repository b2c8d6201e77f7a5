"""
MeasuredWork - Itemised line of a cost model
"""

from typing import Optional
import enum
from pydantic import Field
from .base import EntityBase


class MeasurementUnit(str, enum.Enum):
    """Units of measurement accepted for measured works"""
    M2 = "m2"    # Square metres
    M3 = "m3"    # Cubic metres
    M = "m"      # Linear metres
    NR = "nr"    # Number
    T = "t"      # Tonnes
    LS = "ls"    # Lump sum


class MeasuredWork(EntityBase):
    """
    Measured work of a cost model.

    Formula: total_cost = quantity × unit_rate (rounded to 2dp)

    Examples:
    - Substructure: 150 m3 × 450.00 = 67,500.00
    - Frame: 50 m2 × 850.00 = 42,500.00
    """

    # Identification
    id: str
    cost_model_id: str

    # NRM2 element
    element_code: str
    element_name: str
    description: str

    # Measurement
    quantity: float = Field(ge=0)
    unit: MeasurementUnit
    unit_rate: float = Field(ge=0)

    # Result
    total_cost: float = Field(default=0, ge=0)

    notes: Optional[str] = None

    # Dates (ISO-8601 UTC)
    created_at: str
    updated_at: str

    def __repr__(self):
        return f"<MeasuredWork(id={self.id}, element_code='{self.element_code}', total={self.total_cost})>"
