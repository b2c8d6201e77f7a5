"""
NRM2Element - Read-only template of a standard cost element
"""

from typing import Optional
from pydantic import Field
from .base import EntityBase
from .measured_work import MeasurementUnit


class NRM2Element(EntityBase):
    """
    Standard NRM2 cost element used to pre-populate new cost models.

    Loaded from the NRM2 defaults file, never stored per model.
    """
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    suggested_unit: MeasurementUnit
    description: Optional[str] = None
