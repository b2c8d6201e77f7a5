"""
Pydantic schemas for CostModel
"""

from pydantic import Field
from typing import List, Optional

from models import CostModel, CostModelStatus, EntityBase, MeasuredWork


class CostModelCreate(EntityBase):
    """
    Schema for creating a cost model.

    Optional fields may be omitted but not sent as null.
    """
    project_name: str = Field(min_length=1, max_length=200)
    project_ref: str = Field(None, max_length=50)
    client: str = Field(None, max_length=200)
    gifa: float = Field(None, gt=0, strict=True, allow_inf_nan=False)
    status: CostModelStatus = CostModelStatus.DRAFT
    prepared_by: str = Field(None, max_length=100)


class CostModelDetail(EntityBase):
    """Schema for a cost model with its measured works"""
    model: CostModel
    works: List[MeasuredWork]
    works_count: int


class CostModelListResponse(EntityBase):
    """Schema for the cost model list"""
    success: bool = True
    count: int
    data: List[CostModel]


class CostModelDetailResponse(EntityBase):
    """Schema for a single cost model"""
    success: bool = True
    message: Optional[str] = None
    data: CostModelDetail


class Recalculation(EntityBase):
    """Schema for a recalculated total"""
    model: CostModel
    total_cost: float


class RecalculationResponse(EntityBase):
    """Schema for the recalculation endpoint"""
    success: bool = True
    message: str
    data: Recalculation
