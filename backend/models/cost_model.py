"""
CostModel - A construction project cost estimate
"""

from typing import Optional
import enum
from pydantic import Field
from .base import EntityBase


class CostModelStatus(str, enum.Enum):
    """Lifecycle status of a cost model"""
    DRAFT = "draft"
    APPROVED = "approved"
    ARCHIVED = "archived"


class CostModel(EntityBase):
    """
    Cost model (main container)

    A cost model owns its measured works through MeasuredWork.cost_model_id.
    total_cost is a derived value: the sum of the works' totals at the moment
    the model was last recalculated.
    """

    # Identification
    id: str
    project_name: str
    project_ref: Optional[str] = None
    client: Optional[str] = None

    # Gross Internal Floor Area (m2)
    gifa: Optional[float] = None

    # Totals
    total_cost: float = Field(default=0, ge=0)

    status: CostModelStatus = CostModelStatus.DRAFT
    prepared_by: Optional[str] = None

    # Dates (ISO-8601 UTC)
    created_at: str
    updated_at: str

    def __repr__(self):
        return f"<CostModel(id={self.id}, project_name='{self.project_name}', total={self.total_cost})>"
