"""
Measured Work Routes
"""

from fastapi import APIRouter, Depends, status
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent.parent))

from api.dependencies import get_cost_model_service
from api.schemas.measured_work import MeasuredWorkUpdate, MeasuredWorkResponse
from services.cost_model_service import CostModelService
from services.exceptions import CostInsightError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.patch("/{work_id}", response_model=MeasuredWorkResponse, response_model_exclude_none=True)
async def update_work(
    work_id: str,
    work_update: MeasuredWorkUpdate,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Update a measured work (partial update).

    The total cost is recalculated when quantity or unit rate changes. The
    parent model's total is not; use POST /api/models/{id}/calculate.

    Args:
        work_id: Measured work ID
        work_update: Fields to update
        service: Cost model service

    Returns:
        Updated measured work

    Raises:
        ValidationError: If no update fields are provided
        NotFoundError: If the work does not exist
    """
    try:
        work = service.update_work(work_id, work_update.model_dump(exclude_unset=True))
    except CostInsightError:
        raise
    except Exception as e:
        logger.error(f"Error updating measured work: {e}", exc_info=True)
        raise InternalError("Failed to update measured work") from e

    return MeasuredWorkResponse(message="Measured work updated successfully", data=work)


@router.delete("/{work_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_work(
    work_id: str,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Delete a single measured work.

    The parent model's total cost is not recalculated; call
    POST /api/models/{id}/calculate after deleting.

    Args:
        work_id: Measured work ID
        service: Cost model service

    Raises:
        NotFoundError: If the work does not exist
    """
    service.delete_work(work_id)
    return None
