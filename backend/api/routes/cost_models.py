"""
Cost Model Routes
"""

from fastapi import APIRouter, Depends, status
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent.parent))

from api.dependencies import get_cost_model_service, get_repository
from api.schemas.cost_model import (
    CostModelCreate,
    CostModelDetail,
    CostModelListResponse,
    CostModelDetailResponse,
    Recalculation,
    RecalculationResponse
)
from api.schemas.measured_work import MeasuredWorkCreate, MeasuredWorkResponse
from services.cost_model_service import CostModelService
from services.exceptions import CostInsightError, InternalError
from store.repository import CostRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=CostModelListResponse, response_model_exclude_none=True)
async def list_models(repository: CostRepository = Depends(get_repository)):
    """
    List all cost models.

    Args:
        repository: Application repository

    Returns:
        Cost models in creation order
    """
    models = repository.get_all_models()
    return CostModelListResponse(count=len(models), data=models)


@router.get("/{model_id}", response_model=CostModelDetailResponse, response_model_exclude_none=True)
async def get_model(
    model_id: str,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Get a cost model with its measured works.

    Args:
        model_id: Cost model ID
        service: Cost model service

    Returns:
        Cost model, works and works count

    Raises:
        NotFoundError: If the model does not exist
    """
    model, works = service.get_model_detail(model_id)
    return CostModelDetailResponse(
        data=CostModelDetail(model=model, works=works, works_count=len(works))
    )


@router.post(
    "",
    response_model=CostModelDetailResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def create_model(
    model_data: CostModelCreate,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Create a new cost model pre-populated with the NRM2 default elements.

    Each element becomes a measured work with quantity=0 and unit rate=0.

    Args:
        model_data: Cost model creation data
        service: Cost model service

    Returns:
        Created model with its measured works
    """
    try:
        model, works = service.create_model_with_defaults(
            project_name=model_data.project_name,
            project_ref=model_data.project_ref,
            client=model_data.client,
            gifa=model_data.gifa,
            status=model_data.status,
            prepared_by=model_data.prepared_by
        )
    except CostInsightError:
        raise
    except Exception as e:
        logger.error(f"Error creating cost model: {e}", exc_info=True)
        raise InternalError("Failed to create cost model") from e

    return CostModelDetailResponse(
        message="Cost model created successfully",
        data=CostModelDetail(model=model, works=works, works_count=len(works))
    )


@router.post("/{model_id}/calculate", response_model=RecalculationResponse, response_model_exclude_none=True)
async def calculate_model(
    model_id: str,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Recalculate the model's total cost from its measured works.

    Call this after creating, updating or deleting measured works so the
    model total stays in sync.

    Args:
        model_id: Cost model ID
        service: Cost model service

    Returns:
        Updated model and its total cost

    Raises:
        NotFoundError: If the model does not exist
    """
    try:
        model = service.recalculate(model_id)
    except CostInsightError:
        raise
    except Exception as e:
        logger.error(f"Error recalculating total cost: {e}", exc_info=True)
        raise InternalError("Failed to recalculate total cost") from e

    return RecalculationResponse(
        message="Total cost recalculated successfully",
        data=Recalculation(model=model, total_cost=model.total_cost)
    )


@router.post(
    "/{model_id}/works",
    response_model=MeasuredWorkResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def add_work(
    model_id: str,
    work_data: MeasuredWorkCreate,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Add a measured work to a cost model.

    The model's total cost is not recalculated.

    Args:
        model_id: Cost model ID
        work_data: Measured work data
        service: Cost model service

    Returns:
        Created measured work

    Raises:
        NotFoundError: If the model does not exist
    """
    try:
        work = service.add_work(model_id, **work_data.model_dump())
    except CostInsightError:
        raise
    except Exception as e:
        logger.error(f"Error creating measured work: {e}", exc_info=True)
        raise InternalError("Failed to create measured work") from e

    return MeasuredWorkResponse(message="Measured work created successfully", data=work)


@router.delete("/{model_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_model(
    model_id: str,
    service: CostModelService = Depends(get_cost_model_service)
):
    """
    Delete a cost model and all of its measured works.

    Args:
        model_id: Cost model ID
        service: Cost model service

    Raises:
        NotFoundError: If the model does not exist
    """
    service.delete_model(model_id)
    return None
