"""
Cost Model Service - Business logic for cost models and measured works
"""

from typing import Any, Dict, List, Tuple
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from models import CostModel, CostModelStatus, MeasuredWork
from services.exceptions import NotFoundError, ValidationError
from services.nrm2_templates import NRM2TemplateProvider
from store.repository import CostRepository

logger = logging.getLogger(__name__)

DEFAULT_WORK_NOTES = 'Auto-generated from NRM2 defaults'


class CostModelService:
    """
    Service to manage cost models.

    Turns repository sentinels (None / False) into NotFoundError and
    sequences the multi-step operations: creating a model with its NRM2
    works, and deleting a model with its works.
    """

    def __init__(self, repository: CostRepository, templates: NRM2TemplateProvider):
        self.repository = repository
        self.templates = templates

    def create_model_with_defaults(
        self,
        project_name: str,
        project_ref: str = None,
        client: str = None,
        gifa: float = None,
        status: CostModelStatus = CostModelStatus.DRAFT,
        prepared_by: str = None
    ) -> Tuple[CostModel, List[MeasuredWork]]:
        """
        Creates a cost model pre-populated with one work per NRM2 element.

        The elements are loaded before the model is stored, so a broken
        NRM2 configuration leaves nothing behind.

        Returns:
            (model, works) with works in template order

        Raises:
            ConfigurationError: If the NRM2 defaults cannot be loaded
        """
        elements = self.templates.get_defaults()

        model = self.repository.create_model(
            project_name=project_name,
            project_ref=project_ref,
            client=client,
            gifa=gifa,
            status=status or CostModelStatus.DRAFT,
            prepared_by=prepared_by,
            total_cost=0
        )

        # Each element starts with quantity=0 and unit_rate=0
        works = [
            self.repository.create_work(
                cost_model_id=model.id,
                element_code=element.code,
                element_name=element.name,
                description=element.description or element.name,
                quantity=0,
                unit=element.suggested_unit,
                unit_rate=0,
                notes=DEFAULT_WORK_NOTES
            )
            for element in elements
        ]

        logger.info(f"✓ Created model {model.id} with {len(works)} pre-populated works")
        return model, works

    def get_model(self, model_id: str) -> CostModel:
        model = self.repository.find_model_by_id(model_id)
        if not model:
            raise NotFoundError("Cost model", model_id)
        return model

    def get_model_detail(self, model_id: str) -> Tuple[CostModel, List[MeasuredWork]]:
        """
        Gets a cost model with its measured works.

        Raises:
            NotFoundError: If the model does not exist
        """
        model = self.get_model(model_id)
        return model, self.repository.get_works_by_model_id(model_id)

    def recalculate(self, model_id: str) -> CostModel:
        """
        Recomputes a model's total cost from its works.

        Raises:
            NotFoundError: If the model does not exist
        """
        model = self.repository.recalculate_model_total_cost(model_id)
        if not model:
            raise NotFoundError("Cost model", model_id)
        return model

    def add_work(self, model_id: str, **fields) -> MeasuredWork:
        """
        Adds a measured work to an existing cost model.

        Raises:
            NotFoundError: If the model does not exist
        """
        self.get_model(model_id)
        return self.repository.create_work(cost_model_id=model_id, **fields)

    def update_work(self, work_id: str, updates: Dict[str, Any]) -> MeasuredWork:
        """
        Applies a partial update to a measured work.

        Raises:
            ValidationError: If no update fields are given
            NotFoundError: If the work does not exist
        """
        if not updates:
            raise ValidationError("No update fields provided")

        work = self.repository.update_work(work_id, **updates)
        if not work:
            raise NotFoundError("Measured work", work_id)
        return work

    def delete_model(self, model_id: str) -> int:
        """
        Deletes a cost model and its measured works.

        Returns:
            Number of works deleted

        Raises:
            NotFoundError: If the model does not exist
        """
        deleted_works = self.repository.delete_model_cascade(model_id)
        if deleted_works is None:
            raise NotFoundError("Cost model", model_id)

        logger.info(f"✓ Deleted model {model_id} and {deleted_works} related works")
        return deleted_works

    def delete_work(self, work_id: str) -> None:
        """
        Deletes a measured work. The parent model's total is not recalculated.

        Raises:
            NotFoundError: If the work does not exist
        """
        if not self.repository.delete_work(work_id):
            raise NotFoundError("Measured work", work_id)
