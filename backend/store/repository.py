"""
Cost Repository - In-memory CRUD operations for Cost Insight Dashboard
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import sys
from pathlib import Path

# Add the backend directory to the path
sys.path.append(str(Path(__file__).parent.parent))

from models import CostModel, CostModelStatus, MeasuredWork, MeasurementUnit
from services.calculations import line_total, model_total, round2
from store.helpers import generate_id, current_timestamp

logger = logging.getLogger(__name__)

# Fields of a measured work that callers may change after creation
UPDATABLE_WORK_FIELDS = frozenset({
    'element_code',
    'element_name',
    'description',
    'quantity',
    'unit',
    'unit_rate',
    'notes',
})


class CostRepository:
    """
    In-memory repository for cost models and measured works.

    Owns two id-indexed collections. Entities never leave the repository by
    reference: every read returns a copy, and changes go through the update
    methods. Lookups on unknown ids return None / False / 0, never raise.

    Referential integrity is not checked: a measured work may point to a
    cost model id that does not exist.
    """

    def __init__(
        self,
        id_factory: Callable[[str], str] = generate_id,
        clock: Callable[[], str] = current_timestamp
    ):
        self._id_factory = id_factory
        self._clock = clock
        self._models: Dict[str, CostModel] = {}
        self._works: Dict[str, MeasuredWork] = {}

    def _new_id(self, prefix: str, existing: Dict[str, Any]) -> str:
        new_id = self._id_factory(prefix)
        while new_id in existing:
            new_id = self._id_factory(prefix)
        return new_id

    # =====================================================
    # COST MODELS
    # =====================================================

    def get_all_models(self) -> List[CostModel]:
        """Lists all cost models in creation order"""
        return [model.model_copy() for model in self._models.values()]

    def find_model_by_id(self, model_id: str) -> Optional[CostModel]:
        """Gets a cost model by ID"""
        model = self._models.get(model_id)
        return model.model_copy() if model else None

    def create_model(
        self,
        project_name: str,
        project_ref: str = None,
        client: str = None,
        gifa: float = None,
        status: CostModelStatus = CostModelStatus.DRAFT,
        prepared_by: str = None,
        total_cost: float = 0
    ) -> CostModel:
        """
        Creates a new cost model.

        Args:
            project_name: Project name
            project_ref: Optional project reference
            client: Optional client name
            gifa: Optional gross internal floor area
            status: Lifecycle status
            prepared_by: Optional author
            total_cost: Initial total (new models start at 0)

        Returns:
            Created cost model
        """
        now = self._clock()
        model = CostModel(
            id=self._new_id('cm', self._models),
            project_name=project_name,
            project_ref=project_ref,
            client=client,
            gifa=gifa,
            total_cost=round2(total_cost),
            status=status,
            prepared_by=prepared_by,
            created_at=now,
            updated_at=now
        )

        self._models[model.id] = model
        logger.info(f"✓ Created cost model: {model.id} - {model.project_name}")
        return model.model_copy()

    def update_model_total_cost(self, model_id: str, total_cost: float) -> Optional[CostModel]:
        """
        Overwrites a model's total cost without looking at its works.

        Returns:
            Updated model or None if it does not exist
        """
        model = self._models.get(model_id)
        if not model:
            return None

        updated = CostModel.model_validate({
            **model.model_dump(),
            'total_cost': round2(total_cost),
            'updated_at': self._clock(),
        })
        self._models[model_id] = updated
        return updated.model_copy()

    def recalculate_model_total_cost(self, model_id: str) -> Optional[CostModel]:
        """
        Sums the total cost of all works of a model and stores it on the model.

        This is the only operation that derives a model total from its works;
        callers invoke it after changing works whose totals should show up.

        Returns:
            Updated model or None if it does not exist
        """
        if model_id not in self._models:
            return None

        works = [w for w in self._works.values() if w.cost_model_id == model_id]
        total = model_total(works)

        updated = self.update_model_total_cost(model_id, total)
        logger.info(f"✓ Recalculated total cost for model {model_id}: {total}")
        return updated

    def delete_model(self, model_id: str) -> bool:
        """
        Deletes a cost model. Its works are left untouched.

        Returns:
            True if deleted, False if it did not exist
        """
        if self._models.pop(model_id, None) is None:
            return False

        logger.info(f"✓ Deleted cost model: {model_id}")
        return True

    def delete_model_cascade(self, model_id: str) -> Optional[int]:
        """
        Deletes a cost model and all of its measured works (works first).

        Returns:
            Number of works deleted, or None if the model did not exist
        """
        if model_id not in self._models:
            return None

        deleted_works = self.delete_measured_works_by_model_id(model_id)
        self.delete_model(model_id)
        return deleted_works

    # =====================================================
    # MEASURED WORKS
    # =====================================================

    def get_all_works(self) -> List[MeasuredWork]:
        """Lists all measured works in creation order"""
        return [work.model_copy() for work in self._works.values()]

    def get_works_by_model_id(self, cost_model_id: str) -> List[MeasuredWork]:
        """Lists the measured works of a cost model in creation order"""
        return [
            work.model_copy()
            for work in self._works.values()
            if work.cost_model_id == cost_model_id
        ]

    def find_work_by_id(self, work_id: str) -> Optional[MeasuredWork]:
        """Gets a measured work by ID"""
        work = self._works.get(work_id)
        return work.model_copy() if work else None

    def create_work(
        self,
        cost_model_id: str,
        element_code: str,
        element_name: str,
        description: str,
        quantity: float,
        unit: MeasurementUnit,
        unit_rate: float,
        notes: str = None
    ) -> MeasuredWork:
        """
        Creates a measured work.

        Args:
            cost_model_id: ID of the owning cost model
            element_code, element_name: NRM2 element
            description: Work description
            quantity, unit, unit_rate: Measurement

        Returns:
            Created measured work with its total cost computed
        """
        now = self._clock()
        work = MeasuredWork(
            id=self._new_id('mw', self._works),
            cost_model_id=cost_model_id,
            element_code=element_code,
            element_name=element_name,
            description=description,
            quantity=quantity,
            unit=unit,
            unit_rate=unit_rate,
            total_cost=line_total(quantity, unit_rate),
            notes=notes,
            created_at=now,
            updated_at=now
        )

        self._works[work.id] = work
        logger.info(f"✓ Created measured work: {work.id} - {work.element_name}")
        return work.model_copy()

    def update_work(self, work_id: str, **fields) -> Optional[MeasuredWork]:
        """
        Updates fields of a measured work.

        The total cost is recomputed from the post-update quantity and unit
        rate whenever either of them is among the fields. Fields outside
        UPDATABLE_WORK_FIELDS are ignored.

        Args:
            work_id: Work ID
            **fields: Fields to update

        Returns:
            Updated work or None if it does not exist
        """
        work = self._works.get(work_id)
        if not work:
            return None

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_WORK_FIELDS}
        data = {**work.model_dump(), **changes}

        if 'quantity' in changes or 'unit_rate' in changes:
            data['total_cost'] = line_total(data['quantity'], data['unit_rate'])

        data['updated_at'] = self._clock()

        updated = MeasuredWork.model_validate(data)
        self._works[work_id] = updated
        logger.info(f"✓ Updated measured work: {work_id}")
        return updated.model_copy()

    def delete_measured_works_by_model_id(self, cost_model_id: str) -> int:
        """
        Deletes all measured works of a cost model.

        Returns:
            Number of works deleted
        """
        doomed = [w.id for w in self._works.values() if w.cost_model_id == cost_model_id]
        for work_id in doomed:
            del self._works[work_id]

        if doomed:
            logger.info(f"✓ Deleted {len(doomed)} measured works for model: {cost_model_id}")
        return len(doomed)

    def delete_work(self, work_id: str) -> bool:
        """
        Deletes a measured work.

        Returns:
            True if deleted, False if it did not exist
        """
        if self._works.pop(work_id, None) is None:
            return False

        logger.info(f"✓ Deleted measured work: {work_id}")
        return True

    # =====================================================
    # ADMINISTRATION
    # =====================================================

    def get_store_stats(self) -> Dict[str, Any]:
        """Counts of stored entities"""
        return {
            'totalModels': len(self._models),
            'totalWorks': len(self._works),
            'timestamp': self._clock(),
        }

    def clear_all_data(self) -> None:
        """Deletes every cost model and measured work"""
        self._models.clear()
        self._works.clear()
        logger.warning("All data cleared from in-memory store")

    def seed_data(self) -> None:
        """Replaces the store contents with sample models and works"""
        self.clear_all_data()

        model1 = self.create_model(
            project_name='Block A Residential Development',
            project_ref='PRJ-2024-001',
            client='Acme Estates Ltd',
            gifa=2500.00,
            status=CostModelStatus.DRAFT,
            prepared_by='John Smith'
        )
        model2 = self.create_model(
            project_name='Office Refurbishment - Central London',
            project_ref='PRJ-2024-002',
            client='City Properties Group',
            gifa=1800.00,
            status=CostModelStatus.APPROVED,
            prepared_by='Sarah Jones'
        )
        model3 = self.create_model(
            project_name='School Extension Project',
            project_ref='PRJ-2024-003',
            client='Local Education Authority',
            gifa=950.00,
            status=CostModelStatus.ARCHIVED,
            prepared_by='Mike Brown'
        )

        self.create_work(
            cost_model_id=model1.id,
            element_code='1',
            element_name='Substructure',
            description='Concrete strip foundations',
            quantity=150.00,
            unit=MeasurementUnit.M3,
            unit_rate=450.00,
            notes='Foundation works'
        )
        self.create_work(
            cost_model_id=model1.id,
            element_code='2.1',
            element_name='Frame',
            description='Structural frame works',
            quantity=50.00,
            unit=MeasurementUnit.M2,
            unit_rate=850.00,
            notes='Steel frame installation'
        )
        self.create_work(
            cost_model_id=model2.id,
            element_code='2.5',
            element_name='External walls',
            description='Facade works',
            quantity=280.00,
            unit=MeasurementUnit.M2,
            unit_rate=220.00,
            notes='Curtain wall system'
        )

        for model in (model1, model2, model3):
            self.recalculate_model_total_cost(model.id)

        logger.info("✓ In-memory store initialized with seed data")
        logger.info(f"  - {len(self._models)} models created")
        logger.info(f"  - {len(self._works)} measured works created")
