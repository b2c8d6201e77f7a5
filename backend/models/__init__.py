"""
Entity models for Cost Insight Dashboard
=========================================

- CostModel: Project cost estimate (container)
- MeasuredWork: Quantity × rate line items of a cost model
- NRM2Element: Standard element template used to seed new models

Element codes follow the UK NRM2 taxonomy.
"""

from .base import EntityBase
from .cost_model import CostModel, CostModelStatus
from .measured_work import MeasuredWork, MeasurementUnit
from .nrm2_element import NRM2Element

__all__ = [
    'EntityBase',
    'CostModel',
    'CostModelStatus',
    'MeasuredWork',
    'MeasurementUnit',
    'NRM2Element',
]
