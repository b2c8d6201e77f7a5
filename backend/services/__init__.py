"""
Services package - Business logic
"""

from .exceptions import (
    CostInsightError,
    ValidationError,
    NotFoundError,
    ConfigurationError,
    InternalError,
)
from .calculations import round2, line_total, model_total
from .nrm2_templates import NRM2TemplateProvider, get_template_provider

__all__ = [
    'CostInsightError',
    'ValidationError',
    'NotFoundError',
    'ConfigurationError',
    'InternalError',
    'round2',
    'line_total',
    'model_total',
    'NRM2TemplateProvider',
    'get_template_provider',
]
