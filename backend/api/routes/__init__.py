"""
API Routes Package
"""

from .cost_models import router as cost_models_router
from .measured_works import router as measured_works_router
