"""
API Dependencies - Repository, template provider and services
"""

from fastapi import Depends, Request
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from services.cost_model_service import CostModelService
from services.nrm2_templates import NRM2TemplateProvider
from store.repository import CostRepository


def get_repository(request: Request) -> CostRepository:
    """
    Dependency to get the application's repository.

    The repository is created once per application in main.create_app().

    Returns:
        CostRepository instance
    """
    return request.app.state.repository


def get_templates(request: Request) -> NRM2TemplateProvider:
    """
    Dependency to get the NRM2 template provider.

    Returns:
        NRM2TemplateProvider instance
    """
    return request.app.state.templates


def get_cost_model_service(
    repository: CostRepository = Depends(get_repository),
    templates: NRM2TemplateProvider = Depends(get_templates)
) -> CostModelService:
    """
    Dependency to get CostModelService instance.

    Args:
        repository: Application repository
        templates: NRM2 template provider

    Returns:
        CostModelService instance
    """
    return CostModelService(repository, templates)
