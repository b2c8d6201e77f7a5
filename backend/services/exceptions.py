"""
Exceptions for Cost Insight Dashboard.

Each exception maps to one HTTP status in main.py:
- ValidationError    -> 400
- NotFoundError      -> 404
- ConfigurationError -> 500
- InternalError      -> 500
"""

from typing import Dict, List, Optional


class CostInsightError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str, code: str = "COST_INSIGHT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(CostInsightError):
    """Raised when request data is malformed or out of range."""

    status_code = 400
    error = "Validation Error"

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.details = details or []


class NotFoundError(CostInsightError):
    """Raised when an entity id is unknown."""

    status_code = 404
    error = "Not Found"

    def __init__(self, entity_type: str, entity_id: str):
        message = f"{entity_type} with ID '{entity_id}' not found"
        super().__init__(message, code="NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConfigurationError(CostInsightError):
    """Raised when the NRM2 defaults file is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")


class InternalError(CostInsightError):
    """
    Raised for unexpected failures.

    The message is returned to the client, so it must stay generic; the
    underlying cause is chained and logged.
    """

    def __init__(self, message: str = "An error occurred"):
        super().__init__(message, code="INTERNAL_ERROR")
