"""
In-memory store package for Cost Insight Dashboard
"""

from .helpers import generate_id, current_timestamp
from .repository import CostRepository

__all__ = ['generate_id', 'current_timestamp', 'CostRepository']
