"""
Shared fixtures for the Cost Insight Dashboard tests.
"""
import os

# Keep test runs from writing backend/logs/backend.log
os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import create_app
from services.nrm2_templates import NRM2TemplateProvider
from store.repository import CostRepository


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2024, 11, 6, 12, 0, 0, tzinfo=timezone.utc)):
        self.current = start
        self.calls = 0

    def __call__(self) -> str:
        value = self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self.current += timedelta(seconds=1)
        self.calls += 1
        return value


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repository(clock):
    """Empty repository with a deterministic clock."""
    return CostRepository(clock=clock)


@pytest.fixture
def templates():
    """Template provider on the bundled NRM2 defaults file."""
    return NRM2TemplateProvider(settings.NRM2_CONFIG_PATH)


@pytest.fixture
def client(repository, templates):
    """Test client on a fresh application."""
    app = create_app(repository=repository, templates=templates)
    with TestClient(app) as c:
        yield c
