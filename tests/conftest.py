"""
Shared fixtures: a temp-directory SQLite store with a deterministic clock,
services on top of it, and a mocked completion oracle.
"""
import os
import shutil
import sys
import tempfile
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from taskmind.adapters import CompletionOracle
from taskmind.mcp import build_registry
from taskmind.services import TaskService, TaskAiService
from taskmind.storage import SQLiteTaskStore


class FakeClock:
    """Returns a fixed start time, advancing one minute per call."""

    def __init__(self, start=datetime(2024, 1, 1, 9, 0, 0), step=timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def temp_db_path():
    """Create a temporary database path for testing."""
    temp_dir = tempfile.mkdtemp()
    yield os.path.join(temp_dir, "tasks.db")
    shutil.rmtree(temp_dir)


@pytest.fixture
def store(temp_db_path, clock):
    return SQLiteTaskStore(temp_db_path, clock=clock)


@pytest.fixture
def task_service(store):
    return TaskService(store)


@pytest.fixture
def mock_oracle():
    """Oracle mock; set return_value or side_effect per test."""
    oracle = Mock(spec=CompletionOracle)
    oracle.complete.return_value = ""
    return oracle


@pytest.fixture
def ai_service(mock_oracle):
    return TaskAiService(mock_oracle)


@pytest.fixture
def registry(task_service, ai_service):
    return build_registry(task_service, ai_service)
