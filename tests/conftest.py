"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from attend75.api.main import create_app
from attend75.domain.models import AttendanceInput, LeaveConfig


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def no_leaves() -> LeaveConfig:
    """Leave type with no allowance configured"""
    return LeaveConfig(leaves=0, criterion=0, only_required=True)


@pytest.fixture
def short_attendance() -> AttendanceInput:
    """70 of 100 classes against a 75% target: 5 classes short on raw attendance"""
    return AttendanceInput(total_classes=100, attended_classes=70, target_percentage=75)


@pytest.fixture
def form_state() -> dict:
    """Valid POST /v1/projection body matching short_attendance"""
    return {
        "total_classes": 100,
        "attended_classes": 70,
        "target_percentage": 75,
        "medical_leaves": {"leaves": 0, "criterion": 0, "only_required": True},
        "duty_leaves": {"leaves": 0, "criterion": 0, "only_required": True},
    }
