"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from attend75.config import Settings, settings


def get_request_id(request: Request) -> str:
    """Request ID assigned by RequestIDMiddleware ("unknown" outside it)"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide calculator settings; overridable in tests"""
    return settings
