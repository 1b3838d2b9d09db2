"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from credit_dashboard.config import settings
from credit_dashboard.domain.scoring import ScoringConfig, ScoringEngine
from credit_dashboard.infrastructure.sources import DataLoader


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_scoring_engine() -> ScoringEngine:
    """Provide a scoring engine configured from settings"""
    return ScoringEngine(ScoringConfig(bureau_weight=settings.bureau_weight))


def get_data_loader() -> DataLoader:
    """Provide data source loader instance"""
    return DataLoader()
