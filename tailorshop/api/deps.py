"""
Request-scoped service wiring
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tailorshop.db.database import get_db
from tailorshop.services.artifact_store import ArtifactStore
from tailorshop.services.order_repository import OrderRepository
from tailorshop.services.order_service import OrderService
from tailorshop.services.query_service import OrderQueryService


def get_artifact_store(request: Request) -> ArtifactStore:
    return request.app.state.artifact_store


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def get_order_service(
    repository: OrderRepository = Depends(get_order_repository),
    artifact_store: ArtifactStore = Depends(get_artifact_store),
) -> OrderService:
    return OrderService(repository, artifact_store)


def get_query_service(
    request: Request,
    repository: OrderRepository = Depends(get_order_repository),
) -> OrderQueryService:
    app_settings = request.app.state.settings
    return OrderQueryService(
        repository,
        range_start=app_settings.PENDING_RANGE_START,
        range_end=app_settings.PENDING_RANGE_END,
    )
