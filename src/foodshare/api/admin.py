"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from foodshare.api.schemas import FoodAttributeCreate
from foodshare.api.serializers import serialize_attribute

if TYPE_CHECKING:
    from foodshare.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _configured_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_configured_admin_token),
) -> None:
    """Reject requests whose X-Admin-Token does not match the configured token."""
    if not x_admin_token or not secrets.compare_digest(
        x_admin_token.encode(), admin_token.encode()
    ):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post(
    "/food-attributes",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_food_attribute(
    payload: FoodAttributeCreate, request: Request
) -> dict[str, object]:
    """Create a food attribute; attributes are reference data."""
    container: AppContainer = request.app.state.container
    attribute = container.preference_service.create_attribute(
        payload.name, payload.category, payload.description
    )
    return serialize_attribute(attribute)
