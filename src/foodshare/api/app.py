"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from foodshare.api.admin import router as admin_router
from foodshare.api.schemas import (
    DonationAttributeCreate,
    PreferenceUpdate,
    PreferenceUpsert,
)
from foodshare.api.serializers import (
    serialize_attribute,
    serialize_donation,
    serialize_donation_attribute,
    serialize_donation_attribute_detail,
    serialize_match,
    serialize_preference,
    serialize_preference_detail,
    serialize_recipient,
)
from foodshare.app_logging import configure_logging
from foodshare.containers import AppContainer
from foodshare.domain.errors import (
    DataIntegrityError,
    InvalidRequestError,
    NotFoundError,
    StorageUnavailableError,
)

RETRY_AFTER_SECONDS = "5"
UNPROCESSABLE_STATUS = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="foodshare")
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable(
        _request: Request, exc: StorageUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
            headers={"Retry-After": RETRY_AFTER_SECONDS},
        )

    @app.exception_handler(DataIntegrityError)
    async def data_integrity(
        request: Request, exc: DataIntegrityError
    ) -> JSONResponse:
        logger.error("Data integrity failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Stored data is inconsistent"},
        )

    @app.exception_handler(InvalidRequestError)
    async def invalid_request(
        _request: Request, exc: InvalidRequestError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=UNPROCESSABLE_STATUS,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/food-attributes")
    def list_food_attributes(
        request: Request, category: str | None = None
    ) -> list[dict[str, object]]:
        """Return food attributes, optionally for one category."""
        service = _container(request).preference_service
        return [serialize_attribute(attr) for attr in service.get_attributes(category)]

    @app.get("/recipients/nearby")
    def nearby_recipients(
        request: Request,
        latitude: float = Query(ge=-90, le=90),
        longitude: float = Query(ge=-180, le=180),
        radius: float | None = None,
    ) -> list[dict[str, object]]:
        """Return recipients around a point, nearest first."""
        service = _container(request).matching_service
        recipients = service.nearby_recipients(latitude, longitude, radius)
        return [serialize_recipient(recipient) for recipient in recipients]

    @app.get("/recipients/{recipient_id}/preferences")
    def recipient_preferences(
        recipient_id: int, request: Request
    ) -> list[dict[str, object]]:
        """Return a recipient's preferences with their attributes."""
        service = _container(request).preference_service
        details = service.get_recipient_preferences(recipient_id)
        return [serialize_preference_detail(detail) for detail in details]

    @app.post(
        "/recipients/{recipient_id}/preferences",
        status_code=status.HTTP_201_CREATED,
    )
    def upsert_recipient_preference(
        recipient_id: int, payload: PreferenceUpsert, request: Request
    ) -> dict[str, object]:
        """Create a preference, or update the importance of an existing one."""
        service = _container(request).preference_service
        preference = service.upsert_recipient_preference(
            recipient_id, payload.attribute_id, payload.importance
        )
        return serialize_preference(preference)

    @app.put("/recipients/{recipient_id}/preferences/{attribute_id}")
    def update_recipient_preference(
        recipient_id: int,
        attribute_id: int,
        payload: PreferenceUpdate,
        request: Request,
    ) -> dict[str, object]:
        """Change the importance of an existing preference."""
        service = _container(request).preference_service
        preference = service.update_recipient_preference(
            recipient_id, attribute_id, payload.importance
        )
        return serialize_preference(preference)

    @app.get("/recipients/{recipient_id}/matching-donations")
    def matching_donations(
        recipient_id: int,
        request: Request,
        radius: float | None = None,
    ) -> list[dict[str, object]]:
        """Return nearby donations ranked for a recipient."""
        service = _container(request).matching_service
        results = service.matching_donations_for_recipient(recipient_id, radius)
        return [serialize_match(result) for result in results]

    @app.get("/donations/nearby")
    def nearby_donations(
        request: Request,
        latitude: float = Query(ge=-90, le=90),
        longitude: float = Query(ge=-180, le=180),
        radius: float | None = None,
    ) -> list[dict[str, object]]:
        """Return available donations around a point, nearest first."""
        service = _container(request).matching_service
        donations = service.nearby_donations(latitude, longitude, radius)
        return [serialize_donation(donation) for donation in donations]

    @app.get("/donations/{donation_id}/attributes")
    def donation_attributes(
        donation_id: int, request: Request
    ) -> list[dict[str, object]]:
        """Return a donation's attributes."""
        service = _container(request).preference_service
        details = service.get_donation_attributes(donation_id)
        return [serialize_donation_attribute_detail(detail) for detail in details]

    @app.post(
        "/donations/{donation_id}/attributes",
        status_code=status.HTTP_201_CREATED,
    )
    def add_donation_attribute(
        donation_id: int, payload: DonationAttributeCreate, request: Request
    ) -> dict[str, object]:
        """Tag a donation with a food attribute."""
        service = _container(request).preference_service
        tag = service.add_donation_attribute(
            donation_id, payload.attribute_id, payload.value
        )
        return serialize_donation_attribute(tag)

    @app.get("/donations/{donation_id}/matching-recipients")
    def matching_recipients(
        donation_id: int,
        request: Request,
        radius: float | None = None,
    ) -> list[dict[str, object]]:
        """Return nearby recipients ranked for a donation."""
        service = _container(request).matching_service
        results = service.matching_recipients_for_donation(donation_id, radius)
        return [serialize_match(result) for result in results]

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container
