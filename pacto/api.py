import logging
import os

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import settings
from .models import (
    SubmitFavorRequest, ReviewFavorRequest, SubmitRedemptionRequest, ReviewRedemptionRequest,
    CatalogResponse, StatusResponse, AckResponse,
)
from .service import (
    LedgerService, LedgerServiceError, RecordNotFoundError, StorageUnavailableError,
)
from .storage import JsonFileStorage

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pacto Puntos API",
    description="Two-person ledger of favors, points and redemptions",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ledger_service = LedgerService(JsonFileStorage(settings.data_file))


def _to_http_error(e: LedgerServiceError) -> HTTPException:
    if isinstance(e, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, StorageUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Storage unavailable")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "healthy", "service": "pacto-puntos"}


@app.get("/api/config", response_model=CatalogResponse, tags=["Catalog"])
def get_config() -> CatalogResponse:
    return ledger_service.get_config()


@app.get("/api/status", response_model=StatusResponse, tags=["Participants"])
def get_status(user: str = "") -> StatusResponse:
    try:
        return ledger_service.get_status(user)
    except LedgerServiceError as e:
        raise _to_http_error(e)


@app.post("/api/gesto", response_model=AckResponse, response_model_exclude_none=True, tags=["Favors"])
def submit_favor(request: SubmitFavorRequest) -> AckResponse:
    try:
        return ledger_service.submit_favor(request.user, request.favor_type_id)
    except LedgerServiceError as e:
        raise _to_http_error(e)


@app.post("/api/review", response_model=AckResponse, response_model_exclude_none=True, tags=["Favors"])
def review_favor(request: ReviewFavorRequest) -> AckResponse:
    try:
        return ledger_service.review_favor(request.user, request.record_id, request.action)
    except LedgerServiceError as e:
        raise _to_http_error(e)


@app.post("/api/canje", response_model=AckResponse, response_model_exclude_none=True, tags=["Redemptions"])
def submit_redemption(request: SubmitRedemptionRequest) -> AckResponse:
    try:
        return ledger_service.submit_redemption(request.user, request.reward_type_id)
    except LedgerServiceError as e:
        raise _to_http_error(e)


@app.post("/api/canje-review", response_model=AckResponse, response_model_exclude_none=True, tags=["Redemptions"])
def review_redemption(request: ReviewRedemptionRequest) -> AckResponse:
    try:
        return ledger_service.review_redemption(request.user, request.record_id, request.action)
    except LedgerServiceError as e:
        raise _to_http_error(e)


# Mounted last so it never shadows the API routes.
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=settings.log_level)
    logger.info("Pacto Puntos running on :%d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
