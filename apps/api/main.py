"""FastAPI entrypoint for Teams review callbacks and on-demand summaries."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import cached_property, lru_cache
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from lib import config
from lib.airtable_client import StatusStore
from lib.webhook_client import WebhookClient
from models.gemini_client import get_gemini
from services.review_response.run import handle_review_response
from services.status_summary.run import process_intake
from utils.errors import NotFoundError, ValidationError
from utils.logging import set_log_level

load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
set_log_level(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Intake Status Digest API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


class Services:
    """Process-wide service handles, built on first use and shared by requests."""

    def __init__(
        self,
        store_factory: Callable[[], StatusStore] = StatusStore.from_env,
        webhook_factory: Callable[[], Optional[WebhookClient]] = WebhookClient.from_env,
        llm_factory: Callable[[], Any] = get_gemini,
    ) -> None:
        self._store_factory = store_factory
        self._webhook_factory = webhook_factory
        self._llm_factory = llm_factory

    @cached_property
    def store(self) -> StatusStore:
        return self._store_factory()

    @cached_property
    def webhook(self) -> Optional[WebhookClient]:
        return self._webhook_factory()

    @cached_property
    def llm(self) -> Any:
        return self._llm_factory()


@lru_cache
def get_services() -> Services:
    return Services()


class TeamsResponseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intake_id: Optional[str] = Field(None, alias="intakeId")
    summary: Optional[str] = None
    modified_text: Optional[str] = Field(None, alias="modifiedText")


def _status_code_for(exc: Exception) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    return 500


@app.post("/api/teams-response/{action}")
def teams_response(
    action: str,
    request: TeamsResponseRequest,
    services: Services = Depends(get_services),
):
    logger.info("Teams response received: action=%s intake_id=%s", action, request.intake_id)
    try:
        return handle_review_response(
            action,
            request.intake_id,
            summary=request.summary,
            modified_text=request.modified_text,
            store=services.store,
            webhook=services.webhook,
        )
    except Exception as exc:
        logger.error(
            "Error processing Teams response: action=%s intake_id=%s error=%s",
            action,
            request.intake_id,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=_status_code_for(exc),
            content={"error": str(exc), "action": action, "intakeId": request.intake_id},
        )


@app.post("/api/intakes/{intake_id}/summary")
def generate_summary(intake_id: str, services: Services = Depends(get_services)):
    try:
        return process_intake(
            intake_id,
            store=services.store,
            llm=services.llm,
            webhook=services.webhook,
        )
    except Exception as exc:
        logger.error("Error processing intake %s: %s", intake_id, exc, exc_info=True)
        return JSONResponse(
            status_code=_status_code_for(exc),
            content={"error": str(exc), "intakeId": intake_id},
        )


@app.get("/")
def root() -> dict[str, str]:
    logger.info("Root route accessed")
    return {"status": "ok", "message": "Server is running"}


@app.get("/test")
def test_route() -> dict[str, Any]:
    logger.info("Test route accessed")
    return {
        "status": "running",
        "message": "Server is up and running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "serverUrl": config.SERVER_URL,
    }


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = exc.body if isinstance(exc.body, dict) else {}
    intake_id = body.get("intakeId")
    logger.warning("Rejected request body for %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "action": request.path_params.get("action"),
            "intakeId": intake_id if isinstance(intake_id, str) else None,
        },
    )


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error occurred: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc), "timestamp": datetime.now(timezone.utc).isoformat()},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
