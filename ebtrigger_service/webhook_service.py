import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import BackgroundTasks, Body, FastAPI, HTTPException, Request, Response
from pydantic import BaseModel

from ebtrigger_core.config import Config, get_config
from ebtrigger_core.errors import RemoteRequestError, ValidationError
from ebtrigger_core.inbound.records import write_trigger_records
from ebtrigger_core.logging import configure_logging, get_logger
from ebtrigger_core.runtime import build_gateway, build_manager, build_normalizer
from ebtrigger_core.subscriptions.lifecycle import (
    ACTIVATION_CREATED,
    DEACTIVATION_ABSENT,
    DEACTIVATION_FAILED,
    activate,
    deactivate,
)

SERVICE_NAME = "eventbrite-trigger"

configure_logging(
    service=SERVICE_NAME,
    env=os.getenv("ENV"),
    version=os.getenv("EBTRIGGER_VERSION"),
)
logger = get_logger(__name__)

app = FastAPI()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    commit: str
    timestamp: str


class WebhookAck(BaseModel):
    message: str
    records: int


class SubscriptionStatus(BaseModel):
    webhook_id: str | None = None
    exists: bool


class LifecycleResponse(BaseModel):
    outcome: str
    webhook_id: str | None = None


def _correlation_id(header_value: str | None) -> str:
    if header_value:
        return header_value
    return str(uuid.uuid4())


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    corr = _correlation_id(request.headers.get("x-correlation-id"))
    request.state.correlation_id = corr
    response = await call_next(request)
    response.headers["x-correlation-id"] = corr
    return response


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        version=os.getenv("EBTRIGGER_VERSION", "dev"),
        commit=os.getenv("GIT_COMMIT", "unknown"),
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
    )


@app.post("/webhook", response_model=WebhookAck)
def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    body: Any = Body(...),
) -> WebhookAck:
    config = _get_config()
    normalizer = build_normalizer(config, gateway=_build_gateway(config))
    try:
        records = normalizer.handle(body, config.resolve_data)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RemoteRequestError as exc:
        logger.error(
            "Failed to resolve webhook data",
            extra={
                "correlation_id": request.state.correlation_id,
                "node_id": config.node_id,
                "url": exc.url,
                "status_code": exc.status_code,
                "error_message": str(exc),
            },
        )
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    background_tasks.add_task(
        _emit_records,
        config,
        records,
        request.state.correlation_id,
    )
    return WebhookAck(message="Workflow was started", records=len(records))


@app.get("/subscription", response_model=SubscriptionStatus)
def subscription_status() -> SubscriptionStatus:
    manager = _build_manager(_get_config())
    return SubscriptionStatus(
        webhook_id=manager.webhook_id,
        exists=manager.check_exists(),
    )


@app.post("/subscription", response_model=LifecycleResponse)
def activate_subscription(
    request: Request,
    response: Response,
) -> LifecycleResponse:
    config = _get_config()
    manager = _build_manager(config)
    try:
        result = activate(manager)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RemoteRequestError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    response.status_code = 201 if result.outcome == ACTIVATION_CREATED else 200
    logger.info(
        "Subscription activated",
        extra={
            "correlation_id": request.state.correlation_id,
            "node_id": config.node_id,
            "webhook_id": result.webhook_id,
            "status": result.outcome,
        },
    )
    return LifecycleResponse(outcome=result.outcome, webhook_id=result.webhook_id)


@app.delete("/subscription", response_model=LifecycleResponse)
def deactivate_subscription(request: Request) -> LifecycleResponse:
    config = _get_config()
    manager = _build_manager(config)
    result = deactivate(manager)
    if result.outcome == DEACTIVATION_ABSENT:
        raise HTTPException(status_code=404, detail="No subscription is stored")
    if result.outcome == DEACTIVATION_FAILED:
        raise HTTPException(
            status_code=502,
            detail=f"Eventbrite did not delete webhook {result.webhook_id}",
        )
    logger.info(
        "Subscription deactivated",
        extra={
            "correlation_id": request.state.correlation_id,
            "node_id": config.node_id,
            "webhook_id": result.webhook_id,
            "status": result.outcome,
        },
    )
    return LifecycleResponse(outcome=result.outcome, webhook_id=result.webhook_id)


def _get_config() -> Config:
    try:
        return get_config()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def _build_gateway(config: Config):
    return build_gateway(config)


def _build_manager(config: Config):
    return build_manager(config, gateway=_build_gateway(config))


def _emit_records(
    config: Config,
    records: list[dict[str, Any]],
    correlation_id: str,
) -> None:
    log_uri = None
    if records and config.records_enabled:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        run_id = f"trigger-{timestamp}-{uuid.uuid4()}"
        log_uri = write_trigger_records(
            base_uri=config.state_root,
            node_id=config.node_id,
            run_id=run_id,
            records=records,
        )
    logger.info(
        "Trigger records emitted",
        extra={
            "correlation_id": correlation_id,
            "node_id": config.node_id,
            "record_count": len(records),
            "url": log_uri,
            "status": "emitted",
        },
    )
