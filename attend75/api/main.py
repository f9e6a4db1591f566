"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import JSONResponse, Response

from attend75.api.dependencies import get_request_id
from attend75.api.middleware import RequestIDMiddleware, MetricsMiddleware
from attend75.api.v1.schemas import FieldErrorSchema
from attend75.api.v1 import projection, options
from attend75.infrastructure.observability.logging import setup_logging
from attend75.infrastructure.observability.metrics import validation_failure_counter
from attend75.config import settings

setup_logging(settings.log_level)


async def on_malformed_form(request: Request, exc: RequestValidationError):
    """Count and log bodies rejected before reaching the calculator (NaN target, oversized counts)"""
    validation_failure_counter.inc()
    logging.warning(
        "Malformed form state",
        extra={"request_id": get_request_id(request), "errors": len(exc.errors())},
    )
    # Same {field, message} shape as domain validation; rejected inputs (NaN) are not echoed back
    detail = [
        FieldErrorSchema(
            field=".".join(str(part) for part in err["loc"] if part != "body"),
            message=err["msg"],
        ).model_dump()
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": detail})


def create_app() -> FastAPI:
    """Create the calculator API: projection and leave-option routes plus health and metrics"""
    app = FastAPI(
        title="attend75 Attendance Calculator",
        description="Effective attendance with leave credits and attend/bunk projection",
        version="0.1.0",
    )

    # Last added runs first, so every request has an ID before metrics see it
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, on_malformed_form)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(projection.router, prefix="/v1", tags=["projection"])
    app.include_router(options.router, prefix="/v1", tags=["options"])

    return app


app = create_app()
