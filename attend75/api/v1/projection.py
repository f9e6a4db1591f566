"""POST /v1/projection - effective attendance and attend/bunk recommendation"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from attend75.api.v1.schemas import (
    AppliedLeaveSchema,
    FieldErrorSchema,
    LeaveConfigSchema,
    ProjectionRequest,
    ProjectionResponse,
    RecommendationSchema,
)
from attend75.api.dependencies import get_request_id
from attend75.domain.models import LeaveConfig
from attend75.domain.projection import project_attendance
from attend75.domain.validation import sanitize_attendance, ensure_valid
from attend75.domain.exceptions import InvalidAttendanceInputError
from attend75.infrastructure.observability.metrics import record_projection, validation_failure_counter
from attend75.infrastructure.observability.logging import log_projection
from attend75.utils.formatting import format_percentage

router = APIRouter()


def _to_leave_config(schema: LeaveConfigSchema) -> LeaveConfig:
    return LeaveConfig(
        leaves=schema.leaves,
        criterion=schema.criterion,
        only_required=schema.only_required,
    )


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(request_body: ProjectionRequest, request: Request):
    """
    Recalculate attendance for the submitted form state.

    Flow:
    1. Clamp class counts (attended never exceeds total)
    2. Validate; reject with 422 and per-field errors
    3. Apply medical then duty leave and project attend/bunk counts
    4. Return raw vs effective attendance and the headline action
    """
    start_time = time.time()
    request_id = get_request_id(request)

    attendance = sanitize_attendance(
        request_body.total_classes,
        request_body.attended_classes,
        request_body.target_percentage,
    )
    medical_leaves = _to_leave_config(request_body.medical_leaves)
    duty_leaves = _to_leave_config(request_body.duty_leaves)

    try:
        ensure_valid(attendance, medical_leaves, duty_leaves)
    except InvalidAttendanceInputError as e:
        validation_failure_counter.inc()
        logging.warning(f"Rejected form state: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail=[FieldErrorSchema(field=err.field, message=err.message).model_dump() for err in e.errors],
        )

    projection = project_attendance(attendance, medical_leaves, duty_leaves)

    duration_ms = (time.time() - start_time) * 1000
    record_projection(projection)
    log_projection(
        request_id,
        projection.recommendation.action,
        projection.recommendation.classes,
        projection.raw_percentage,
        projection.effective_percentage,
        projection.total_applied_leaves,
        duration_ms,
    )

    return ProjectionResponse(
        total_classes=attendance.total_classes,
        attended_classes=attendance.attended_classes,
        target_percentage=attendance.target_percentage,
        raw_percentage=projection.raw_percentage,
        raw_percentage_display=format_percentage(projection.raw_percentage),
        effective_percentage=projection.effective_percentage,
        effective_percentage_display=format_percentage(projection.effective_percentage),
        raw_deficit=projection.raw_deficit,
        effective_attended=projection.effective_attended,
        target_met=projection.target_met,
        leaves=[
            AppliedLeaveSchema(
                leave_type=leave.leave_type,
                configured=leave.configured,
                applied=leave.applied,
                remaining_gap=leave.remaining_gap,
            )
            for leave in projection.leaves
        ],
        classes_to_attend=projection.projection.classes_to_attend,
        classes_to_bunk=projection.projection.classes_to_bunk,
        recommendation=RecommendationSchema(
            action=projection.recommendation.action,
            classes=projection.recommendation.classes,
            title=projection.recommendation.title,
            description=projection.recommendation.description,
        ),
    )
