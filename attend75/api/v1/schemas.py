"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List
from attend75.config import settings

# Upper bound on any class or leave count accepted over the wire
MAX_CLASSES = 100_000


class LeaveConfigSchema(BaseModel):
    """Allowance and unlock rule for one leave type"""

    leaves: int = Field(0, le=MAX_CLASSES, description="Classes this leave type can count as attended")
    criterion: int = Field(0, description="Raw attendance % required before applying (0 = immediately)")
    only_required: bool = Field(True, description="Only cover the gap to the target (ignored when criterion is 0)")


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projection - the current form state"""

    total_classes: int = Field(0, le=MAX_CLASSES, description="Classes held so far")
    attended_classes: int = Field(0, le=MAX_CLASSES, description="Classes attended so far")
    target_percentage: float = Field(
        default_factory=lambda: settings.default_target_percentage,
        allow_inf_nan=False,
        description="Attendance percentage to reach or maintain",
    )
    medical_leaves: LeaveConfigSchema = Field(default_factory=LeaveConfigSchema)
    duty_leaves: LeaveConfigSchema = Field(default_factory=LeaveConfigSchema)


class AppliedLeaveSchema(BaseModel):
    """Leave credited for one leave type"""

    leave_type: str
    configured: int
    applied: int
    remaining_gap: int


class RecommendationSchema(BaseModel):
    """Headline next action"""

    action: str
    classes: int
    title: str
    description: str


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projection"""

    total_classes: int
    attended_classes: int
    target_percentage: float
    raw_percentage: float
    raw_percentage_display: str
    effective_percentage: float
    effective_percentage_display: str
    raw_deficit: int
    effective_attended: int
    target_met: bool
    leaves: List[AppliedLeaveSchema]
    classes_to_attend: int
    classes_to_bunk: int
    recommendation: RecommendationSchema


class FieldErrorSchema(BaseModel):
    """Single validation failure, returned in the 422 detail list"""

    field: str
    message: str


class CriterionOption(BaseModel):
    value: int
    label: str


class LeaveOptionsResponse(BaseModel):
    """Response for GET /v1/leave-options"""

    criteria: List[CriterionOption]
    leave_types: List[str]
    default_target_percentage: float
