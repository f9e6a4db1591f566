"""GET /v1/leave-options - choices for the leave criterion selector"""

from fastapi import APIRouter, Depends

from attend75.api.dependencies import get_settings
from attend75.api.v1.schemas import CriterionOption, LeaveOptionsResponse
from attend75.config import Settings
from attend75.domain.models import LEAVE_CRITERIA_OPTIONS, LEAVE_TYPES
from attend75.domain.recommendation import criterion_label

router = APIRouter()


@router.get("/leave-options", response_model=LeaveOptionsResponse)
def get_leave_options(settings: Settings = Depends(get_settings)):
    """
    List the allowed criterion values and the order leave types are applied in.
    """
    return LeaveOptionsResponse(
        criteria=[
            CriterionOption(value=option, label=criterion_label(option))
            for option in LEAVE_CRITERIA_OPTIONS
        ],
        leave_types=list(LEAVE_TYPES),
        default_target_percentage=settings.default_target_percentage,
    )
