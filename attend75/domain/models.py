"""Domain models - immutable dataclasses rebuilt on every recalculation"""

from dataclasses import dataclass
from typing import Tuple

# Raw attendance thresholds a leave type can be gated on (0 = apply immediately)
LEAVE_CRITERIA_OPTIONS = (0, 50, 60, 65, 70, 75, 80, 85, 90, 95)

# Application order: medical credits consume the deficit before duty credits
LEAVE_TYPES = ("medical", "duty")


@dataclass(frozen=True)
class AttendanceInput:
    """Class counts and the attendance target entered by the student"""

    total_classes: int
    attended_classes: int
    target_percentage: float


@dataclass(frozen=True)
class LeaveConfig:
    """Allowance and unlock rule for one leave type"""

    leaves: int = 0
    criterion: int = 0
    only_required: bool = True


@dataclass(frozen=True)
class LeaveApplicationResult:
    """How much of one leave type was credited and the gap left over"""

    applied: int
    remaining_gap: int


@dataclass(frozen=True)
class AppliedLeave:
    """One step of the medical -> duty leave pipeline"""

    leave_type: str  # "medical" or "duty"
    configured: int
    applied: int
    remaining_gap: int


@dataclass(frozen=True)
class ProjectionResult:
    """Classes to attend to reach the target, or classes safe to skip"""

    classes_to_attend: int
    classes_to_bunk: int


@dataclass(frozen=True)
class Recommendation:
    """Headline action shown to the student"""

    action: str  # "attend" or "bunk"
    classes: int
    title: str
    description: str


@dataclass(frozen=True)
class AttendanceProjection:
    """Output of a full recalculation pass"""

    raw_percentage: float
    effective_percentage: float
    raw_deficit: int
    effective_attended: int
    leaves: Tuple[AppliedLeave, ...]
    projection: ProjectionResult
    recommendation: Recommendation
    target_met: bool

    @property
    def total_applied_leaves(self) -> int:
        return sum(leave.applied for leave in self.leaves)


@dataclass(frozen=True)
class FieldError:
    """Validation failure for a single form field"""

    field: str  # dotted path, e.g. "medical_leaves.leaves"
    message: str
