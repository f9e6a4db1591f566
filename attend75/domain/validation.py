"""Form-state sanitization and validation ahead of the projector"""

import math
from typing import List
from attend75.domain.models import AttendanceInput, FieldError, LeaveConfig, LEAVE_CRITERIA_OPTIONS
from attend75.domain.exceptions import InvalidAttendanceInputError


def sanitize_attendance(total_classes: int, attended_classes: int, target_percentage: float) -> AttendanceInput:
    """
    Clamp class counts the way the form does on every change.

    Total never goes below zero and attended is held within [0, total], so
    attended <= total holds before validation even runs. The target is left
    untouched for validation to judge.
    """
    total = max(0, total_classes)
    attended = min(max(0, attended_classes), total)
    return AttendanceInput(total_classes=total, attended_classes=attended, target_percentage=target_percentage)


def _validate_leave(key: str, leave: LeaveConfig) -> List[FieldError]:
    errors = []
    if leave.leaves < 0:
        errors.append(FieldError(f"{key}.leaves", "Cannot be negative"))
    if leave.criterion not in LEAVE_CRITERIA_OPTIONS:
        errors.append(FieldError(f"{key}.criterion", "Invalid option"))
    return errors


def validate_form(
    attendance: AttendanceInput,
    medical_leaves: LeaveConfig,
    duty_leaves: LeaveConfig,
) -> List[FieldError]:
    """
    Collect every field error for the current form state.

    Requirements:
    - At least one class held
    - 0 <= attended <= total
    - Target a finite number between 1 and 100
    - Leave counts non-negative, criteria from the fixed option set
    - Medical + duty leaves cannot exceed the classes actually missed
    """
    errors: List[FieldError] = []

    if attendance.total_classes < 1:
        errors.append(FieldError("total_classes", "Enter at least 1 class"))

    if attendance.attended_classes < 0:
        errors.append(FieldError("attended_classes", "Cannot be negative"))
    elif attendance.attended_classes > attendance.total_classes:
        errors.append(FieldError("attended_classes", "Attended classes cannot exceed total classes"))

    if not math.isfinite(attendance.target_percentage):
        errors.append(FieldError("target_percentage", "Target must be a number"))
    elif attendance.target_percentage < 1:
        errors.append(FieldError("target_percentage", "Target must be greater than 0"))
    elif attendance.target_percentage > 100:
        errors.append(FieldError("target_percentage", "Target cannot exceed 100"))

    errors.extend(_validate_leave("medical_leaves", medical_leaves))
    errors.extend(_validate_leave("duty_leaves", duty_leaves))

    missed = max(0, attendance.total_classes - attendance.attended_classes)
    total_leaves = medical_leaves.leaves + duty_leaves.leaves
    if total_leaves > missed:
        message = f"Total leaves ({total_leaves}) exceed missed classes ({missed})."
        errors.append(FieldError("medical_leaves.leaves", message))
        errors.append(FieldError("duty_leaves.leaves", message))

    return errors


def ensure_valid(
    attendance: AttendanceInput,
    medical_leaves: LeaveConfig,
    duty_leaves: LeaveConfig,
) -> None:
    """
    Raises:
        InvalidAttendanceInputError: If any field fails validation
    """
    errors = validate_form(attendance, medical_leaves, duty_leaves)
    if errors:
        raise InvalidAttendanceInputError(errors)
