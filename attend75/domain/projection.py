"""Attendance projector - leave crediting and attend/bunk projection"""

import math
from typing import Iterable, Tuple
from attend75.domain.models import (
    AttendanceInput,
    AttendanceProjection,
    AppliedLeave,
    LeaveApplicationResult,
    LeaveConfig,
    ProjectionResult,
    LEAVE_TYPES,
)
from attend75.domain.recommendation import build_recommendation


def raw_percentage(total_classes: int, attended_classes: int) -> float:
    """Attendance percentage ignoring any leave credit (0 when no classes held)"""
    if total_classes <= 0:
        return 0.0
    return attended_classes / total_classes * 100


def raw_deficit(total_classes: int, attended_classes: int, target_percentage: float) -> int:
    """
    Additional raw-attended classes needed to hit the target with no leave credit.

    ceil(target_ratio * total) - attended, floored at zero. This is the gap the
    gap-filling leave types are allowed to consume.
    """
    if total_classes <= 0:
        return 0
    target_ratio = target_percentage / 100
    return max(0, math.ceil(target_ratio * total_classes) - attended_classes)


def apply_leave(
    leave: LeaveConfig,
    current_raw_percentage: float,
    raw_below_target: bool,
    remaining_gap: int,
) -> LeaveApplicationResult:
    """
    Credit one leave type against the remaining deficit.

    Rules:
    - Locked while raw attendance is below the leave's criterion
    - criterion != 0 and only_required: gap-filling, covers at most the
      remaining gap and only while raw attendance is below target
    - Otherwise the whole allowance is credited once unlocked

    The criterion is always checked against raw attendance, never against
    attendance already boosted by an earlier leave type.
    """
    remaining_gap = max(0, remaining_gap)

    if current_raw_percentage < leave.criterion:
        return LeaveApplicationResult(applied=0, remaining_gap=remaining_gap)

    if leave.criterion != 0 and leave.only_required:
        if not raw_below_target or remaining_gap <= 0:
            return LeaveApplicationResult(applied=0, remaining_gap=remaining_gap)
        applied = min(leave.leaves, remaining_gap)
        return LeaveApplicationResult(applied=applied, remaining_gap=remaining_gap - applied)

    applied = leave.leaves
    return LeaveApplicationResult(applied=applied, remaining_gap=max(0, remaining_gap - applied))


def apply_leaves(
    ordered_leaves: Iterable[Tuple[str, LeaveConfig]],
    current_raw_percentage: float,
    raw_below_target: bool,
    initial_gap: int,
) -> Tuple[AppliedLeave, ...]:
    """Fold apply_leave over leave types in order, threading the remaining gap"""
    remaining_gap = initial_gap
    results = []

    for leave_type, leave in ordered_leaves:
        result = apply_leave(leave, current_raw_percentage, raw_below_target, remaining_gap)
        remaining_gap = result.remaining_gap
        results.append(
            AppliedLeave(
                leave_type=leave_type,
                configured=leave.leaves,
                applied=result.applied,
                remaining_gap=result.remaining_gap,
            )
        )

    return tuple(results)


def project_required_delta(
    total_classes: int,
    effective_attended: int,
    target_percentage: float,
) -> ProjectionResult:
    """
    Classes to attend (or safe to skip) relative to the target.

    - classes_to_attend: smallest n with (attended + n) / (total + n) >= target
    - classes_to_bunk: largest n with attended / (total + n) >= target

    At a 100% target every missed class must be made up and skipping is
    never safe.
    """
    target = target_percentage / 100

    if target <= 0 or total_classes <= 0:
        return ProjectionResult(classes_to_attend=0, classes_to_bunk=0)

    if target >= 1:
        return ProjectionResult(
            classes_to_attend=max(0, total_classes - effective_attended),
            classes_to_bunk=0,
        )

    current = effective_attended / total_classes

    if current >= target:
        classes_to_attend = 0
    else:
        classes_to_attend = max(
            0, math.ceil((target * total_classes - effective_attended) / (1 - target))
        )

    classes_to_bunk = max(0, math.floor(effective_attended / target - total_classes))

    return ProjectionResult(classes_to_attend=classes_to_attend, classes_to_bunk=classes_to_bunk)


def project_attendance(
    attendance: AttendanceInput,
    medical_leaves: LeaveConfig,
    duty_leaves: LeaveConfig,
) -> AttendanceProjection:
    """
    Main entry point: one full recalculation pass over sanitized form state.

    Flow:
    1. Raw percentage and deficit from attended classes alone
    2. Medical leave, then duty leave on whatever gap medical left
    3. Effective attendance = attended + credited leaves (total unchanged)
    4. Attend/bunk projection and headline recommendation
    """
    total = attendance.total_classes
    attended = attendance.attended_classes
    target_percentage = attendance.target_percentage

    current_raw = raw_percentage(total, attended)
    raw_below_target = total > 0 and current_raw < target_percentage
    deficit = raw_deficit(total, attended, target_percentage)

    leaves = apply_leaves(
        zip(LEAVE_TYPES, (medical_leaves, duty_leaves)),
        current_raw,
        raw_below_target,
        deficit,
    )

    effective_attended = attended + sum(leave.applied for leave in leaves)
    effective_percentage = raw_percentage(total, effective_attended)

    projection = project_required_delta(total, effective_attended, target_percentage)

    return AttendanceProjection(
        raw_percentage=current_raw,
        effective_percentage=effective_percentage,
        raw_deficit=deficit,
        effective_attended=effective_attended,
        leaves=leaves,
        projection=projection,
        recommendation=build_recommendation(projection, target_percentage),
        target_met=effective_percentage >= target_percentage,
    )
