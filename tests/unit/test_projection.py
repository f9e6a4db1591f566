"""Unit tests for leave crediting and attend/bunk projection"""

import pytest
from attend75.domain.models import AttendanceInput, LeaveConfig
from attend75.domain.projection import (
    apply_leave,
    apply_leaves,
    project_attendance,
    project_required_delta,
    raw_deficit,
    raw_percentage,
)


def test_raw_percentage_zero_total():
    """Test no classes held yields 0% rather than dividing by zero"""
    assert raw_percentage(0, 0) == 0.0
    assert raw_percentage(100, 70) == 70.0


def test_raw_deficit():
    """Test deficit is ceil(target * total) - attended, floored at zero"""
    assert raw_deficit(100, 70, 75) == 5
    assert raw_deficit(100, 80, 75) == 0
    assert raw_deficit(0, 0, 75) == 0
    # 0.75 * 7 = 5.25 -> 6 needed
    assert raw_deficit(7, 4, 75) == 2


def test_apply_leave_locked_below_criterion():
    """Test leave stays locked while raw attendance is under its criterion"""
    leave = LeaveConfig(leaves=5, criterion=75, only_required=True)
    result = apply_leave(leave, 70.0, True, 5)

    assert result.applied == 0
    assert result.remaining_gap == 5


@pytest.mark.parametrize("only_required", [True, False])
@pytest.mark.parametrize("raw_below_target", [True, False])
def test_apply_leave_criterion_zero_applies_full(only_required, raw_below_target):
    """Test criterion 0 credits the whole allowance regardless of the other flags"""
    leave = LeaveConfig(leaves=10, criterion=0, only_required=only_required)
    result = apply_leave(leave, 0.0, raw_below_target, 5)

    assert result.applied == 10
    assert result.remaining_gap == 0  # 5 - 10 floored at zero


def test_apply_leave_only_required_caps_at_gap():
    """Test gap-filling leave covers at most the remaining gap"""
    leave = LeaveConfig(leaves=8, criterion=70, only_required=True)
    result = apply_leave(leave, 70.0, True, 5)

    assert result.applied == 5
    assert result.remaining_gap == 0


def test_apply_leave_only_required_partial_cover():
    """Test gap-filling leave smaller than the gap is used up entirely"""
    leave = LeaveConfig(leaves=3, criterion=70, only_required=True)
    result = apply_leave(leave, 70.0, True, 5)

    assert result.applied == 3
    assert result.remaining_gap == 2


def test_apply_leave_only_required_skipped_when_above_target():
    """Test gap-filling leave is not used when raw attendance already meets target"""
    leave = LeaveConfig(leaves=5, criterion=70, only_required=True)
    result = apply_leave(leave, 80.0, False, 0)

    assert result.applied == 0
    assert result.remaining_gap == 0


def test_apply_leave_not_only_required_applies_full():
    """Test unlocked leave without only_required is credited in full"""
    leave = LeaveConfig(leaves=8, criterion=70, only_required=False)
    result = apply_leave(leave, 72.0, True, 5)

    assert result.applied == 8
    assert result.remaining_gap == 0


def test_apply_leave_negative_gap_treated_as_zero():
    """Test a negative incoming gap is clamped rather than propagated"""
    gap_filling = apply_leave(LeaveConfig(leaves=4, criterion=50, only_required=True), 60.0, True, -3)
    assert gap_filling.applied == 0
    assert gap_filling.remaining_gap == 0

    immediate = apply_leave(LeaveConfig(leaves=4, criterion=0, only_required=True), 60.0, True, -3)
    assert immediate.applied == 4
    assert immediate.remaining_gap == 0


def test_apply_leaves_duty_consumes_gap_left_by_medical():
    """Test duty leave sees only the gap remaining after medical leave"""
    leaves = apply_leaves(
        [
            ("medical", LeaveConfig(leaves=3, criterion=70, only_required=True)),
            ("duty", LeaveConfig(leaves=5, criterion=60, only_required=True)),
        ],
        70.0,
        True,
        5,
    )

    medical, duty = leaves
    assert (medical.leave_type, medical.configured, medical.applied, medical.remaining_gap) == ("medical", 3, 3, 2)
    assert (duty.leave_type, duty.configured, duty.applied, duty.remaining_gap) == ("duty", 5, 2, 0)


def test_apply_leaves_gap_never_increases():
    """Test the remaining gap is non-increasing through the pipeline"""
    leaves = apply_leaves(
        [
            ("medical", LeaveConfig(leaves=2, criterion=0, only_required=False)),
            ("duty", LeaveConfig(leaves=1, criterion=90, only_required=True)),
        ],
        65.0,
        True,
        10,
    )

    gaps = [10] + [leave.remaining_gap for leave in leaves]
    assert gaps == sorted(gaps, reverse=True)
    assert leaves[1].applied == 0  # 65% raw does not unlock a 90% criterion


def test_project_required_delta_guards():
    """Test zero total, zero target and 100% target edge cases"""
    assert project_required_delta(0, 0, 75).classes_to_attend == 0
    assert project_required_delta(0, 0, 75).classes_to_bunk == 0
    assert project_required_delta(100, 70, 0).classes_to_attend == 0

    full = project_required_delta(50, 45, 100)
    assert full.classes_to_attend == 5
    assert full.classes_to_bunk == 0


def test_project_required_delta_exact_boundary():
    """Test attending is not required when exactly on target"""
    result = project_required_delta(100, 75, 75)

    assert result.classes_to_attend == 0
    assert result.classes_to_bunk == 0


def test_project_required_delta_solves_inequalities():
    """Test attend/bunk counts are the tightest integers meeting the target"""
    total, attended, target = 40, 25, 75
    result = project_required_delta(total, attended, target)

    n = result.classes_to_attend
    assert (attended + n) / (total + n) >= target / 100
    assert (attended + n - 1) / (total + n - 1) < target / 100

    total, attended = 40, 36
    result = project_required_delta(total, attended, target)
    n = result.classes_to_bunk
    assert attended / (total + n) >= target / 100
    assert attended / (total + n + 1) < target / 100


def test_project_required_delta_monotonic_in_attended():
    """Test more effective attendance never needs more classes or allows fewer bunks"""
    previous = project_required_delta(60, 0, 75)
    for attended in range(1, 61):
        current = project_required_delta(60, attended, 75)
        assert current.classes_to_attend <= previous.classes_to_attend
        assert current.classes_to_bunk >= previous.classes_to_bunk
        previous = current


def test_scenario_below_target_no_leaves(short_attendance: AttendanceInput, no_leaves: LeaveConfig):
    """Test 70/100 at 75%: 5 short on raw, 20 consecutive classes needed"""
    projection = project_attendance(short_attendance, no_leaves, no_leaves)

    assert projection.raw_deficit == 5
    assert projection.projection.classes_to_attend == 20
    assert projection.projection.classes_to_bunk == 0
    assert projection.target_met is False
    assert projection.recommendation.action == "attend"


def test_scenario_above_target_no_leaves(no_leaves: LeaveConfig):
    """Test 80/100 at 75%: nothing to attend, 6 classes can be skipped"""
    attendance = AttendanceInput(total_classes=100, attended_classes=80, target_percentage=75)
    projection = project_attendance(attendance, no_leaves, no_leaves)

    assert projection.projection.classes_to_attend == 0
    assert projection.projection.classes_to_bunk == 6
    assert projection.recommendation.action == "bunk"
    assert projection.recommendation.classes == 6


def test_scenario_immediate_medical_leave(short_attendance: AttendanceInput, no_leaves: LeaveConfig):
    """Test criterion-0 medical leave is credited in full even with only_required set"""
    medical = LeaveConfig(leaves=10, criterion=0, only_required=True)
    projection = project_attendance(short_attendance, medical, no_leaves)

    assert projection.leaves[0].applied == 10
    assert projection.effective_attended == 80
    assert projection.effective_percentage == 80.0
    assert projection.projection.classes_to_bunk == 6
    assert projection.target_met is True


def test_scenario_gap_filling_medical_leave(short_attendance: AttendanceInput, no_leaves: LeaveConfig):
    """Test 70% raw unlocks a 70% criterion and all 3 leaves fill part of the gap"""
    medical = LeaveConfig(leaves=3, criterion=70, only_required=True)
    projection = project_attendance(short_attendance, medical, no_leaves)

    assert projection.leaves[0].applied == 3
    assert projection.leaves[0].remaining_gap == 2
    assert projection.effective_attended == 73
    assert projection.projection.classes_to_attend == 8


def test_scenario_full_target(no_leaves: LeaveConfig):
    """Test a 100% target needs every missed class made up and never allows bunking"""
    attendance = AttendanceInput(total_classes=50, attended_classes=45, target_percentage=100)
    projection = project_attendance(attendance, no_leaves, no_leaves)

    assert projection.projection.classes_to_attend == 5
    assert projection.projection.classes_to_bunk == 0


def test_duty_criterion_uses_raw_not_effective(short_attendance: AttendanceInput):
    """Test duty unlock ignores the boost from medical leave"""
    medical = LeaveConfig(leaves=10, criterion=0, only_required=True)
    duty = LeaveConfig(leaves=5, criterion=75, only_required=False)
    projection = project_attendance(short_attendance, medical, duty)

    # Effective attendance is 80% after medical, but raw 70% < 75%
    assert projection.leaves[1].applied == 0
    assert projection.effective_attended == 80


def test_medical_and_duty_close_gap_together(short_attendance: AttendanceInput):
    """Test medical and duty leave together lift attendance exactly to target"""
    medical = LeaveConfig(leaves=3, criterion=70, only_required=True)
    duty = LeaveConfig(leaves=5, criterion=60, only_required=True)
    projection = project_attendance(short_attendance, medical, duty)

    assert [leave.applied for leave in projection.leaves] == [3, 2]
    assert projection.total_applied_leaves == 5
    assert projection.effective_percentage == 75.0
    assert projection.projection.classes_to_attend == 0
    assert projection.target_met is True
