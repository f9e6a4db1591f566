"""Headline recommendation and option labels shown alongside a projection"""

from attend75.domain.models import ProjectionResult, Recommendation
from attend75.utils.formatting import format_number


def _classes(count: int) -> str:
    return "class" if count == 1 else "classes"


def build_recommendation(projection: ProjectionResult, target_percentage: float) -> Recommendation:
    """
    Pick the headline action for the student.

    Attending takes priority whenever any classes are still needed; otherwise
    the number of classes that can be skipped is shown (possibly zero).
    """
    target = format_number(target_percentage)

    if projection.classes_to_attend > 0:
        count = projection.classes_to_attend
        return Recommendation(
            action="attend",
            classes=count,
            title="Need to Attend",
            description=f"Attend {count} more {_classes(count)} consecutively to hit {target}%.",
        )

    count = projection.classes_to_bunk
    return Recommendation(
        action="bunk",
        classes=count,
        title="Safe to Bunk",
        description=f"You can safely skip {count} {_classes(count)} without falling below {target}%.",
    )


def criterion_label(criterion: int) -> str:
    """Human label for a leave criterion option"""
    if criterion == 0:
        return "Apply immediately"
    return f"Apply when ≥ {criterion}%"
