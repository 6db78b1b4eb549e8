"""
scoring/weights.py - Per-answer weight resolution

Maps (question, selected option value) to the numeric contribution added to
the question's axis sum.

Resolution order:
    1. Option carries an explicit weight  -> that weight, verbatim
    2. Calibration question               -> 0: -4, 1: 0, 2: +2, other: 0
    3. Standard question                  -> 0: 1, 1: 2, 2: 3, other: value + 1
"""

from typing import Dict

from ninebox.models.enumerations import Axis, QuestionCategory
from ninebox.models.question import Question

# Calibration items penalise a "high risk" answer harder than they reward a
# "low risk" one.
CALIBRATION_DEFAULT_WEIGHTS: Dict[int, float] = {0: -4, 1: 0, 2: 2}
CALIBRATION_FALLBACK_WEIGHT: float = 0

STANDARD_DEFAULT_WEIGHTS: Dict[int, float] = {0: 1, 1: 2, 2: 3}


def resolve_weight(question: Question, selected: int) -> float:
    """
    Resolve the contribution of one answer.

    Args:
        question: Question being answered
        selected: Selected option value

    Returns:
        Numeric contribution for the question's axis

    Examples:
        >>> resolve_weight(standard_q, 2)
        3
        >>> resolve_weight(calibration_q, 0)
        -4
    """
    option = question.option_for(selected)
    if option is not None and option.weight is not None:
        return option.weight

    if question.is_calibration:
        return CALIBRATION_DEFAULT_WEIGHTS.get(selected, CALIBRATION_FALLBACK_WEIGHT)

    # Values past the 0/1/2 table continue the same progression
    return STANDARD_DEFAULT_WEIGHTS.get(selected, selected + 1)


def resolve_axis(question: Question) -> Axis:
    """Explicit axis when set, else x for performance and y for everything else."""
    if question.axis is not None:
        return Axis(question.axis)
    if question.category == QuestionCategory.PERFORMANCE:
        return Axis.X
    return Axis.Y
