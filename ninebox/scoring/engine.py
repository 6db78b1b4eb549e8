"""
scoring/engine.py - Questionnaire scoring

Turns one rater's completed answer set into a (performance, potential) pair:

    x_sum = Σ weight(q, answer[q])  for q routed to axis x
    y_sum = Σ weight(q, answer[q])  for q routed to axis y

    level(sum) = 0  if sum <= low_max
                 1  if sum <= med_max
                 2  otherwise

The question bank and thresholds arrive as an explicit ScoringConfig built once
at the service boundary; nothing here reads global state.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from ninebox.models.enumerations import Axis, Level
from ninebox.models.question import Question, MIN_OPTION_VALUE, MAX_OPTION_VALUE
from ninebox.scoring.weights import resolve_axis, resolve_weight

logger = structlog.get_logger(__name__)


class AnswerValidationError(ValueError):
    """Answer set references unknown questions or values outside the options."""

    def __init__(self, message: str, question_id: Optional[str] = None):
        self.message = message
        self.question_id = question_id
        super().__init__(message)


@dataclass(frozen=True)
class AxisCutPoints:
    """Stored thresholds of one axis. Not validated: classification tolerates anything."""
    low_max: float
    med_max: float


@dataclass(frozen=True)
class ScoringConfig:
    """Active question bank plus per-axis thresholds."""
    questions: Tuple[Question, ...]
    thresholds: Dict[Axis, AxisCutPoints]

    @classmethod
    def build(
        cls,
        questions: Sequence[Question],
        thresholds: Optional[Mapping[str, Mapping[str, float]]],
        defaults: Mapping[str, Mapping[str, float]],
    ) -> "ScoringConfig":
        """
        Assemble a config, falling back to ``defaults`` per axis when the
        stored thresholds are missing or incomplete.
        """
        resolved: Dict[Axis, AxisCutPoints] = {}
        for axis in Axis:
            stored = (thresholds or {}).get(axis.value) or {}
            fallback = defaults[axis.value]
            resolved[axis] = AxisCutPoints(
                low_max=float(stored.get("low_max", fallback["low_max"])),
                med_max=float(stored.get("med_max", fallback["med_max"])),
            )
        return cls(questions=tuple(questions), thresholds=resolved)


@dataclass(frozen=True)
class AxisSums:
    x_sum: float
    y_sum: float


@dataclass(frozen=True)
class ScoringResult:
    """Finalized classification of one answer set."""
    performance: Level
    potential: Level
    x_sum: float
    y_sum: float
    answers: Dict[str, int] = field(default_factory=dict)


def classify_level(score: float, cut_points: AxisCutPoints) -> Level:
    """
    Map an axis sum to a level.

    Performs no validation: with low_max >= med_max the moderate band is
    simply empty.

    Examples:
        >>> classify_level(13, AxisCutPoints(13, 20))
        <Level.LOW: 0>
        >>> classify_level(21, AxisCutPoints(13, 20))
        <Level.HIGH: 2>
    """
    if score <= cut_points.low_max:
        return Level.LOW
    if score <= cut_points.med_max:
        return Level.MODERATE
    return Level.HIGH


class AssessmentScorer:
    """
    Score answer sets against one ScoringConfig.

    Stateless apart from the config; scoring the same answers twice yields the
    same result.
    """

    def __init__(self, config: ScoringConfig):
        self.config = config

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.config.questions]

    def validate_answers(self, answers: Mapping[str, int]) -> None:
        """
        Reject answers for unknown questions and values that are not one of
        the question's options.

        Raises:
            AnswerValidationError: on the first offending answer
        """
        by_id = {q.id: q for q in self.config.questions}
        for question_id, value in answers.items():
            question = by_id.get(question_id)
            if question is None:
                raise AnswerValidationError(
                    f"Unknown question '{question_id}'", question_id
                )
            if not MIN_OPTION_VALUE <= value <= MAX_OPTION_VALUE:
                raise AnswerValidationError(
                    f"Answer to '{question_id}' must be between "
                    f"{MIN_OPTION_VALUE} and {MAX_OPTION_VALUE}, got {value}",
                    question_id,
                )
            if question.option_for(value) is None:
                raise AnswerValidationError(
                    f"Answer to '{question_id}' is not one of its options: {value}",
                    question_id,
                )

    def missing_answers(self, answers: Mapping[str, int]) -> List[str]:
        """Ids of bank questions without an answer, in bank order."""
        return [q.id for q in self.config.questions if q.id not in answers]

    def axis_sums(self, answers: Mapping[str, int]) -> AxisSums:
        """
        Sum resolved weights per axis. Unanswered questions contribute nothing.
        """
        sums = {Axis.X: 0.0, Axis.Y: 0.0}
        for question in self.config.questions:
            if question.id not in answers:
                continue
            weight = resolve_weight(question, answers[question.id])
            sums[resolve_axis(question)] += weight
        return AxisSums(x_sum=sums[Axis.X], y_sum=sums[Axis.Y])

    def classify(self, sums: AxisSums) -> Tuple[Level, Level]:
        """Return (performance, potential) for the given sums."""
        performance = classify_level(sums.x_sum, self.config.thresholds[Axis.X])
        potential = classify_level(sums.y_sum, self.config.thresholds[Axis.Y])
        return performance, potential

    def finalize(self, answers: Mapping[str, int]) -> Optional[ScoringResult]:
        """
        Classify a complete answer set.

        Returns:
            ScoringResult, or None while any bank question is unanswered
            (the caller must not persist anything in that case).
        """
        missing = self.missing_answers(answers)
        if missing:
            logger.debug(
                "assessment_not_ready",
                answered=len(answers),
                missing=missing,
            )
            return None

        sums = self.axis_sums(answers)
        performance, potential = self.classify(sums)

        logger.info(
            "assessment_finalized",
            questions=len(self.config.questions),
            x_sum=sums.x_sum,
            y_sum=sums.y_sum,
            performance=int(performance),
            potential=int(potential),
        )

        return ScoringResult(
            performance=performance,
            potential=potential,
            x_sum=sums.x_sum,
            y_sum=sums.y_sum,
            answers=dict(answers),
        )
