"""
scoring/aggregation.py - Multi-rater aggregation

Combines every rater's assessment of a subject into one grid placement:

    performance = round_half_up(mean(performance levels))
    potential   = round_half_up(mean(potential levels))
    risk_flag   = performance == 2 and potential == 2
                  and any(answer[retention question] == risk value)
    ai_advice   = advice of the most recent assessment that has one

With a rater filter the assessments pass through one by one instead, so that
admins can audit and delete individual submissions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

import structlog

from ninebox.models.enumerations import Level
from ninebox.scoring.utils import rounded_mean

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RetentionRiskRule:
    """Which calibration answer signals strong retention concern."""
    question_id: str
    risk_value: int

    def is_signalled(self, answers: Dict[str, int]) -> bool:
        return answers.get(self.question_id) == self.risk_value


@dataclass(frozen=True)
class RaterAssessment:
    """One stored assessment, reduced to what aggregation needs."""
    id: str
    subject_id: str
    rater_id: str
    performance: Level
    potential: Level
    date: datetime
    answers: Dict[str, int] = field(default_factory=dict)
    ai_advice: Optional[str] = None


@dataclass
class AggregateResult:
    """Grid placement of one subject (or one assessment when passed through)."""
    subject_id: str
    performance: Level
    potential: Level
    timestamp: datetime
    risk_flag: bool
    assessment_count: int
    assessment_id: Optional[str] = None
    rater_id: Optional[str] = None
    answers: Optional[Dict[str, int]] = None
    ai_advice: Optional[str] = None


def is_top_talent(performance: int, potential: int) -> bool:
    return performance == Level.HIGH and potential == Level.HIGH


def aggregate_assessments(
    assessments: Iterable[RaterAssessment],
    risk_rule: RetentionRiskRule,
    rater_id: Optional[str] = None,
) -> List[AggregateResult]:
    """
    Aggregate assessments per subject.

    Args:
        assessments: Stored assessments, already narrowed by company if needed
        risk_rule: Retention question and the answer value that flags risk
        rater_id: When set, return that rater's assessments unaggregated

    Returns:
        One result per subject (first-seen order), or one per assessment of
        ``rater_id``. Subjects without assessments produce nothing.
    """
    if rater_id is not None:
        results = [
            AggregateResult(
                subject_id=a.subject_id,
                performance=Level(a.performance),
                potential=Level(a.potential),
                timestamp=a.date,
                risk_flag=is_top_talent(a.performance, a.potential)
                and risk_rule.is_signalled(a.answers),
                assessment_count=1,
                assessment_id=a.id,
                rater_id=a.rater_id,
                answers=dict(a.answers),
                ai_advice=a.ai_advice,
            )
            for a in assessments
            if a.rater_id == rater_id
        ]
        logger.info("assessments_passed_through", rater_id=rater_id, results=len(results))
        return results

    groups: Dict[str, List[RaterAssessment]] = {}
    for assessment in assessments:
        groups.setdefault(assessment.subject_id, []).append(assessment)

    results: List[AggregateResult] = []
    for subject_id, group in groups.items():
        performance = Level(rounded_mean([a.performance for a in group]))
        potential = Level(rounded_mean([a.potential for a in group]))
        risk_flag = is_top_talent(performance, potential) and any(
            risk_rule.is_signalled(a.answers) for a in group
        )
        advised = [a for a in group if a.ai_advice]
        latest_advice = max(advised, key=lambda a: a.date).ai_advice if advised else None
        results.append(
            AggregateResult(
                subject_id=subject_id,
                performance=performance,
                potential=potential,
                timestamp=max(a.date for a in group),
                risk_flag=risk_flag,
                assessment_count=len(group),
                ai_advice=latest_advice,
            )
        )

    logger.info(
        "assessments_aggregated",
        subjects=len(results),
        flagged=sum(1 for r in results if r.risk_flag),
    )
    return results
