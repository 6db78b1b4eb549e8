"""
Scoring Service - Nine-Box Talent Review
ninebox/services/scoring_service.py

Orchestrates the scoring core for the API:

  1. Load the question bank and thresholds (Redis cache first, then the store)
  2. Build one explicit ScoringConfig, filling missing thresholds from settings
  3. Preview or finalize answer sets with AssessmentScorer
  4. Persist finalized assessments (superseding the rater's earlier one)
  5. Aggregate stored assessments per employee and attach grid categories
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Mapping, Optional

import redis

from ninebox.config import Settings, settings as app_settings
from ninebox.models.settings import ScoringConfigSnapshot
from ninebox.repositories.assessment_repository import AssessmentRepository
from ninebox.repositories.employee_repository import EmployeeRepository
from ninebox.repositories.question_repository import QuestionRepository
from ninebox.repositories.settings_repository import SettingsRepository
from ninebox.repositories.user_repository import UserRepository
from ninebox.scoring.aggregation import (
    AggregateResult,
    RaterAssessment,
    RetentionRiskRule,
    aggregate_assessments,
)
from ninebox.scoring.engine import AssessmentScorer, ScoringConfig, ScoringResult
from ninebox.scoring.grid import get_category
from ninebox.services.cache import CACHE_KEY_SCORING_CONFIG, TTL_SCORING_CONFIG, get_cache

logger = logging.getLogger(__name__)


class ScoringService:
    """
    Scoring, persistence and aggregation of assessments.

    Reads from:
      - questions, settings.thresholds (scoring configuration)
      - assessments, employees, users (results)

    Writes to:
      - assessments
    """

    def __init__(
        self,
        question_repo: QuestionRepository,
        settings_repo: SettingsRepository,
        assessment_repo: AssessmentRepository,
        employee_repo: EmployeeRepository,
        user_repo: UserRepository,
        config: Settings = app_settings,
    ):
        self.question_repo = question_repo
        self.settings_repo = settings_repo
        self.assessment_repo = assessment_repo
        self.employee_repo = employee_repo
        self.user_repo = user_repo
        self.config = config

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def risk_rule(self) -> RetentionRiskRule:
        return RetentionRiskRule(
            question_id=self.config.RETENTION_QUESTION_ID,
            risk_value=self.config.RETENTION_RISK_VALUE,
        )

    def _load_snapshot(self) -> ScoringConfigSnapshot:
        cache = get_cache()
        if cache:
            try:
                cached = cache.get(CACHE_KEY_SCORING_CONFIG, ScoringConfigSnapshot)
                if cached:
                    logger.debug("Scoring config cache hit")
                    return cached
            except redis.RedisError as e:
                logger.warning(f"Scoring config cache read failed: {e}")

        snapshot = ScoringConfigSnapshot(
            questions=self.question_repo.get_all(),
            thresholds=self.settings_repo.get_thresholds(),
        )

        if cache:
            try:
                cache.set(CACHE_KEY_SCORING_CONFIG, snapshot, TTL_SCORING_CONFIG)
            except redis.RedisError as e:
                logger.warning(f"Scoring config cache write failed: {e}")
        return snapshot

    def load_config(self) -> ScoringConfig:
        """Active question bank and thresholds as one ScoringConfig."""
        snapshot = self._load_snapshot()
        return ScoringConfig.build(
            snapshot.questions,
            snapshot.thresholds,
            defaults=self.config.default_thresholds,
        )

    def invalidate_config(self) -> None:
        """Drop the cached scoring config after questions or thresholds change."""
        cache = get_cache()
        if cache:
            try:
                cache.delete(CACHE_KEY_SCORING_CONFIG)
            except redis.RedisError as e:
                logger.warning(f"Scoring config cache invalidation failed: {e}")

    def get_thresholds(self) -> Dict[str, Dict[str, float]]:
        """Effective thresholds per axis (stored values over defaults)."""
        config = self.load_config()
        return {
            axis.value: {"low_max": cut.low_max, "med_max": cut.med_max}
            for axis, cut in config.thresholds.items()
        }

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def preview(self, answers: Mapping[str, int]) -> Dict[str, Any]:
        """
        Score an answer set without persisting it.

        Raises:
            AnswerValidationError: unknown question or value not an option
        """
        scorer = AssessmentScorer(self.load_config())
        scorer.validate_answers(answers)
        missing = scorer.missing_answers(answers)
        result = scorer.finalize(answers)

        response: Dict[str, Any] = {
            "ready": result is not None,
            "answered": len(answers),
            "total_questions": len(scorer.question_ids),
            "missing_question_ids": missing,
        }
        if result is not None:
            response.update(
                performance=result.performance,
                potential=result.potential,
                x_sum=result.x_sum,
                y_sum=result.y_sum,
                category=self._category(result.performance, result.potential),
            )
        return response

    def submit(self, user_id: str, employee_id: str, answers: Mapping[str, int]) -> Optional[Dict[str, Any]]:
        """
        Finalize and persist one rater's assessment.

        Returns:
            Stored assessment dict, or None when the answer set is incomplete
            (nothing is persisted then).

        Raises:
            AnswerValidationError: unknown question or value not an option
            EntityNotFoundException: employee profile does not exist
        """
        scorer = AssessmentScorer(self.load_config())
        scorer.validate_answers(answers)
        result: Optional[ScoringResult] = scorer.finalize(answers)
        if result is None:
            logger.info(f"Rejected incomplete assessment of {employee_id} by {user_id}")
            return None
        return self.assessment_repo.replace_for_rater(user_id, employee_id, result)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def my_results(self, user_id: str) -> List[Dict[str, Any]]:
        """The caller's own assessments joined with the assessed profiles."""
        return self.aggregate_results(rater_id=user_id)

    def aggregate_results(
        self,
        rater_id: Optional[str] = None,
        company_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Aggregate stored assessments per employee.

        Args:
            rater_id: Return this rater's assessments one by one instead
            company_id: Only assessments made by users of this company

        Returns:
            EmployeeResult-shaped dicts. Assessments whose employee profile
            no longer exists are skipped.
        """
        rater_ids = None
        if company_id:
            rater_ids = [u["id"] for u in self.user_repo.get_all(company_id=company_id)]

        stored = self.assessment_repo.get_all(rater_ids=rater_ids)
        assessments = [
            RaterAssessment(
                id=a["id"],
                subject_id=a["employee_id"],
                rater_id=a["user_id"],
                performance=a["performance"],
                potential=a["potential"],
                date=a["date"],
                answers=a["answers"],
                ai_advice=a["ai_advice"],
            )
            for a in stored
        ]

        aggregates = aggregate_assessments(assessments, self.risk_rule, rater_id=rater_id)
        employees = {e["id"]: e for e in self.employee_repo.get_all()}

        results = []
        for aggregate in aggregates:
            employee = employees.get(aggregate.subject_id)
            if employee is None:
                logger.warning(f"Skipping result for missing employee {aggregate.subject_id}")
                continue
            results.append(self._to_result(employee, aggregate))
        return results

    def _to_result(self, employee: Dict[str, Any], aggregate: AggregateResult) -> Dict[str, Any]:
        return {
            "id": employee["id"],
            "name": employee["name"],
            "position": employee["position"],
            "company_id": employee["company_id"],
            "performance": aggregate.performance,
            "potential": aggregate.potential,
            "date": aggregate.timestamp,
            "category": self._category(aggregate.performance, aggregate.potential),
            "assessment_id": aggregate.assessment_id,
            "assessed_by_user_id": aggregate.rater_id,
            "answers": aggregate.answers,
            "risk_flag": aggregate.risk_flag,
            "assessment_count": aggregate.assessment_count,
            "ai_advice": aggregate.ai_advice,
        }

    @staticmethod
    def _category(performance: int, potential: int) -> Dict[str, Any]:
        return asdict(get_category(performance, potential))
