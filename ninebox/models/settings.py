from pydantic import BaseModel, Field, model_validator
from typing import Dict, List, Optional

from ninebox.models.question import Question


class AxisThresholds(BaseModel):
    """
    Two cut points partitioning one axis into low / moderate / high.
    """

    low_max: float = Field(..., description="Highest sum still classified as low")
    med_max: float = Field(..., description="Highest sum still classified as moderate")

    @model_validator(mode="after")
    def validate_cut_points(self):
        """Ensure low_max < med_max."""
        if self.low_max >= self.med_max:
            raise ValueError("low_max must be less than med_max")
        return self


class StoredAxisThresholds(BaseModel):
    """
    Cut points of one axis as read back from the store. Not re-validated:
    classification accepts any pair, so reads do too.
    """

    low_max: float
    med_max: float


class StoredThresholdSettings(BaseModel):
    x: StoredAxisThresholds
    y: StoredAxisThresholds


class ThresholdSettings(BaseModel):
    """
    Thresholds of both axes: x (performance) and y (potential).
    """

    x: AxisThresholds
    y: AxisThresholds


class ScoringConfigSnapshot(BaseModel):
    """
    Question bank plus stored thresholds as loaded from the store; the cached
    form of the scoring configuration. Thresholds are kept unvalidated.
    """

    questions: List[Question]
    thresholds: Optional[Dict[str, Dict[str, float]]] = None
