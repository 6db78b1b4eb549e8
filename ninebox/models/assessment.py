from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Dict, Optional, List

from ninebox.models.enumerations import Level
from ninebox.models.grid import GridCategoryResponse
from ninebox.models.question import MIN_OPTION_VALUE, MAX_OPTION_VALUE

AnswerValue = Annotated[int, Field(ge=MIN_OPTION_VALUE, le=MAX_OPTION_VALUE, strict=True)]


class ScorePreviewRequest(BaseModel):
    """
    Answer set to classify without persisting anything.
    """

    answers: Dict[str, AnswerValue] = Field(
        ...,
        description="Question id -> selected option value (0-3)"
    )


class AssessmentCreate(ScorePreviewRequest):
    """
    Model for submitting one rater's assessment of one employee.
    """

    employee_id: str = Field(
        ...,
        min_length=1,
        description="Assessed employee profile"
    )


class ScoringResultResponse(BaseModel):
    """
    Outcome of scoring an answer set. ``ready`` is False while answers are missing.
    """

    ready: bool
    answered: int
    total_questions: int
    missing_question_ids: List[str] = Field(default_factory=list)
    performance: Optional[Level] = None
    potential: Optional[Level] = None
    x_sum: Optional[float] = None
    y_sum: Optional[float] = None
    category: Optional[GridCategoryResponse] = None


class AssessmentResponse(BaseModel):
    """
    Model returned in API responses.
    """

    id: str
    employee_id: str
    user_id: str = Field(..., description="Rater")
    performance: Level
    potential: Level
    answers: Dict[str, int]
    x_sum: Optional[float] = None
    y_sum: Optional[float] = None
    date: datetime = Field(..., description="Submission timestamp (UTC)")
    ai_advice: Optional[str] = Field(default=None, description="Generated development advice")

    class Config:
        from_attributes = True


class AssessmentListResponse(BaseModel):
    items: List[AssessmentResponse]
    total: int


class EmployeeResult(BaseModel):
    """
    Employee profile combined with an assessment or an aggregate of several.
    """

    id: str = Field(..., description="Employee profile id")
    name: str
    position: str
    company_id: str
    performance: Level
    potential: Level
    date: datetime
    category: GridCategoryResponse
    assessment_id: Optional[str] = None
    assessed_by_user_id: Optional[str] = None
    answers: Optional[Dict[str, int]] = None
    risk_flag: bool = False
    assessment_count: int = 1
    ai_advice: Optional[str] = Field(
        default=None,
        description="Development advice (latest one when aggregated)"
    )


class EmployeeResultListResponse(BaseModel):
    items: List[EmployeeResult]
    total: int


class AdviceResponse(BaseModel):
    """
    Development advice for one assessment. ``generated`` is False when the
    text is a placeholder (no API key, API failure); placeholders are not stored.
    """
    assessment_id: str
    employee_id: str
    advice: str
    generated: bool


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
