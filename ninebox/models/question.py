from pydantic import BaseModel, Field, model_validator
from typing import Optional, List

from ninebox.models.enumerations import Axis, QuestionCategory

# Closed set of selectable option values
MIN_OPTION_VALUE = 0
MAX_OPTION_VALUE = 3


class QuestionOption(BaseModel):
    """
    One selectable answer of a question.
    """

    value: int = Field(
        ...,
        ge=MIN_OPTION_VALUE,
        le=MAX_OPTION_VALUE,
        description="Selection index stored in the answer set"
    )

    label: str = Field(..., min_length=1, max_length=255)

    description: Optional[str] = Field(default=None, max_length=1000)

    weight: Optional[float] = Field(
        default=None,
        description="Explicit contribution; the default weighting applies when absent"
    )


class QuestionBase(BaseModel):
    """
    Base Pydantic model for a questionnaire item.
    """

    category: QuestionCategory = Field(
        ...,
        description="performance, potential or calibration"
    )

    axis: Optional[Axis] = Field(
        default=None,
        description="Axis receiving the contribution; inferred from category when absent"
    )

    is_calibration: Optional[bool] = Field(
        default=None,
        description="Calibration items use the calibration default weights; "
                    "defaults to category == calibration"
    )

    title: str = Field(default="", max_length=255)

    question_text: str = Field(..., min_length=1, max_length=2000)

    options: List[QuestionOption] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_options(self):
        """Option values must be unique and the calibration flag resolved."""
        values = [o.value for o in self.options]
        if len(values) != len(set(values)):
            raise ValueError("Option values must be unique within a question")
        if self.is_calibration is None:
            self.is_calibration = self.category == QuestionCategory.CALIBRATION
        return self

    def option_for(self, value: int) -> Optional[QuestionOption]:
        """Return the option carrying ``value`` or None."""
        for option in self.options:
            if option.value == value:
                return option
        return None


class QuestionCreate(QuestionBase):
    """
    Model for adding a question to the bank. The id is generated when omitted.
    """

    id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=64,
        pattern=r"^[A-Za-z0-9_\-]+$",
    )


class QuestionUpdate(QuestionBase):
    """
    Model for replacing an existing question (id is immutable).
    """
    pass


class Question(QuestionBase):
    """
    A question of the active bank.
    """

    id: str

    class Config:
        from_attributes = True


class QuestionListResponse(BaseModel):
    items: List[Question]
    total: int
