from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

class Question(BaseModel):
    """
    Past-exam multiple choice question.
    Pydantic v2.
    """
    id: str = Field(
        ...,
        min_length=1,
        description="Question identifier, unique within the question bank"
    )
    course_id: str = Field(
        ...,
        description="Owning course id"
    )
    year: str = Field(
        "",
        description="Exam year the question was taken from"
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Prompt text"
    )
    options: Dict[str, str] = Field(
        ...,
        description="Option key -> option text (e.g. 'a'..'d')"
    )
    answer: str = Field(
        ...,
        description="Correct option key"
    )
    explanation: Optional[str] = Field(
        None,
        description="Explanation shown on the results screen"
    )

    @field_validator('options')
    @classmethod
    def validate_options_length(cls, v: Dict[str, str]) -> Dict[str, str]:
        """
        A question needs at least two options.
        """
        if len(v) < 2:
            raise ValueError("options must contain at least 2 entries.")
        return v

    @model_validator(mode='after')
    def validate_answer_in_options(self) -> 'Question':
        """
        The correct answer must be one of the option keys.
        """
        if self.answer not in self.options:
            raise ValueError(f"answer '{self.answer}' is not one of the option keys {list(self.options)}.")
        return self

    def public_dict(self) -> dict:
        """Question payload without the correct answer or explanation."""
        return self.model_dump(exclude={"answer", "explanation"})


class Course(BaseModel):
    id: str
    code: str = Field(..., min_length=1, description="Course code, e.g. GSS101")
    title: str
    level: str = ""
    semester: str = ""
    question_count: int = Field(default=0, ge=0)

    @property
    def display_name(self) -> str:
        return f"{self.code}: {self.title}"
