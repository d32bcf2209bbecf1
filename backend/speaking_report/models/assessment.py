from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, StrictFloat, StrictStr, ValidationError, field_validator

MIN_SCORE = 0.0
MAX_SCORE = 9.0

SKILL_NAMES = ("pronunciation", "fluency", "vocabulary", "grammar")
SKILL_LABELS = {
    "pronunciation": "Pronunciation",
    "fluency": "Fluency",
    "vocabulary": "Vocabulary",
    "grammar": "Grammar",
}


class PerformanceTier(str, Enum):
    EXCELLENT = "excellent"
    VERY_GOOD = "veryGood"
    GOOD = "good"
    MODERATE = "moderate"
    NEEDS_IMPROVEMENT = "needsImprovement"


class StyleTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def css_class(self) -> str:
        return f"score-{self.value}"


def _validate_score(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if math.isnan(value) or value < MIN_SCORE or value > MAX_SCORE:
        raise ValueError(
            f"{name} must be between {MIN_SCORE:.0f} and {MAX_SCORE:.0f}, got {value}"
        )
    return value


@dataclass(frozen=True)
class AssessmentRecord:
    student_id: str
    student_name: str
    test_date: str
    overall_score: float
    skills: Mapping[str, float] = field(hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "overall_score", _validate_score("overallScore", self.overall_score)
        )
        missing = [name for name in SKILL_NAMES if name not in self.skills]
        if missing:
            raise ValueError(f"skills missing required entries: {', '.join(missing)}")
        skills = {
            name: _validate_score(f"skills.{name}", self.skills[name])
            for name in SKILL_NAMES
        }
        object.__setattr__(self, "skills", MappingProxyType(skills))

    def to_payload(self) -> dict[str, Any]:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "testDate": self.test_date,
            "overallScore": self.overall_score,
            "skills": {name: self.skills[name] for name in SKILL_NAMES},
        }


class SkillScores(BaseModel):
    pronunciation: StrictFloat
    fluency: StrictFloat
    vocabulary: StrictFloat
    grammar: StrictFloat


class AssessmentPayload(BaseModel):
    studentId: StrictStr
    studentName: StrictStr
    testDate: StrictStr
    overallScore: StrictFloat
    skills: SkillScores

    @field_validator("testDate")
    @classmethod
    def validate_test_date(cls, value: str) -> str:
        try:
            date.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"testDate must be an ISO date, got {value!r}") from exc
        return value


def record_from_payload(payload: Any) -> AssessmentRecord:
    """Validate a decoded JSON document and build the record it describes.

    Raises ``ValueError`` when the shape is wrong or any score falls outside
    the 0-9 band.
    """
    if not isinstance(payload, dict):
        raise ValueError("Assessment record must be a JSON object")
    try:
        parsed = AssessmentPayload.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Assessment record has an invalid shape: {exc}") from exc
    return AssessmentRecord(
        student_id=parsed.studentId,
        student_name=parsed.studentName,
        test_date=parsed.testDate,
        overall_score=parsed.overallScore,
        skills=parsed.skills.model_dump(),
    )
