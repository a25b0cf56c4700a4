"""
Plan of Study DTOs.

    PlanOfStudy
      ├─ department: Department
      ├─ courses: (Course, ...)
      └─ links: (CourseLink, ...)

Every model is frozen.  JSON uses camelCase aliases; both the Python field
names and the aliases are accepted on input.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Bump when the serialized shape changes.
SCHEMA_VERSION = 1

_MODEL_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class CourseType(str, Enum):
    CORE = "Core"
    MAJOR = "Major"
    MAJOR_ELECTIVE = "Major Elective"
    GENERAL_ELECTIVE = "General Elective"
    GENERAL_REQUIREMENT = "General Requirement"


class SemesterType(str, Enum):
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL_SPRING = "Fall-Spring"
    FALL_SUMMER = "Fall-Summer"
    SPRING_SUMMER = "Spring-Summer"
    FALL_SPRING_SUMMER = "Fall-Spring-Summer"


class Department(BaseModel):
    model_config = _MODEL_CONFIG

    id: int
    name: str


class MajorMetadata(BaseModel):
    """What the metadata cell above the course table yields."""

    model_config = _MODEL_CONFIG

    department_name: str
    major_code: str


class Course(BaseModel):
    model_config = _MODEL_CONFIG

    code: str
    title: str
    credits: Union[int, float]
    type: CourseType = CourseType.CORE
    semesters: SemesterType

    @field_validator("credits")
    @classmethod
    def _credits_non_negative(cls, value: Union[int, float]) -> Union[int, float]:
        if math.isnan(value) or value < 0:
            raise ValueError("credits must be a non-negative number")
        return value


class CourseLink(BaseModel):
    """
    One prerequisite/corequisite pairing for a course.

    The two codes are aligned by position in their source cells only; a
    link does not claim the prerequisite and corequisite are related.
    """

    model_config = _MODEL_CONFIG

    course_code: str
    prerequisite_code: Optional[str] = None
    corequisite_code: Optional[str] = None

    @model_validator(mode="after")
    def _has_endpoint(self) -> "CourseLink":
        if self.prerequisite_code is None and self.corequisite_code is None:
            raise ValueError(
                f"link for {self.course_code!r} has neither a prerequisite "
                "nor a corequisite"
            )
        return self


class PlanOfStudy(BaseModel):
    """Root aggregate produced by one parse."""

    model_config = _MODEL_CONFIG

    schema_version: int = SCHEMA_VERSION
    department: Department
    major_code: Optional[str] = None
    courses: Tuple[Course, ...] = ()
    links: Tuple[CourseLink, ...] = ()

    def course_codes(self) -> set[str]:
        return {c.code for c in self.courses}
