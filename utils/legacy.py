"""
Translation of stored payloads into the current schema.

Link records were saved under three different key sets before the schema
was versioned:

    courseId   / coursePre              / courseCo               (numeric ids)
    coursecode / coursePre              / courseCo
    coursecode / prerequisiteCourseCode / corequisiteCourseCode

Plans themselves used a flat ``departmentId`` / ``departmentName`` shape
with the links under ``prerequisitesCorequisites``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from dto.plan import SCHEMA_VERSION, Course, CourseLink, Department, PlanOfStudy
from errors import SchemaError

logger = logging.getLogger(__name__)

# (course key, prerequisite key, corequisite key), newest first
_LINK_KEY_SETS: List[Tuple[str, str, str]] = [
    ("courseCode", "prerequisiteCode", "corequisiteCode"),
    ("course_code", "prerequisite_code", "corequisite_code"),
    ("coursecode", "prerequisiteCourseCode", "corequisiteCourseCode"),
    ("coursecode", "coursePre", "courseCo"),
    ("courseId", "coursePre", "courseCo"),
]


def _code(value: Any) -> Optional[str]:
    """Legacy numeric ids used 0 / NaN / null for "none"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if math.isnan(value) or value == 0:
            return None
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, int):
        return str(value) if value != 0 else None
    text = str(value).strip()
    return text or None


def link_from_payload(payload: Mapping[str, Any]) -> Optional[CourseLink]:
    """
    Build a ``CourseLink`` from any known link shape.

    Returns ``None`` for a record with neither a prerequisite nor a
    corequisite; old exports stored those.
    """
    if not isinstance(payload, Mapping):
        raise SchemaError(f"Link record is not an object: {payload!r}")
    for course_key, pre_key, co_key in _LINK_KEY_SETS:
        if course_key in payload and (pre_key in payload or co_key in payload):
            course_code = _code(payload[course_key])
            if course_code is None:
                raise SchemaError(f"Link record without a course: {dict(payload)!r}")
            pre = _code(payload.get(pre_key))
            co = _code(payload.get(co_key))
            if pre is None and co is None:
                return None
            return CourseLink(
                course_code=course_code,
                prerequisite_code=pre,
                corequisite_code=co,
            )
    raise SchemaError(f"Unrecognised link record: {dict(payload)!r}")


def _records(payload: Mapping[str, Any], key: str) -> List[Any]:
    """The list stored under *key*; a missing or null entry is empty."""
    records = payload.get(key)
    if records is None:
        return []
    if not isinstance(records, (list, tuple)):
        raise SchemaError(f"Expected a list under {key!r}, got {type(records).__name__}")
    return list(records)


def _links(records: List[Any]) -> Tuple[CourseLink, ...]:
    links = (link_from_payload(r) for r in records)
    return tuple(link for link in links if link is not None)


def plan_from_payload(payload: Mapping[str, Any]) -> PlanOfStudy:
    """Build a ``PlanOfStudy`` from a current or legacy plan payload."""
    if not isinstance(payload, Mapping):
        raise SchemaError(f"Plan payload is not an object: {type(payload).__name__}")

    try:
        if "department" in payload:
            version = payload.get("schemaVersion", payload.get("schema_version", SCHEMA_VERSION))
            if version != SCHEMA_VERSION:
                raise SchemaError(f"Unsupported plan schema version: {version!r}")
            data: Dict[str, Any] = dict(payload)
            data["links"] = _links(_records(payload, "links"))
            return PlanOfStudy.model_validate(data)

        if "departmentId" in payload:
            logger.debug("Translating legacy plan for department %s", payload["departmentId"])
            return PlanOfStudy(
                department=Department(
                    id=payload["departmentId"],
                    name=payload.get("departmentName", ""),
                ),
                courses=tuple(
                    Course.model_validate(c) for c in _records(payload, "courses")
                ),
                links=_links(_records(payload, "prerequisitesCorequisites")),
            )
    except ValidationError as exc:
        raise SchemaError(f"Invalid plan payload: {exc}") from exc

    raise SchemaError("Unrecognised plan payload: expected 'department' or 'departmentId'")
