"""
Cross-reference check for an assembled plan.

The parser pairs codes syntactically and never looks them up, so a link can
name a course that is not in the plan.  Callers run this before persisting.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

from dto.plan import PlanOfStudy


class DanglingReference(BaseModel):
    model_config = {"frozen": True}

    course_code: str
    field: Literal["course", "prerequisite", "corequisite"]
    missing_code: str


def find_dangling_links(plan: PlanOfStudy) -> List[DanglingReference]:
    known = plan.course_codes()
    dangling: List[DanglingReference] = []
    for link in plan.links:
        endpoints = (
            ("course", link.course_code),
            ("prerequisite", link.prerequisite_code),
            ("corequisite", link.corequisite_code),
        )
        for field, code in endpoints:
            if code is not None and code not in known:
                dangling.append(
                    DanglingReference(
                        course_code=link.course_code,
                        field=field,
                        missing_code=code,
                    )
                )
    return dangling
