from api.service import PlanOfStudyService
from api.http_service import HttpPlanOfStudyService
from api.factory import get_plan_service

__all__ = [
    "PlanOfStudyService",
    "HttpPlanOfStudyService",
    "get_plan_service",
]
