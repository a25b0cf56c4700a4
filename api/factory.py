import os

from api.service import PlanOfStudyService
from api.http_service import HttpPlanOfStudyService

_DEFAULT_BASE_URL = "http://localhost:8000/api"
_DEFAULT_TIMEOUT_SECONDS = 30.0


def get_plan_service() -> PlanOfStudyService:
    """
    Return the plan-of-study service configured by the environment:
      - POS_API_BASE_URL   base URL of the API   (default http://localhost:8000/api)
      - POS_API_TOKEN      bearer token           (optional)
      - POS_API_TIMEOUT    request timeout, s     (default 30)
    """
    return HttpPlanOfStudyService(
        base_url=os.getenv("POS_API_BASE_URL", _DEFAULT_BASE_URL),
        token=os.getenv("POS_API_TOKEN") or None,
        timeout=float(os.getenv("POS_API_TIMEOUT", _DEFAULT_TIMEOUT_SECONDS)),
    )
