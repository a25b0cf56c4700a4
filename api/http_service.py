"""
PlanOfStudyService backed by the plan-of-study REST API.

Endpoints:
  - POST   /set_pos                 store a plan (body: canonical plan JSON)
  - DELETE /delete_pos/<id>         remove a department's plan
  - GET    /get_pos                 list stored plans

Error responses carry a ``message`` field which is surfaced verbatim.
GET and DELETE are retried with exponential backoff via tenacity on
connection failures and timeouts.  POST /set_pos is retried only when the
connection could not be made, since a read timeout may arrive after the
server already stored the plan.  HTTP error statuses are never retried.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from api.service import PlanOfStudyService
from dto.plan import PlanOfStudy
from errors import PlanOfStudyApiError, SchemaError
from utils.legacy import plan_from_payload

logger = logging.getLogger(__name__)

# Retry configuration
_MAX_RETRIES = 4
_MIN_WAIT_SECONDS = 1
_MAX_WAIT_SECONDS = 20

_IDEMPOTENT_METHODS = frozenset({"GET", "DELETE"})

_RETRYABLE_EXCEPTIONS = (
    requests.ConnectionError,
    requests.Timeout,
)

# ConnectTimeout is a ConnectionError; ReadTimeout is not
_CONNECT_EXCEPTIONS = (requests.ConnectionError,)


def _retrying(exceptions):
    return retry(
        retry=retry_if_exception_type(exceptions),
        stop=stop_after_attempt(_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=_MIN_WAIT_SECONDS, max=_MAX_WAIT_SECONDS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


_retry_decorator = _retrying(_RETRYABLE_EXCEPTIONS)
_connect_retry_decorator = _retrying(_CONNECT_EXCEPTIONS)


def _message(body: Any, default: str) -> str:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return default


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class HttpPlanOfStudyService(PlanOfStudyService):
    """PlanOfStudyService talking JSON over HTTP."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def _call(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        return self._session.request(
            method,
            f"{self._base_url}{path}",
            timeout=self._timeout,
            **kwargs,
        )

    @_retry_decorator
    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        return self._call(method, path, **kwargs)

    @_connect_retry_decorator
    def _send_unsafe(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Non-idempotent requests: retried only if no connection was made."""
        return self._call(method, path, **kwargs)

    def _request(self, method: str, path: str, failure: str, **kwargs: Any) -> Any:
        try:
            send = self._send if method in _IDEMPOTENT_METHODS else self._send_unsafe
            response = send(method, path, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise PlanOfStudyApiError(failure) from exc

        body = _json_or_none(response)
        if not response.ok:
            raise PlanOfStudyApiError(
                _message(body, failure),
                status_code=response.status_code,
            )
        return body

    # ------------------------------------------------------------------
    # PlanOfStudyService
    # ------------------------------------------------------------------

    def submit(self, plan: PlanOfStudy) -> str:
        logger.info(
            "Submitting plan for department %d (%d courses, %d links)",
            plan.department.id,
            len(plan.courses),
            len(plan.links),
        )
        body = self._request(
            "POST",
            "/set_pos",
            "Upload failed",
            json=plan.model_dump(mode="json", by_alias=True),
        )
        return _message(body, "Upload succeeded")

    def remove(self, department_id: int) -> str:
        logger.info("Removing plan for department %d", department_id)
        body = self._request("DELETE", f"/delete_pos/{department_id}", "Delete failed")
        return _message(body, "Delete succeeded")

    def list_all(self) -> List[PlanOfStudy]:
        body = self._request("GET", "/get_pos", "Failed to fetch plans of study")
        if not isinstance(body, list):
            raise SchemaError("Expected a list of plans of study")
        return [plan_from_payload(p) for p in body]
