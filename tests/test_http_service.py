from typing import Any, List

import pytest
import requests
from tenacity import wait_none

from api.factory import get_plan_service
from api.http_service import HttpPlanOfStudyService
from dto.plan import CourseLink, Department, PlanOfStudy
from errors import PlanOfStudyApiError, SchemaError


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self.headers = {}
        self.calls: List[tuple] = []
        self._responses = list(responses)

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(HttpPlanOfStudyService._send.retry, "wait", wait_none())
    monkeypatch.setattr(HttpPlanOfStudyService._send_unsafe.retry, "wait", wait_none())


def _plan() -> PlanOfStudy:
    return PlanOfStudy(
        department=Department(id=43, name="Comm Eng"),
        major_code="TENG12",
        links=(CourseLink(course_code="B2", prerequisite_code="A1"),),
    )


def _service(session: FakeSession, token=None) -> HttpPlanOfStudyService:
    return HttpPlanOfStudyService("http://pos.test/api/", token=token, session=session)


def test_submit_posts_canonical_json():
    session = FakeSession(FakeResponse(200, {"message": "Plan saved"}))
    assert _service(session, token="abc").submit(_plan()) == "Plan saved"

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://pos.test/api/set_pos")
    assert kwargs["json"]["department"] == {"id": 43, "name": "Comm Eng"}
    assert kwargs["json"]["links"][0] == {
        "courseCode": "B2",
        "prerequisiteCode": "A1",
        "corequisiteCode": None,
    }
    assert session.headers["Authorization"] == "Bearer abc"


def test_server_message_is_surfaced():
    session = FakeSession(FakeResponse(422, {"message": "Department exists"}))
    with pytest.raises(PlanOfStudyApiError) as exc_info:
        _service(session).submit(_plan())
    assert str(exc_info.value) == "Department exists"
    assert exc_info.value.status_code == 422


def test_default_message_without_body():
    session = FakeSession(FakeResponse(500))
    with pytest.raises(PlanOfStudyApiError, match="Delete failed"):
        _service(session).remove(43)
    assert session.calls[0][:2] == ("DELETE", "http://pos.test/api/delete_pos/43")


def test_http_errors_are_not_retried():
    session = FakeSession(FakeResponse(503), FakeResponse(200, {"message": "late"}))
    with pytest.raises(PlanOfStudyApiError):
        _service(session).remove(43)
    assert len(session.calls) == 1


def test_connection_errors_are_retried():
    session = FakeSession(
        requests.ConnectionError("down"),
        requests.Timeout("slow"),
        FakeResponse(200, {"message": "Removed"}),
    )
    assert _service(session).remove(43) == "Removed"
    assert len(session.calls) == 3


def test_persistent_connection_failure():
    session = FakeSession(*[requests.ConnectionError("down")] * 4)
    with pytest.raises(PlanOfStudyApiError, match="Upload failed"):
        _service(session).submit(_plan())
    assert len(session.calls) == 4


def test_submit_retries_when_connection_not_made():
    session = FakeSession(
        requests.ConnectTimeout("no route"),
        requests.ConnectionError("refused"),
        FakeResponse(200, {"message": "Plan saved"}),
    )
    assert _service(session).submit(_plan()) == "Plan saved"
    assert len(session.calls) == 3


def test_submit_read_timeout_is_not_retried():
    session = FakeSession(
        requests.ReadTimeout("no answer"),
        FakeResponse(200, {"message": "Plan saved twice"}),
    )
    with pytest.raises(PlanOfStudyApiError, match="Upload failed"):
        _service(session).submit(_plan())
    assert len(session.calls) == 1


def test_list_translates_legacy_payloads():
    session = FakeSession(
        FakeResponse(
            200,
            [
                {"departmentId": 7, "departmentName": "Old", "courses": [], "prerequisitesCorequisites": []},
                _plan().model_dump(mode="json", by_alias=True),
            ],
        )
    )
    plans = _service(session).list_all()
    assert [p.department.id for p in plans] == [7, 43]
    assert plans[1] == _plan()


def test_list_rejects_non_list():
    session = FakeSession(FakeResponse(200, {"message": "nope"}))
    with pytest.raises(SchemaError):
        _service(session).list_all()


@pytest.mark.parametrize(
    "entry",
    [
        5,
        "plan",
        {"department": {"id": 1, "name": "x"}, "links": "courseCode"},
        {"departmentId": 1, "prerequisitesCorequisites": [5]},
    ],
)
def test_list_rejects_malformed_entries(entry):
    session = FakeSession(FakeResponse(200, [entry]))
    with pytest.raises(SchemaError):
        _service(session).list_all()


def test_factory_reads_environment(monkeypatch):
    monkeypatch.setenv("POS_API_BASE_URL", "http://example.test/pos")
    monkeypatch.setenv("POS_API_TOKEN", "t0k")
    monkeypatch.setenv("POS_API_TIMEOUT", "5")
    service = get_plan_service()
    assert isinstance(service, HttpPlanOfStudyService)
    assert service._base_url == "http://example.test/pos"
    assert service._timeout == 5.0
