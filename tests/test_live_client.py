"""
Live client tests.

The real Lattice API is never contacted: every client here is wired to an
httpx.MockTransport that records the requests it receives.
"""

import json

import httpx
import pytest

from conftest import TEST_TOKEN, RecordingTransport, envelope, json_transport, live_client
from lattice.client import LatticeClient, LiveLatticeClient
from lattice.errors import TransportError
from lattice.models import Feedback, Goal, ReviewCycle, User
from lattice_mcp.dispatcher import Dispatcher

USER = {
    "id": "u1",
    "email": "ada@example.com",
    "firstName": "Ada",
    "lastName": "Lovelace",
    "title": "Engineer",
    "department": "Engineering",
    "managerId": "u0",
    "isActive": True,
}
GOAL = {
    "id": "g1",
    "title": "Ship it",
    "description": "Ship the thing",
    "userId": "u1",
    "status": "In Progress",
    "progress": 50,
    "dueDate": "2024-06-30",
    "createdDate": "2024-01-01",
}
CYCLE = {
    "id": "c1",
    "name": "H1",
    "status": "Active",
    "startDate": "2024-01-01",
    "endDate": "2024-06-30",
    "type": "Performance",
}
FEEDBACK = {
    "id": "f1",
    "content": "Nice",
    "authorId": "u0",
    "recipientId": "u1",
    "type": "Positive",
    "createdDate": "2024-02-01",
}
DEPARTMENT = {"id": "d1", "name": "Engineering", "description": "Builders"}
UPDATE = {"id": "up1", "title": "Weekly", "content": "Done", "authorId": "u1", "createdDate": "2024-02-02"}


# (client method, positional args, expected path, API data, expected result)
ENDPOINTS = [
    ("list_users", (), "/v1/users", [USER], [User.from_dict(USER)]),
    ("get_user", ("u1",), "/v1/user/u1", USER, User.from_dict(USER)),
    ("get_user_direct_reports", ("u0",), "/v1/user/u0/directReports", [USER], [User.from_dict(USER)]),
    ("list_goals", (), "/v1/goals", [GOAL], [Goal.from_dict(GOAL)]),
    ("get_goal", ("g1",), "/v1/goal/g1", GOAL, Goal.from_dict(GOAL)),
    ("get_user_goals", ("u1",), "/v1/user/u1/goals", [GOAL], [Goal.from_dict(GOAL)]),
    ("list_review_cycles", (), "/v1/reviewCycles", [CYCLE], [ReviewCycle.from_dict(CYCLE)]),
    ("get_review_cycle", ("c1",), "/v1/reviewCycle/c1", CYCLE, ReviewCycle.from_dict(CYCLE)),
    ("get_review_cycle_reviewees", ("c1",), "/v1/reviewCycle/c1/reviewees", [USER], [User.from_dict(USER)]),
    ("list_feedback", (), "/v1/feedbacks", [FEEDBACK], [Feedback.from_dict(FEEDBACK)]),
    ("get_feedback", ("f1",), "/v1/feedback/f1", FEEDBACK, Feedback.from_dict(FEEDBACK)),
    ("list_departments", (), "/v1/departments", [DEPARTMENT], [DEPARTMENT]),
    ("get_department", ("d1",), "/v1/department/d1", DEPARTMENT, DEPARTMENT),
    ("list_updates", (), "/v1/updates", [UPDATE], [UPDATE]),
    ("get_update", ("up1",), "/v1/update/up1", UPDATE, UPDATE),
    ("get_current_user", (), "/v1/me", USER, User.from_dict(USER)),
]


def status_transport(status_code: int) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json={"success": False}))


@pytest.mark.asyncio
@pytest.mark.parametrize("method, args, path, data, expected", ENDPOINTS, ids=[e[0] for e in ENDPOINTS])
async def test_each_operation_issues_one_authorized_get(method, args, path, data, expected):
    transport = json_transport({path: data})

    async with live_client(transport) as client:
        result = await getattr(client, method)(*args)

    assert result == expected
    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url.host == "lattice.test"
    assert request.url.path == path
    assert request.headers["Authorization"] == f"Bearer {TEST_TOKEN}"


def test_satisfies_client_protocol():
    assert isinstance(live_client(json_transport({})), LatticeClient)


@pytest.mark.asyncio
async def test_base_url_path_prefix_is_kept():
    transport = json_transport({"/api/v1/users": []})

    async with LiveLatticeClient(TEST_TOKEN, base_url="https://lattice.test/api/", transport=transport) as client:
        assert await client.list_users() == []

    assert transport.requests[0].url.path == "/api/v1/users"


@pytest.mark.asyncio
async def test_identifiers_are_percent_encoded():
    transport = RecordingTransport(lambda request: httpx.Response(200, json=envelope(USER)))

    async with live_client(transport) as client:
        await client.get_user("a/b c")

    assert transport.requests[0].url.raw_path == b"/v1/user/a%2Fb%20c"


class TestFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 500, 503])
    async def test_non_2xx_raises_transport_error_without_retry(self, status_code):
        transport = status_transport(status_code)

        async with live_client(transport) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get_user("u1")

        assert str(status_code) in str(exc_info.value)
        assert exc_info.value.status_code == status_code
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_uses_api_message(self):
        transport = RecordingTransport(
            lambda request: httpx.Response(200, json=envelope(None, success=False, message="Token expired"))
        )

        async with live_client(transport) as client:
            with pytest.raises(TransportError, match="Token expired"):
                await client.list_goals()

    @pytest.mark.asyncio
    async def test_missing_envelope(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json=[USER]))

        async with live_client(transport) as client:
            with pytest.raises(TransportError, match="envelope"):
                await client.list_users()

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        async with live_client(transport) as client:
            with pytest.raises(TransportError, match="invalid JSON"):
                await client.list_users()

    @pytest.mark.asyncio
    async def test_wrong_payload_shape(self):
        transport = RecordingTransport(lambda request: httpx.Response(200, json=envelope(USER)))

        async with live_client(transport) as client:
            with pytest.raises(TransportError, match="expected a list"):
                await client.list_users()

    @pytest.mark.asyncio
    async def test_network_error_becomes_transport_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with live_client(RecordingTransport(refuse)) as client:
            with pytest.raises(TransportError, match="connection refused"):
                await client.get_current_user()


@pytest.mark.parametrize("token", ["", "   ", None])
def test_empty_token_is_rejected(token):
    with pytest.raises(ValueError):
        LiveLatticeClient(api_token=token)


class TestThroughDispatcher:
    @pytest.mark.asyncio
    async def test_http_error_is_reported_in_band(self):
        transport = status_transport(502)

        async with live_client(transport) as client:
            text = await Dispatcher(client).call_tool("lattice_get_goal", {"goal_id": "g1"})

        payload = json.loads(text)
        assert "502" in payload["error"]
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_fetched_record_round_trips_through_tool_text(self):
        transport = json_transport({"/v1/user/u1": USER})

        async with live_client(transport) as client:
            text = await Dispatcher(client).call_tool("lattice_get_user", {"user_id": "u1"})

        assert json.loads(text) == USER
        assert User.from_dict(json.loads(text)) == User.from_dict(USER)

    @pytest.mark.asyncio
    async def test_tool_text_carries_every_field_the_api_sent(self):
        api_user = {
            **USER,
            "managerId": None,
            "startDate": "2020-01-01",
            "customAttributes": {"level": 3},
        }
        api_goal = {**GOAL, "visibility": "team"}
        transport = json_transport({"/v1/user/u1": api_user, "/v1/user/u1/goals": [api_goal]})

        async with live_client(transport) as client:
            dispatcher = Dispatcher(client)
            user_text = await dispatcher.call_tool("lattice_get_user", {"user_id": "u1"})
            goals_text = await dispatcher.call_tool("lattice_get_user_goals", {"user_id": "u1"})

        assert json.loads(user_text) == api_user
        assert json.loads(goals_text) == [api_goal]
