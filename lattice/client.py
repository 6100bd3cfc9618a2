# =============================================================================
# lattice/client.py  —  Backend Client Interface & Live HTTP Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   1. Declares LatticeClient, the capability interface every backend
#      implements: sixteen async read operations, nothing else.
#   2. Implements LiveLatticeClient, which maps each operation to exactly one
#      GET against the Lattice API.
#
# THE ENVELOPE:
#   Every Lattice response body looks like
#       {"data": <payload>, "success": true, "message": "optional"}
#   _get() unwraps it so callers only ever see <payload>.
#
# FAILURE CONTRACT:
#   - Non-2xx status           -> TransportError (status code in the message)
#   - Network fault / bad JSON -> TransportError
#   - success: false           -> TransportError (the API's own message)
#   There are NO retries.  A failed call fails once, loudly, and the
#   dispatcher reports it to the agent in-band.
# =============================================================================

import logging
from typing import Any, Optional, Protocol, runtime_checkable
from urllib.parse import quote

import httpx

from lattice.errors import TransportError
from lattice.models import Department, Feedback, Goal, ReviewCycle, Update, User

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://tide.latticehq.com"
DEFAULT_TIMEOUT = 30.0


@runtime_checkable
class LatticeClient(Protocol):
    """Read-only view of the Lattice HQ system of record.

    Keyed operations raise NotFoundError when nothing matches; any operation
    may raise TransportError when the backing call cannot complete.
    """

    # --- Users ---
    async def list_users(self) -> list[User]: ...
    async def get_user(self, user_id: str) -> User: ...
    async def get_user_direct_reports(self, user_id: str) -> list[User]: ...
    async def get_current_user(self) -> User: ...

    # --- Goals ---
    async def list_goals(self) -> list[Goal]: ...
    async def get_goal(self, goal_id: str) -> Goal: ...
    async def get_user_goals(self, user_id: str) -> list[Goal]: ...

    # --- Review cycles ---
    async def list_review_cycles(self) -> list[ReviewCycle]: ...
    async def get_review_cycle(self, cycle_id: str) -> ReviewCycle: ...
    async def get_review_cycle_reviewees(self, cycle_id: str) -> list[User]: ...

    # --- Feedback ---
    async def list_feedback(self) -> list[Feedback]: ...
    async def get_feedback(self, feedback_id: str) -> Feedback: ...

    # --- Departments & updates (open mappings) ---
    async def list_departments(self) -> list[Department]: ...
    async def get_department(self, department_id: str) -> Department: ...
    async def list_updates(self) -> list[Update]: ...
    async def get_update(self, update_id: str) -> Update: ...

    async def aclose(self) -> None: ...
    async def __aenter__(self) -> "LatticeClient": ...
    async def __aexit__(self, *exc_info) -> None: ...


def _segment(entity_id: str) -> str:
    """Percent-encode an identifier so it stays one path segment."""
    return quote(entity_id, safe="")


class LiveLatticeClient:
    """LatticeClient backed by the real Lattice HTTP API.

    Args:
        api_token: Bearer credential.  Required; an empty token is a
            configuration bug, not something to discover on the first call.
        base_url: API root, e.g. "https://tide.latticehq.com".
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_token or not api_token.strip():
            raise ValueError("api_token is required for the live Lattice client")
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_token.strip()}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "LiveLatticeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # Request plumbing
    # =========================================================================
    async def _get(self, path: str) -> Any:
        """Issue one GET and return the unwrapped envelope payload."""
        logger.debug("GET %s%s", self.base_url, path)
        try:
            response = await self._http.get(path)
        except httpx.HTTPError as exc:
            raise TransportError(f"Lattice API request failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"Lattice API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Lattice API returned invalid JSON for {path}",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict) or "data" not in body:
            raise TransportError(
                f"Lattice API response for {path} is missing the data envelope",
                status_code=response.status_code,
            )
        if body.get("success") is False:
            raise TransportError(
                body.get("message") or f"Lattice API reported failure for {path}",
                status_code=response.status_code,
            )
        return body["data"]

    async def _get_list(self, path: str) -> list:
        data = await self._get(path)
        if not isinstance(data, list):
            raise TransportError(f"Lattice API returned {type(data).__name__} for {path}, expected a list")
        return data

    async def _get_object(self, path: str) -> dict:
        data = await self._get(path)
        if not isinstance(data, dict):
            raise TransportError(f"Lattice API returned {type(data).__name__} for {path}, expected an object")
        return data

    # =========================================================================
    # Users
    # =========================================================================
    async def list_users(self) -> list[User]:
        return [User.from_dict(item) for item in await self._get_list("/v1/users")]

    async def get_user(self, user_id: str) -> User:
        return User.from_dict(await self._get_object(f"/v1/user/{_segment(user_id)}"))

    async def get_user_direct_reports(self, user_id: str) -> list[User]:
        items = await self._get_list(f"/v1/user/{_segment(user_id)}/directReports")
        return [User.from_dict(item) for item in items]

    async def get_current_user(self) -> User:
        return User.from_dict(await self._get_object("/v1/me"))

    # =========================================================================
    # Goals
    # =========================================================================
    async def list_goals(self) -> list[Goal]:
        return [Goal.from_dict(item) for item in await self._get_list("/v1/goals")]

    async def get_goal(self, goal_id: str) -> Goal:
        return Goal.from_dict(await self._get_object(f"/v1/goal/{_segment(goal_id)}"))

    async def get_user_goals(self, user_id: str) -> list[Goal]:
        items = await self._get_list(f"/v1/user/{_segment(user_id)}/goals")
        return [Goal.from_dict(item) for item in items]

    # =========================================================================
    # Review cycles
    # =========================================================================
    async def list_review_cycles(self) -> list[ReviewCycle]:
        return [ReviewCycle.from_dict(item) for item in await self._get_list("/v1/reviewCycles")]

    async def get_review_cycle(self, cycle_id: str) -> ReviewCycle:
        return ReviewCycle.from_dict(await self._get_object(f"/v1/reviewCycle/{_segment(cycle_id)}"))

    async def get_review_cycle_reviewees(self, cycle_id: str) -> list[User]:
        items = await self._get_list(f"/v1/reviewCycle/{_segment(cycle_id)}/reviewees")
        return [User.from_dict(item) for item in items]

    # =========================================================================
    # Feedback
    # =========================================================================
    async def list_feedback(self) -> list[Feedback]:
        return [Feedback.from_dict(item) for item in await self._get_list("/v1/feedbacks")]

    async def get_feedback(self, feedback_id: str) -> Feedback:
        return Feedback.from_dict(await self._get_object(f"/v1/feedback/{_segment(feedback_id)}"))

    # =========================================================================
    # Departments & updates — passed through as open mappings
    # =========================================================================
    async def list_departments(self) -> list[Department]:
        return await self._get_list("/v1/departments")

    async def get_department(self, department_id: str) -> Department:
        return await self._get_object(f"/v1/department/{_segment(department_id)}")

    async def list_updates(self) -> list[Update]:
        return await self._get_list("/v1/updates")

    async def get_update(self, update_id: str) -> Update:
        return await self._get_object(f"/v1/update/{_segment(update_id)}")
