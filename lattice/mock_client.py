# =============================================================================
# lattice/mock_client.py  —  In-Memory Mock Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Serves the LatticeClient interface from a small, fixed organization so
#   the MCP server can run (and be demoed, and be tested) without a Lattice
#   account or network access.
#
# WHEN IS IT USED?
#   Automatically, whenever no API token is configured.  See
#   lattice/config.py -> build_client().
#
# THE FIXTURE ORG:
#   Mike Johnson (user3, Engineering Manager)
#   ├── John Doe   (user1, Senior Software Engineer)  owns goal1
#   └── Jane Smith (user2, Product Manager)           owns goal2
#
#   Derived collections are computed by filtering on the foreign key, exactly
#   like a real backend would: direct reports by manager_id, goals by user_id.
#
# READ-ONLY:
#   Typed records are frozen dataclasses.  Departments and updates are plain
#   dicts, so we hand out copies; an agent-side mutation can never leak into
#   the next request.
# =============================================================================

import logging
from typing import Callable, Iterable, Optional, TypeVar

from lattice.errors import NotFoundError
from lattice.models import Department, Feedback, Goal, ReviewCycle, Update, User

logger = logging.getLogger(__name__)

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
_MOCK_USERS: tuple[User, ...] = (
    User(
        id="user1",
        email="john.doe@company.com",
        first_name="John",
        last_name="Doe",
        title="Senior Software Engineer",
        department="Engineering",
        manager_id="user3",
        is_active=True,
    ),
    User(
        id="user2",
        email="jane.smith@company.com",
        first_name="Jane",
        last_name="Smith",
        title="Product Manager",
        department="Product",
        manager_id="user3",
        is_active=True,
    ),
    User(
        id="user3",
        email="mike.johnson@company.com",
        first_name="Mike",
        last_name="Johnson",
        title="Engineering Manager",
        department="Engineering",
        manager_id=None,               # Top of the hierarchy
        is_active=True,
    ),
)

_MOCK_GOALS: tuple[Goal, ...] = (
    Goal(
        id="goal1",
        title="Improve API Performance",
        description="Reduce API response time by 30%",
        user_id="user1",
        status="In Progress",
        progress=65,
        due_date="2024-03-31",
        created_date="2024-01-01",
    ),
    Goal(
        id="goal2",
        title="Launch New Feature",
        description="Successfully launch the new dashboard feature",
        user_id="user2",
        status="In Progress",
        progress=40,
        due_date="2024-02-29",
        created_date="2024-01-15",
    ),
)

_MOCK_REVIEW_CYCLES: tuple[ReviewCycle, ...] = (
    ReviewCycle(
        id="cycle1",
        name="Q1 2024 Performance Review",
        status="Active",
        start_date="2024-01-01",
        end_date="2024-03-31",
        type="Performance",
    ),
    ReviewCycle(
        id="cycle2",
        name="Mid-Year Review 2024",
        status="Upcoming",
        start_date="2024-06-01",
        end_date="2024-06-30",
        type="Mid-Year",
    ),
)

_MOCK_FEEDBACK: tuple[Feedback, ...] = (
    Feedback(
        id="feedback1",
        content="Great work on the API optimization project. The performance improvements are significant.",
        author_id="user3",
        recipient_id="user1",
        type="Positive",
        created_date="2024-01-20",
    ),
    Feedback(
        id="feedback2",
        content="Your presentation to the stakeholders was well-prepared and engaging.",
        author_id="user3",
        recipient_id="user2",
        type="Positive",
        created_date="2024-01-18",
    ),
)

_MOCK_DEPARTMENTS: tuple[Department, ...] = (
    {"id": "dept1", "name": "Engineering", "description": "Software development team"},
    {"id": "dept2", "name": "Product", "description": "Product management team"},
    {"id": "dept3", "name": "Design", "description": "User experience team"},
)

_MOCK_UPDATES: tuple[Update, ...] = (
    {
        "id": "update1",
        "title": "Weekly Progress Update",
        "content": "Completed API optimization tasks ahead of schedule",
        "authorId": "user1",
        "createdDate": "2024-01-22",
    },
    {
        "id": "update2",
        "title": "Feature Launch Update",
        "content": "Dashboard feature is 40% complete, on track for February launch",
        "authorId": "user2",
        "createdDate": "2024-01-21",
    },
)


def _find(items: Iterable[T], entity_id: str, key: Callable[[T], str]) -> Optional[T]:
    """Linear scan by id equality."""
    for item in items:
        if key(item) == entity_id:
            return item
    return None


def _record_id(record) -> str:
    return record.id


def _mapping_id(mapping: dict) -> str:
    return mapping.get("id")


class MockLatticeClient:
    """LatticeClient served from the static fixture org above."""

    def __init__(self):
        self._users = _MOCK_USERS
        self._goals = _MOCK_GOALS
        self._review_cycles = _MOCK_REVIEW_CYCLES
        self._feedback = _MOCK_FEEDBACK
        self._departments = _MOCK_DEPARTMENTS
        self._updates = _MOCK_UPDATES

    async def __aenter__(self) -> "MockLatticeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Nothing to release."""

    # =========================================================================
    # Users
    # =========================================================================
    async def list_users(self) -> list[User]:
        logger.debug("Mock: getting all users")
        return list(self._users)

    async def get_user(self, user_id: str) -> User:
        logger.debug("Mock: getting user %s", user_id)
        user = _find(self._users, user_id, _record_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def get_user_direct_reports(self, user_id: str) -> list[User]:
        logger.debug("Mock: getting direct reports for user %s", user_id)
        manager = await self.get_user(user_id)
        return [u for u in self._users if u.manager_id == manager.id]

    async def get_current_user(self) -> User:
        # The first fixture user plays "me".
        me = self._users[0]
        logger.debug("Mock: getting current user (%s)", me.full_name)
        return me

    # =========================================================================
    # Goals
    # =========================================================================
    async def list_goals(self) -> list[Goal]:
        logger.debug("Mock: getting all goals")
        return list(self._goals)

    async def get_goal(self, goal_id: str) -> Goal:
        logger.debug("Mock: getting goal %s", goal_id)
        goal = _find(self._goals, goal_id, _record_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    async def get_user_goals(self, user_id: str) -> list[Goal]:
        logger.debug("Mock: getting goals for user %s", user_id)
        owner = await self.get_user(user_id)
        return [g for g in self._goals if g.user_id == owner.id]

    # =========================================================================
    # Review cycles
    # =========================================================================
    async def list_review_cycles(self) -> list[ReviewCycle]:
        logger.debug("Mock: getting all review cycles")
        return list(self._review_cycles)

    async def get_review_cycle(self, cycle_id: str) -> ReviewCycle:
        logger.debug("Mock: getting review cycle %s", cycle_id)
        cycle = _find(self._review_cycles, cycle_id, _record_id)
        if cycle is None:
            raise NotFoundError("Review cycle", cycle_id)
        return cycle

    async def get_review_cycle_reviewees(self, cycle_id: str) -> list[User]:
        """Return every active user for any existing cycle.

        The fixtures carry no cycle membership, so this is a placeholder and
        not a model of how Lattice assigns reviewees.  The cycle itself must
        still exist.
        """
        logger.debug("Mock: getting reviewees for cycle %s (all active users)", cycle_id)
        await self.get_review_cycle(cycle_id)
        return [u for u in self._users if u.is_active]

    # =========================================================================
    # Feedback
    # =========================================================================
    async def list_feedback(self) -> list[Feedback]:
        logger.debug("Mock: getting all feedback")
        return list(self._feedback)

    async def get_feedback(self, feedback_id: str) -> Feedback:
        logger.debug("Mock: getting feedback %s", feedback_id)
        feedback = _find(self._feedback, feedback_id, _record_id)
        if feedback is None:
            raise NotFoundError("Feedback", feedback_id)
        return feedback

    # =========================================================================
    # Departments & updates
    # =========================================================================
    async def list_departments(self) -> list[Department]:
        logger.debug("Mock: getting all departments")
        return [dict(d) for d in self._departments]

    async def get_department(self, department_id: str) -> Department:
        logger.debug("Mock: getting department %s", department_id)
        department = _find(self._departments, department_id, _mapping_id)
        if department is None:
            raise NotFoundError("Department", department_id)
        return dict(department)

    async def list_updates(self) -> list[Update]:
        logger.debug("Mock: getting all updates")
        return [dict(u) for u in self._updates]

    async def get_update(self, update_id: str) -> Update:
        logger.debug("Mock: getting update %s", update_id)
        update = _find(self._updates, update_id, _mapping_id)
        if update is None:
            raise NotFoundError("Update", update_id)
        return dict(update)
