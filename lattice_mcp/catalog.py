# =============================================================================
# lattice_mcp/catalog.py  —  Tool Catalog (pure declarative data)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Lists every tool the server advertises.  A descriptor says three things:
#     - name + description   what the agent sees in tools/list
#     - argument             the one required string argument, if any
#     - operation            which LatticeClient method the tool is bound to
#
#   There is no behavior here.  The dispatcher (dispatcher.py) binds each
#   operation name to a concrete client at startup.
#
# TOOL NAMING CONVENTIONS:
#   lattice_get_<plural>   collection, no arguments
#   lattice_get_<singular> one record by id
#   All tools are read-only and safe to retry.
#
# THE DESCRIPTIONS MATTER:
#   The LLM reads them to decide WHEN to call a tool.  They are kept identical
#   to what existing Lattice MCP clients already expect.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ToolArgument:
    name: str
    description: str


@dataclass(frozen=True)
class ToolDescriptor:
    """One advertised tool and the client operation it maps to."""

    name: str
    description: str
    operation: str                          # LatticeClient method name
    argument: Optional[ToolArgument] = None  # Zero or one required string argument

    @property
    def required(self) -> list[str]:
        return [self.argument.name] if self.argument else []

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema for the tool's arguments, as sent in tools/list."""
        schema: dict[str, Any] = {"type": "object", "properties": {}}
        if self.argument:
            schema["required"] = [self.argument.name]
            schema["properties"][self.argument.name] = {
                "type": "string",
                "description": self.argument.description,
            }
        return schema


def _arg(name: str, description: str) -> ToolArgument:
    return ToolArgument(name=name, description=description)


# =============================================================================
# Users
# =============================================================================
GET_USERS = ToolDescriptor(
    name="lattice_get_users",
    description="Get all users in the organization",
    operation="list_users",
)
GET_USER = ToolDescriptor(
    name="lattice_get_user",
    description="Get details of a specific user by ID",
    operation="get_user",
    argument=_arg("user_id", "The ID of the user to retrieve"),
)
GET_USER_DIRECT_REPORTS = ToolDescriptor(
    name="lattice_get_user_direct_reports",
    description="Get direct reports for a specific user",
    operation="get_user_direct_reports",
    argument=_arg("user_id", "The ID of the user whose direct reports to retrieve"),
)

# =============================================================================
# Goals
# =============================================================================
GET_GOALS = ToolDescriptor(
    name="lattice_get_goals",
    description="Get all goals in the organization",
    operation="list_goals",
)
GET_GOAL = ToolDescriptor(
    name="lattice_get_goal",
    description="Get details of a specific goal by ID",
    operation="get_goal",
    argument=_arg("goal_id", "The ID of the goal to retrieve"),
)
GET_USER_GOALS = ToolDescriptor(
    name="lattice_get_user_goals",
    description="Get all goals for a specific user",
    operation="get_user_goals",
    argument=_arg("user_id", "The ID of the user whose goals to retrieve"),
)

# =============================================================================
# Review cycles
# =============================================================================
GET_REVIEW_CYCLES = ToolDescriptor(
    name="lattice_get_review_cycles",
    description="Get all review cycles in the organization",
    operation="list_review_cycles",
)
GET_REVIEW_CYCLE = ToolDescriptor(
    name="lattice_get_review_cycle",
    description="Get details of a specific review cycle by ID",
    operation="get_review_cycle",
    argument=_arg("cycle_id", "The ID of the review cycle to retrieve"),
)
GET_REVIEW_CYCLE_REVIEWEES = ToolDescriptor(
    name="lattice_get_review_cycle_reviewees",
    description="Get all reviewees for a specific review cycle",
    operation="get_review_cycle_reviewees",
    argument=_arg("cycle_id", "The ID of the review cycle"),
)

# =============================================================================
# Feedback
# =============================================================================
GET_FEEDBACKS = ToolDescriptor(
    name="lattice_get_feedbacks",
    description="Get all feedback in the organization",
    operation="list_feedback",
)
GET_FEEDBACK = ToolDescriptor(
    name="lattice_get_feedback",
    description="Get details of a specific feedback by ID",
    operation="get_feedback",
    argument=_arg("feedback_id", "The ID of the feedback to retrieve"),
)

# =============================================================================
# Departments
# =============================================================================
GET_DEPARTMENTS = ToolDescriptor(
    name="lattice_get_departments",
    description="Get all departments in the organization",
    operation="list_departments",
)
GET_DEPARTMENT = ToolDescriptor(
    name="lattice_get_department",
    description="Get details of a specific department by ID",
    operation="get_department",
    argument=_arg("department_id", "The ID of the department to retrieve"),
)

# =============================================================================
# Updates
# =============================================================================
GET_UPDATES = ToolDescriptor(
    name="lattice_get_updates",
    description="Get all updates in the organization",
    operation="list_updates",
)
GET_UPDATE = ToolDescriptor(
    name="lattice_get_update",
    description="Get details of a specific update by ID",
    operation="get_update",
    argument=_arg("update_id", "The ID of the update to retrieve"),
)

# =============================================================================
# Current user
# =============================================================================
GET_ME = ToolDescriptor(
    name="lattice_get_me",
    description="Get current user information",
    operation="get_current_user",
)


ALL_TOOLS: tuple[ToolDescriptor, ...] = (
    GET_USERS,
    GET_USER,
    GET_USER_DIRECT_REPORTS,
    GET_GOALS,
    GET_GOAL,
    GET_USER_GOALS,
    GET_REVIEW_CYCLES,
    GET_REVIEW_CYCLE,
    GET_REVIEW_CYCLE_REVIEWEES,
    GET_FEEDBACKS,
    GET_FEEDBACK,
    GET_DEPARTMENTS,
    GET_DEPARTMENT,
    GET_UPDATES,
    GET_UPDATE,
    GET_ME,
)
