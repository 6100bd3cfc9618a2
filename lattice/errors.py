# =============================================================================
# lattice/errors.py  —  Error Hierarchy
# =============================================================================
#
# Every failure the server can report to an agent is a LatticeError.  The
# dispatcher catches them at one place and turns the message into an
# in-band {"error": "..."} payload, so the messages below are what the agent
# actually reads.  Keep them short and specific.
#
#   LatticeError
#   ├── NotFoundError          keyed lookup matched nothing
#   ├── TransportError         HTTP call failed or returned non-2xx
#   ├── MissingArgumentError   tool called without its required argument
#   ├── InvalidArgumentError   argument supplied but not a string
#   └── UnknownToolError       tool name not in the catalog
# =============================================================================

from typing import Optional


class LatticeError(Exception):
    """Base class for every error raised by this project."""


class NotFoundError(LatticeError):
    """No entity matches the requested identifier."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class TransportError(LatticeError):
    """The backing HTTP call could not complete successfully."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class MissingArgumentError(LatticeError):
    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"{argument} is required")


class InvalidArgumentError(LatticeError):
    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"{argument} must be a non-empty string")


class UnknownToolError(LatticeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")
