# =============================================================================
# lattice_mcp/dispatcher.py  —  Tool Dispatcher
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Routes a named tool call to the LatticeClient operation it is bound to,
#   and turns whatever comes back into the text payload the agent receives.
#
# HOW IT WORKS (the flow):
#   1. Look the tool up by name              -> UnknownToolError if absent
#   2. Check its required argument           -> MissingArgumentError if absent,
#                                               InvalidArgumentError if not a str
#   3. Await the bound client operation      -> NotFoundError / TransportError
#   4. Serialize the result as indented JSON
#   5. Any failure in 1-3 becomes {"error": "<message>"} in the SAME text
#      envelope.  call_tool() never raises: the protocol response always
#      succeeds and failures travel in-band, where the agent can read them.
#
# BINDING:
#   Handlers are bound once, in __init__, against the client chosen at
#   startup.  There is no global client; whoever builds the Dispatcher
#   decides which backend it talks to.
# =============================================================================

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from lattice.client import LatticeClient
from lattice.errors import (
    InvalidArgumentError,
    LatticeError,
    MissingArgumentError,
    NotFoundError,
    UnknownToolError,
)
from lattice.models import to_payload
from lattice_mcp.catalog import ALL_TOOLS, ToolDescriptor

logger = logging.getLogger(__name__)

# =============================================================================
# Logging helpers
# =============================================================================
# Everything goes to STDERR (see main.py); STDOUT belongs to the MCP stream.
#   - CYAN for incoming requests (tool name + arguments)
#   - YELLOW for intermediate status
#   - GREEN for the response JSON
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def _log_request(tool_name: str, arguments: Mapping[str, Any]) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


@dataclass(frozen=True)
class _Handler:
    descriptor: ToolDescriptor
    operation: Callable[..., Awaitable[Any]]   # Bound client method


class Dispatcher:
    """Binds the tool catalog to one LatticeClient.

    Args:
        client: The backend every tool call is routed to.
        tools: Descriptors to expose; the full catalog by default.

    Raises:
        ValueError: two descriptors share a name.
        TypeError: the client lacks an operation a descriptor refers to.
    """

    def __init__(self, client: LatticeClient, tools: Iterable[ToolDescriptor] = ALL_TOOLS):
        self.client = client
        self._handlers: dict[str, _Handler] = {}
        for descriptor in tools:
            if descriptor.name in self._handlers:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")
            operation = getattr(client, descriptor.operation, None)
            if not callable(operation):
                raise TypeError(
                    f"{type(client).__name__} has no operation {descriptor.operation!r} "
                    f"required by tool {descriptor.name}"
                )
            self._handlers[descriptor.name] = _Handler(descriptor, operation)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def list_tools(self) -> list[ToolDescriptor]:
        """All bound descriptors, in catalog order."""
        return [handler.descriptor for handler in self._handlers.values()]

    async def execute(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Run a tool and return its JSON-ready payload.

        Unlike call_tool(), failures are raised, not wrapped.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)

        arguments = arguments or {}
        values = []
        for arg_name in handler.descriptor.required:
            value = arguments.get(arg_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingArgumentError(arg_name)
            if not isinstance(value, str):
                raise InvalidArgumentError(arg_name)
            values.append(value)

        return to_payload(await handler.operation(*values))

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """Run a tool and return the text the agent receives.

        Returns:
            The result as indented JSON, or {"error": "<message>"} if anything
            went wrong.  Never raises.
        """
        arguments = arguments or {}
        _log_request(name, arguments)
        try:
            payload = await self.execute(name, arguments)
            text = json.dumps(payload, indent=2)
        except NotFoundError as exc:
            _log_status(f"No {exc.entity.lower()} with id {exc.entity_id!r}")
            return json.dumps(_log_response(name, {"error": str(exc)}))
        except LatticeError as exc:
            _log_status(f"{type(exc).__name__}: {exc}")
            return json.dumps(_log_response(name, {"error": str(exc)}))
        except Exception as exc:
            logger.exception("Unexpected error executing tool %s", name)
            return json.dumps(_log_response(name, {"error": str(exc) or type(exc).__name__}))

        if isinstance(payload, list):
            _log_status(f"Returned {len(payload)} record(s)")
        _log_response(name, payload)
        return text
