# =============================================================================
# lattice/__init__.py
# =============================================================================
# This package contains everything that knows about the Lattice HQ API:
# the record types, the error hierarchy, configuration, and the two backend
# clients (live HTTP and in-memory mock).
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other protocol framework.
#   The MCP layer (lattice_mcp/) depends on this package, never the other way
#   around.  You can drive a client from a bare asyncio REPL.
#
# WHY TWO CLIENTS?
#   Both implement the same LatticeClient protocol (lattice/client.py).  The
#   bootstrap picks one at startup: a token means live, no token means mock.
#   Everything downstream (dispatcher, tools) is unaware of the choice.
# =============================================================================

__version__ = "0.1.0"
