# =============================================================================
# lattice_mcp/__init__.py
# =============================================================================
# This package is the MCP "translation layer" between an agent and the
# lattice/ package.
#
#   catalog.py     the sixteen tool descriptors (pure data)
#   dispatcher.py  name -> client operation routing, argument checks, JSON
#   server.py      FastMCP wiring: descriptors in, dispatcher calls out
#
# WHAT THIS LAYER DOES NOT DO:
#   - It does NOT talk HTTP (that's lattice/client.py)
#   - It does NOT know whether it is running against mock or live data
# =============================================================================
