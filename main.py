# =============================================================================
# main.py  —  Entry Point for the Lattice HQ MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py --stdio                    # mock mode (no token)
#   uv run python main.py --stdio --api-key <token>  # live mode
#   lattice-mcp-server --stdio                       # installed console script
#
# WHAT HAPPENS:
#   1. Loads .env (LATTICE_API_TOKEN, LATTICE_API_URL, ...) into the environment
#   2. Builds one LatticeConfig from env + command-line flags
#   3. Picks the backend: a token means LIVE, no token means MOCK
#   4. Binds the tool catalog to that client (Dispatcher)
#   5. Serves the tools over stdio with FastMCP until the client hangs up
#
# EXIT STATUS:
#   0  client closed the stream
#   1  unrecoverable fault while starting or serving (logged to stderr)
#   2  bad invocation: missing --stdio or an invalid setting (usage on stderr)
# =============================================================================

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from lattice import __version__
from lattice.config import LatticeConfig, build_client
from lattice_mcp.dispatcher import Dispatcher
from lattice_mcp.server import configure_logging, create_server

logger = logging.getLogger("lattice_mcp")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lattice-mcp-server",
        description="MCP server exposing read-only Lattice HQ API endpoints as tools.",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="serve MCP over stdin/stdout (required)",
    )
    parser.add_argument(
        "--api-key",
        help="Lattice API token; overrides LATTICE_API_TOKEN. Without a token the server runs on mock data.",
    )
    parser.add_argument(
        "--base-url",
        help="Lattice API root; overrides LATTICE_API_URL (default https://tide.latticehq.com)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="logging level; overrides LATTICE_LOG_LEVEL (default INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> LatticeConfig:
    """Environment first, then command-line overrides."""
    return LatticeConfig.from_env().with_overrides(
        api_key=args.api_key,
        base_url=args.base_url,
        log_level=args.log_level,
    )


async def serve(config: LatticeConfig) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    async with build_client(config) as client:
        mcp = create_server(Dispatcher(client))
        await mcp.run_async(transport="stdio")


def main(argv: Optional[Sequence[str]] = None) -> int:
    # Must happen BEFORE the config is read: LatticeConfig.from_env() only
    # sees what is in os.environ.
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.stdio:
        parser.error("the --stdio transport flag is required")

    try:
        config = load_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(config.log_level)
    if config.use_mock:
        logger.info("MOCK MODE: no Lattice API token configured, serving fixture data")
        logger.info("  Set LATTICE_API_TOKEN or pass --api-key to use the real Lattice API")
    else:
        logger.info("LIVE MODE: using the Lattice API at %s", config.base_url)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
