# src/asana_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the client from settings, runs one command and
prints the result as JSON on stdout. Logs go to stderr.

Exit codes: 0 ok, 1 API/network failure, 2 usage or configuration error.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import httpx

from ..client import Client
from ..config import Settings, get_settings
from ..errors import ApiError, ConfigurationError, InvalidIdentifierError
from ..logging_setup import setup_logging
from .commands import CommandError, CommandRegistry, build_registry

logger = logging.getLogger(__name__)

_HELP_WORDS = {"help", "-h", "--help"}


async def _run(registry: CommandRegistry, settings: Settings, argv: list[str]) -> Any:
    async with Client.from_settings(settings) as client:
        return await registry.handle(client.tasks, argv)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    registry = build_registry()

    # help needs no client (and no token).
    if not argv or argv[0].lower() in _HELP_WORDS:
        print(asyncio.run(registry.handle(None, ["help"])))
        return 0

    # Fail on unknown commands before requiring a token.
    if argv[0] not in registry:
        print(f"Unknown command: {argv[0]}. Use 'help' to list available commands.", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(_run(registry, settings, argv))
    except (CommandError, InvalidIdentifierError) as e:
        print(str(e), file=sys.stderr)
        return 2
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2
    except ApiError as e:
        logger.error("Request failed: %s", e)
        return 1
    except httpx.HTTPError as e:
        logger.error("Network error: %s", e)
        return 1

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
