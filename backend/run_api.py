#!/usr/bin/env python
"""
Start the Solicitudes API under uvicorn.

Command-line flags override the HOST, PORT, RELOAD and LOG_LEVEL settings.

    python run_api.py --reload --log-level debug
"""

import argparse
from typing import Optional

import uvicorn

from shared.config import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Start the Solicitudes API")
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level",
    )
    return parser


def server_options(argv: Optional[list[str]] = None) -> dict:
    """uvicorn.run keyword arguments from settings and flags."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    return {
        "host": args.host or settings.host,
        "port": args.port or settings.port,
        "reload": args.reload or settings.reload,
        "log_level": args.log_level or settings.log_level.lower(),
    }


def main(argv: Optional[list[str]] = None) -> None:
    uvicorn.run("api:app", **server_options(argv))


if __name__ == "__main__":
    main()
