#!/usr/bin/env python3
"""FastAPI server entry point for VoxQuery."""

import argparse
import os

import uvicorn
from dotenv import load_dotenv

from config.config import Config
from server.schemas.responses import API_VERSION

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"VoxQuery API server {API_VERSION}")
    parser.add_argument("--host", default=os.getenv("VOXQUERY_HOST", "127.0.0.1"), help="Host to bind to")
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("VOXQUERY_PORT", "8000")), help="Port to bind to"
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    return parser


def banner(config: Config) -> str:
    lines = [f"VoxQuery API {API_VERSION}", config.describe()]
    missing = config.missing_credentials()
    if missing:
        lines.append(f"Missing credentials: {', '.join(missing)}")
    return "\n".join(lines)


def main(argv=None):
    args = build_parser().parse_args(argv)
    print(banner(Config(load_env_file=False)))

    uvicorn.run(
        "server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
