"""Process entry point — load .env, configure logging, serve on :3000.

Usage:
    uaa-login
    uaa-login --port 8080 --env-file deploy/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from config.settings import ENV_FILE, Settings
from uaa_login.core.logging import get_logger, setup_logging

log = get_logger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="UAA OAuth2 login server")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--env-file", type=Path, default=Path(ENV_FILE))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if not args.env_file.is_file():
        setup_logging()
        log.critical("env_file_missing", path=str(args.env_file))
        sys.exit("Error loading .env file")

    load_dotenv(args.env_file)
    settings = Settings()
    setup_logging(settings.uaa_log_level, json_output=settings.uaa_env == "prod")

    from uaa_login.api.main import create_app

    log.info("listening", url=f"http://{args.host}:{args.port}")
    # uvicorn exits with status 1 when the port cannot be bound
    uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
