import argparse
import logging
import os

import uvicorn

from antd_rush.config import LANGUAGE_ENV_VAR, LANGUAGE_ALIASES, resolve_language

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="antd-rush",
        description=(
            "Completion and hover server for Ant Design components. "
            "Editors post the document and cursor position to it."
        ),
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host interface to bind the server to (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on (default: 8000).",
    )
    parser.add_argument(
        "--language",
        default=None,
        help=(
            "Documentation language "
            f"({', '.join(sorted(LANGUAGE_ALIASES))}; default: ${LANGUAGE_ENV_VAR} or en)."
        ),
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=LOG_LEVELS,
        help="Log level for the server and uvicorn (default: info).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the CLI.

    - Resolves the documentation language and exports it for the app.
    - Configures logging.
    - Starts the FastAPI server.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.language is not None:
        # The app reads its settings from the environment at import time
        os.environ[LANGUAGE_ENV_VAR] = resolve_language(args.language).value

    url = f"http://{args.host}:{args.port}"
    print(f"🚀 Starting antd-rush server at {url}")
    print("   Press Ctrl+C to stop.")

    uvicorn.run(
        "antd_rush.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()
