from __future__ import annotations

import argparse
import os
from typing import List, Optional

import uvicorn


APP_FACTORY = "chessboard.protocol.http.app:create_app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the chessboard HTTP API")
    parser.add_argument(
        "--host",
        default=os.environ.get("CHESSBOARD_HOST", "0.0.0.0"),
        help="Bind address (env CHESSBOARD_HOST, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("CHESSBOARD_PORT", "8000")),
        help="Bind port (env CHESSBOARD_PORT, default: 8000)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CHESSBOARD_LOG_LEVEL", "info"),
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level (env CHESSBOARD_LOG_LEVEL, default: info)",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
