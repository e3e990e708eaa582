"""
Todo REST Backend — Server Entry Point
========================================

Usage:
    python -m todo_api                 # in-memory only, port 8080
    python -m todo_api --persist       # mirror every change to data.csv
    python -m todo_api --persist --data-file /var/lib/todos.csv --port 9000

Command-line flags override the matching environment settings.
"""

import argparse
from typing import List, Optional

import uvicorn

from todo_api.config import settings
from todo_api.main import create_app
from todo_api.services.todo_store import TodoStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo_api",
        description="Run the Todo REST backend.",
    )
    parser.add_argument(
        "--persist",
        dest="file_persistence",
        action=argparse.BooleanOptionalAction,
        default=settings.file_persistence,
        help="Load todos from the data file on startup and rewrite it after every change",
    )
    parser.add_argument("--data-file", default=settings.data_file, help="CSV data file path")
    parser.add_argument("--host", default=settings.backend_host)
    parser.add_argument("--port", type=int, default=settings.backend_port)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    store = TodoStore(data_file=args.data_file, file_persistence=args.file_persistence)
    # log_config=None: setup_logging() in the lifespan owns the logging config
    uvicorn.run(create_app(store=store), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
