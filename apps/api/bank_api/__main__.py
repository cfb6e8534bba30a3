"""Command-line entrypoint: ``python -m bank_api [--seed]``."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from bank_api.core.config import get_settings
from bank_api.main import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bank_api", description="Run the bank accounts API server.")
    parser.add_argument("--seed", action="store_true", help="seed the demo account before serving")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--log-level", default="info")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    settings = get_settings()
    if args.seed:
        settings = settings.model_copy(update={"seed_demo_account": True})

    app = create_app(settings)
    logging.getLogger(__name__).info("server.starting host=%s port=%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
