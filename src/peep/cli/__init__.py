"""Peep CLI: serve a script, or list its routes.

Entry point registered as ``peep`` in ``pyproject.toml``::

    [project.scripts]
    peep = "peep.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``peep`` command."""
    parser = argparse.ArgumentParser(
        prog="peep",
        description="Peep: terse single-file web services.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- peep run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a peep script")
    run_parser.add_argument("script", help="Path to the script (e.g. app.py)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- peep routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a script declares")
    routes_parser.add_argument("script", help="Path to the script (e.g. app.py)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from peep.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from peep.cli._routes import run_routes

        run_routes(args)
