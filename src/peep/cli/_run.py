"""``peep run``: serve a script with the development server."""

import argparse
import sys

from peep.cli._resolve import load_script


def run_server(args: argparse.Namespace) -> None:
    """Load ``args.script`` and serve its application with pounce.

    ``--host`` and ``--port`` override the script's configuration.
    """
    try:
        app = load_script(args.script)
    except (FileNotFoundError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.serve(host=args.host, port=args.port)
