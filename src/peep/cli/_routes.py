"""``peep routes``: list the routes a script declares."""

import argparse
import sys

from peep.cli._resolve import load_script
from peep.routing.route import ANY


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / DESTINATION table in matching order."""
    try:
        app = load_script(args.script)
    except (FileNotFoundError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = "ANY" if ANY in route.methods else ", ".join(sorted(route.methods))
        destination = route.destination_name
        if isinstance(route.destination, str):
            destination = f"{destination!r}"
        rows.append((methods_str, route.pattern_text, destination))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "DESTINATION"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
