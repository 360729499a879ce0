"""``tern routes`` — list registered patterns in dispatch order."""

import argparse

from tern.cli._resolve import load_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PRIORITY, PATTERN, and handler name."""
    router = load_router(args.router, args.log_level)

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(str(index), route.pattern, route.name) for index, route in enumerate(routes, 1)]

    max_index = max(max(len(r[0]) for r in rows), 8)  # "PRIORITY" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_index}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("PRIORITY", "PATTERN", "HANDLER"))
    sep_len = max_index + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))

    if router.interceptors:
        names = ", ".join(getattr(i, "__qualname__", type(i).__name__) for i in router.interceptors)
        print(f"\nInterceptors (in order): {names}")
