"""``tern match`` — show which routes match a path, in dispatch order.

Handlers are not called, so every match is listed even though a real
dispatch would stop at the first handler that doesn't decline.
"""

import argparse

from tern.cli._resolve import load_router


def run_match(args: argparse.Namespace) -> None:
    router = load_router(args.router, args.log_level)

    matches = router.match(args.path)
    if not matches:
        print(f"No route matches {args.path!r}.")
        raise SystemExit(1)

    for index, found in enumerate(matches, 1):
        params = ", ".join(f"{k}={v!r}" for k, v in found.params.items())
        suffix = f"  ({params})" if params else ""
        print(f"{index}. {found.route.pattern} -> {found.route.name}{suffix}")
