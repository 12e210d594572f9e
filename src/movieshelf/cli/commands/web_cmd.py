from __future__ import annotations

import argparse

from movieshelf.cli.context import CLIContext
from movieshelf.core.config import default_port
from movieshelf.web.app import create_app


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("web", help="Run the upload HTTP server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (default: $PORT or 3000)")
    parser.add_argument("--reload", action="store_true")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    try:
        import uvicorn
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("uvicorn is required for web mode. Install project dependencies.") from exc

    port = args.port if args.port is not None else default_port()
    app = create_app(ctx.paths)
    ctx.console.print(f"[green]Server is running on port[/green] {port}")
    uvicorn.run(app, host=args.host, port=port, reload=args.reload)
    return 0
