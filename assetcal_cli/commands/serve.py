"""Run the HTTP API with Flask's development server."""

import typer
from typing_extensions import Annotated

from assetcal.web import create_app
from assetcal_cli.context import get_context


def serve_command(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port")] = 5000,
    debug: Annotated[bool, typer.Option("--debug", help="Enable Flask debug mode")] = False,
) -> None:
    """Serve the cron trigger, vehicle sync and event APIs."""
    ctx = get_context()
    app = create_app(engine=ctx.engine)
    app.run(host=host, port=port, debug=debug)
