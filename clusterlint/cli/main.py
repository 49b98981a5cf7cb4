"""Click command group for clusterlint.

Commands:
    analyze  -- diagnose manifest files and print the markers.
    serve    -- run the REST API.
    version  -- print the installed version.

Exit codes for ``analyze``: 0 clean, 1 markers at or above ``--fail-on``,
2 when the input could not be read or contained no modelled objects.
"""

from __future__ import annotations

import click

from clusterlint.config import FAIL_ON_LEVELS, NAMER_STYLES, OUTPUT_FORMATS, load_config
from clusterlint.errors import ManifestReadError
from clusterlint.graph.namer import namer_for
from clusterlint.loader import load_files
from clusterlint.models.config import ClusterlintConfig
from clusterlint.observability.logging import get_logger, setup_logging
from clusterlint.pipeline import diagnose
from clusterlint.render import exit_code, render_json, render_text

EXIT_INPUT_ERROR = 2


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Override CLUSTERLINT_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Detect invalid Route/Service/workload configurations."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    if log_level:
        config.log.level = log_level
    setup_logging(config.log.level)
    ctx.obj = config


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--output", "-o", "output", type=click.Choice(OUTPUT_FORMATS), default=None, help="Report format.")
@click.option("--fail-on", type=click.Choice(FAIL_ON_LEVELS), default=None, help="Lowest severity that fails the run.")
@click.option("--namer", "namer_style", type=click.Choice(NAMER_STYLES), default=None, help="Node label style.")
@click.pass_obj
def analyze(
    config: ClusterlintConfig,
    files: tuple[str, ...],
    output: str | None,
    fail_on: str | None,
    namer_style: str | None,
) -> None:
    """Diagnose the objects in FILES (YAML or JSON manifests)."""
    log = get_logger("cli")
    output = output or config.output.format
    fail_on = fail_on or config.analysis.fail_on
    namer = namer_for(namer_style or config.output.namer)

    try:
        loaded = load_files(files)
    except ManifestReadError as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(EXIT_INPUT_ERROR) from exc

    if not loaded.objects:
        log.warning("no_objects_loaded", files=list(files), skipped=len(loaded.skipped))
        click.echo("error: no Route, Service or workload objects found in input", err=True)
        raise SystemExit(EXIT_INPUT_ERROR)

    report = diagnose(loaded.objects, namer=namer, max_workers=config.analysis.max_workers)
    report.skipped = loaded.skipped

    if output == "json":
        click.echo(render_json(report, namer))
    else:
        click.echo(render_text(report.markers, namer, report.skipped))

    raise SystemExit(exit_code(report.markers, fail_on))


@cli.command()
def version() -> None:
    """Print the clusterlint version."""
    from clusterlint import __version__

    click.echo(__version__)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", type=int, default=None, help="Override CLUSTERLINT_API_PORT.")
@click.pass_obj
def serve(config: ClusterlintConfig, host: str, port: int | None) -> None:
    """Serve the REST API with uvicorn."""
    import uvicorn

    from clusterlint.api.app import create_app

    get_logger("cli").info("api_starting", host=host, port=port or config.api.port)
    uvicorn.run(create_app(config), host=host, port=port or config.api.port, log_config=None)
