# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for updating the character store, single-page extraction and the daily pick

import json
from datetime import UTC, datetime
from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from nikkedex.config import get_config
from nikkedex.core.daily import pick, seed_for_date
from nikkedex.core.result import Err, Ok
from nikkedex.extraction import extract_nikke
from nikkedex.fetch import WikiClient
from nikkedex.html import parse_html
from nikkedex.persistence import NikkeStore, StoreError
from nikkedex.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_pipeline_context,
)
from nikkedex.utils.retry import FetchError, configure_fetch_retry, get_fetch_retry_status
from nikkedex.utils.rich_tables import (
    create_error_report_table,
    create_logging_status_table,
    create_nikke_table,
    create_update_summary_table,
    print_rich_table,
)

console = Console()


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


@click.command()
@click.option("--concurrency", "-c", type=int, help="Character pages processed at once (overrides config)")
@click.pass_context
async def update(ctx, concurrency: int | None):
    """
    🔄 Add every character on the wiki listing that is missing from the store.

    Known names are skipped; portraits are stored with an 80x80 thumbnail.
    """
    await _update_async(concurrency, ctx.obj["json_output"])


async def _update_async(concurrency: int | None, json_output: bool):
    from nikkedex.core.service import NikkeUpdateService

    with with_pipeline_context("nikke_update") as logger:
        service = NikkeUpdateService(max_concurrency=concurrency)

        try:
            if json_output:
                report = await service.run()
            else:
                console.print(
                    Panel.fit(
                        f"📚 [bold cyan]Nikkedex Update[/bold cyan]\nStore: {service.store.path}",
                        border_style="magenta",
                    )
                )
                progress, _, tracker = create_smart_progress(console)
                with progress, tracker:
                    report = await service.run(progress_callback=tracker.update)
        except (FetchError, StoreError) as e:
            logger.error("Update aborted", error=str(e), error_type=type(e).__name__)
            if json_output:
                click.echo(json.dumps({"error": str(e)}))
            else:
                console.print(f"[red]❌ {escape(str(e))}[/red]")
            raise click.exceptions.Exit(1) from e
        finally:
            await service.close()

    if json_output:
        click.echo(
            json.dumps(
                {
                    "listed": report.listed,
                    "cached": report.cached,
                    "added": report.added,
                    "failed": report.failed,
                },
                indent=2,
            )
        )
    else:
        print_rich_table(console, create_update_summary_table(report))


@click.command()
@click.argument("source")
@click.pass_context
async def extract(ctx, source: str):
    """
    🕷️ Extract one character record from a wiki page URL or a saved HTML file.

    Nothing is written; the record or the per-field error report is printed.
    """
    await _extract_async(source, ctx.obj["json_output"])


async def _extract_async(source: str, json_output: bool):
    with with_pipeline_context("extract", source=source) as logger:
        if _is_url(source):
            try:
                async with WikiClient() as client:
                    document = await client.fetch_html(source)
            except FetchError as e:
                console.print(f"[red]❌ {escape(str(e))}[/red]")
                raise click.exceptions.Exit(1) from e
        else:
            path = Path(source)
            if not path.is_file():
                raise click.BadParameter(f"{source} is neither a URL nor a readable file", param_hint="SOURCE")
            document = parse_html(path.read_bytes())

        result = extract_nikke(document)
        match result:
            case Ok(record):
                logger.info("Extraction complete", name=record.name)
                if json_output:
                    click.echo(record.model_dump_json(indent=2))
                else:
                    print_rich_table(console, create_nikke_table(record))
            case Err(errors):
                logger.warning("Extraction failed", errors=errors)
                if json_output:
                    click.echo(json.dumps({"errors": errors}, indent=2))
                else:
                    print_rich_table(console, create_error_report_table(errors))

    if result.is_err():
        raise click.exceptions.Exit(1)


@click.command()
@click.option(
    "--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Calendar day (UTC) to pick for, default today"
)
@click.pass_context
def daily(ctx, day: datetime | None):
    """
    📅 Show the character of the day from the local store.
    """
    json_output = ctx.obj["json_output"]
    selected_day = day.date() if day else datetime.now(UTC).date()
    seed = seed_for_date(selected_day)

    try:
        records = NikkeStore().load().records()
    except StoreError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise click.exceptions.Exit(1) from e

    record = pick(seed, records)

    if record is None:
        if json_output:
            click.echo(json.dumps({"error": "store is empty"}))
        else:
            console.print("[yellow]⚠️ The store is empty, run `nikkedex update` first[/yellow]")
        raise click.exceptions.Exit(1)

    if json_output:
        click.echo(record.model_dump_json(indent=2))
    else:
        print_rich_table(console, create_nikke_table(record, title_prefix=f"📅 {selected_day.isoformat()} ·"))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Log directory unavailable; production mode writes to stderr only
        configure_logging(mode=LoggingMode.PRODUCTION, log_level=log_level or "INFO")


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status, get_fetch_retry_status())
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs and results instead of rich interface")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📚 Nikkedex - Character data extraction for the NIKKE wiki

    Reads character pages from the community wiki into typed records,
    keeps a deduplicated JSON store and picks a character of the day.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)
    configure_fetch_retry(get_config().fetch_rate_limit)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(update)
app.add_command(extract)
app.add_command(daily)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
