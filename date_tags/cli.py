"""CLI entrypoint for date-tags."""

import logging
from pathlib import Path
from typing import Optional

import click

from date_tags import __version__
from date_tags.config import load_vault_configuration, resolve_vault
from date_tags.constants import LOG_LEVEL
from date_tags.data_models import VaultConfiguration
from date_tags.errors import DateTagsError
from date_tags.models import BaseNoteInput
from date_tags.operations import add_today_tag, build_dispatcher, read_date_history
from date_tags.watcher import run_watch_loop


def _notify(message: str) -> None:
    click.secho(message, fg="red", err=True)


def _document_id(note: str) -> str:
    try:
        return BaseNoteInput(title=note).title
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="NOTE") from exc


@click.group()
@click.version_option(__version__, prog_name="date-tags")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to date_tags.yaml (defaults to $DATE_TAGS_CONFIG or the bundled location)",
)
@click.option("--vault", "-v", "vault_name", default=None, help="Vault name from the configuration")
@click.option("--verbose", is_flag=True, help="Log skipped events and settings fallbacks")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], vault_name: Optional[str], verbose: bool) -> None:
    """date-tags - keep created/modified timestamps and daily date tags in note frontmatter."""
    logging.basicConfig(level=logging.DEBUG if verbose else LOG_LEVEL)
    ctx.ensure_object(dict)
    try:
        configuration = load_vault_configuration(config_path)
        vault = resolve_vault(vault_name, configuration)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    ctx.obj["configuration"] = configuration
    ctx.obj["vault"] = vault


@cli.command()
@click.pass_context
def watch(ctx: click.Context) -> None:
    """Watch the vault and maintain date tags as notes are created and edited."""
    configuration: VaultConfiguration = ctx.obj["configuration"]
    vault = ctx.obj["vault"]
    if not vault.path.is_dir():
        raise click.ClickException(f"Vault '{vault.name}' is not accessible at {vault.path}")

    dispatcher = build_dispatcher(vault, configuration.settings, notifier=_notify)

    def _report(result: dict) -> None:
        if result["status"] == "updated":
            click.echo(f"{result['kind']}: {result['note']} ({', '.join(result['fields_updated'])})")

    click.echo(f"Watching {vault.path} (Ctrl+C to stop)")
    run_watch_loop(vault, dispatcher, on_result=_report)


@cli.command("tag-today")
@click.argument("note")
@click.pass_context
def tag_today(ctx: click.Context, note: str) -> None:
    """Add today's date tag to NOTE."""
    configuration: VaultConfiguration = ctx.obj["configuration"]
    result = add_today_tag(ctx.obj["vault"], _document_id(note), configuration.settings, notifier=_notify)
    if result["status"] == "error":
        ctx.exit(1)
    click.echo(f"{result['note']}: {result['status']}")


@cli.command()
@click.argument("note")
@click.pass_context
def history(ctx: click.Context, note: str) -> None:
    """Show the days NOTE was visited."""
    configuration: VaultConfiguration = ctx.obj["configuration"]
    try:
        result = read_date_history(ctx.obj["vault"], _document_id(note), configuration.settings)
    except (FileNotFoundError, ValueError, DateTagsError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"created:  {result['created'] or '-'}")
    click.echo(f"modified: {result['modified'] or '-'}")
    for day in result["visited"]:
        click.echo(f"  {day}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
