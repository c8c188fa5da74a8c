"""Root CLI group for htmlsafe: escape and concatenate from the shell."""

from __future__ import annotations

import click
import structlog

from htmlsafe import __version__
from htmlsafe.config.logging import configure_logging
from htmlsafe.config.settings import HtmlSafeSettings
from htmlsafe.domain.safe import Safe, concat, escape, wrap
from htmlsafe.plugins.manager import load_plugin_manager, set_plugin_manager

SAFE_PREFIX = "safe:"

log = structlog.get_logger(__name__)


def _load_plugins(settings: HtmlSafeSettings, *, enabled: bool) -> None:
    manager = load_plugin_manager(settings, enabled=enabled)
    log.debug("plugins_loaded", loaded=manager.is_loaded, plugins=manager.list_plugin_names())
    set_plugin_manager(manager)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="htmlsafe")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--no-plugins", is_flag=True, help="Skip entry-point plugin discovery.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    no_plugins: bool,
) -> None:
    """htmlsafe — escape and join HTML fragments without double-escaping."""
    settings = HtmlSafeSettings.from_cli(
        config_path=config_path,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    configure_logging(settings)
    _load_plugins(settings, enabled=not no_plugins)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("escape")
@click.argument("texts", nargs=-1)
@click.pass_obj
def escape_cmd(settings: HtmlSafeSettings, texts: tuple[str, ...]) -> None:
    """Escape each TEXT, or standard input when none is given.

    \b
    Examples:
      htmlsafe escape '<b>bold</b>'
      echo '"quoted" & more' | htmlsafe escape
    """
    if not texts:
        data = click.get_text_stream("stdin").read()
        click.echo(escape(data).to_str(settings.encoding), nl=False)
        return
    for text in texts:
        click.echo(escape(text).to_str(settings.encoding))


@cli.command("concat")
@click.argument("parts", nargs=-1, required=True)
@click.pass_obj
def concat_cmd(settings: HtmlSafeSettings, parts: tuple[str, ...]) -> None:
    """Join PARTS into one fragment, escaping every part not marked safe.

    A part prefixed with ``safe:`` is trusted and emitted verbatim.

    \b
    Examples:
      htmlsafe concat 'safe:<p>' '<user input>' 'safe:</p>'
    """
    values: list[str | Safe] = []
    for part in parts:
        if part.startswith(SAFE_PREFIX):
            values.append(wrap(part[len(SAFE_PREFIX) :]))
        else:
            values.append(part)
    log.debug("concat", parts=len(values), trusted=sum(isinstance(v, Safe) for v in values))
    click.echo(concat(values).to_str(settings.encoding))
