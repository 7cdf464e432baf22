import os
from collections.abc import Sequence

import click
from click.formatting import term_len

from .runtime import reset_jobs, reset_verbose_logging, set_jobs, set_verbose_logging

COMMAND_GROUPS = (
    ("Dotfiles", ("link", "clean", "sync")),
    ("Setup", ("init", "clone")),
)
HELP_COL_MAX = 30
HELP_COL_SPACING = 2


def _write_bold_section(
    formatter: click.HelpFormatter, title: str, records: list[tuple[str, str]]
) -> None:
    if not records:
        return
    formatter.write("\n")
    formatter.write(click.style(title, bold=True) + "\n")
    formatter.indent()
    formatter.write_dl(records, col_max=HELP_COL_MAX, col_spacing=HELP_COL_SPACING)
    formatter.dedent()


def _command_help_limit(formatter: click.HelpFormatter, names: Sequence[str]) -> int:
    if not names:
        return 45
    max_name = max(term_len(name) for name in names)
    first_col = min(max_name, HELP_COL_MAX) + HELP_COL_SPACING
    return max(formatter.width - first_col - 2, 10)


class OrderedGroup(click.Group):
    def __init__(
        self,
        *args,
        commands_order: Sequence[str] | None = None,
        command_groups: Sequence[tuple[str, Sequence[str]]] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._commands_order = list(commands_order or [])
        self._command_groups = [
            (title, set(commands)) for title, commands in (command_groups or [])
        ]

    def list_commands(self, ctx: click.Context) -> list[str]:
        if not self._commands_order:
            return super().list_commands(ctx)
        ordered = [name for name in self._commands_order if name in self.commands]
        remaining = [
            name
            for name in super().list_commands(ctx)
            if name not in self._commands_order
        ]
        return ordered + remaining

    def format_commands(
        self, ctx: click.Context, formatter: click.HelpFormatter
    ) -> None:
        if not self._command_groups:
            return super().format_commands(ctx, formatter)
        grouped: dict[str, list[tuple[str, click.Command]]] = {
            title: [] for title, _ in self._command_groups
        }
        other: list[tuple[str, click.Command]] = []
        for name in self.list_commands(ctx):
            cmd = self.get_command(ctx, name)
            if cmd is None or cmd.hidden:
                continue
            for title, command_set in self._command_groups:
                if name in command_set:
                    grouped[title].append((name, cmd))
                    break
            else:
                other.append((name, cmd))
        sections = [(title.upper(), grouped[title]) for title, _ in self._command_groups]
        sections.append(("OTHER", other))
        for title, entries in sections:
            if not entries:
                continue
            limit = _command_help_limit(formatter, [name for name, _ in entries])
            rows = [(name, cmd.get_short_help_str(limit=limit)) for name, cmd in entries]
            _write_bold_section(formatter, title, rows)


def _progress(ctx: click.Context):
    from .progress import NullProgress, ProgressSink

    if ctx.obj.get("quiet"):
        return NullProgress()
    return ProgressSink(err=True)


def _fatal(exc: Exception) -> click.ClickException:
    return click.ClickException(str(exc))


def _report(outcomes, *, show_not_installed: bool = False) -> None:
    from .link import ERRORS_HEADER, NOT_INSTALLED_HEADER, not_installed, summarize

    errors = summarize(outcomes)
    if errors:
        click.echo(f"{ERRORS_HEADER}\n{errors}", err=True)
    if show_not_installed:
        missing = not_installed(outcomes)
        if missing:
            click.echo(f"{NOT_INSTALLED_HEADER}\n{missing}")


@click.group(
    cls=OrderedGroup,
    commands_order=["init", "link", "clean", "clone", "sync"],
    command_groups=COMMAND_GROUPS,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Print debug diagnostics to stderr (same as MAGE_VERBOSE=1).",
)
@click.option(
    "-q", "--quiet", is_flag=True, help="Do not print per-entry progress messages."
)
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=None,
    help="Number of entries processed in parallel (default: MAGE_JOBS or 8).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.yaml (default: $XDG_CONFIG_HOME/mage/config.yaml).",
)
@click.pass_context
def cli(ctx, verbose, quiet, jobs, config_path):
    """
    mage - symlink dotfiles from a directory or GitHub repository
    """
    from .utils import read_config

    ctx.ensure_object(dict)
    try:
        config = read_config(config_path)
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    ctx.obj["config"] = config
    ctx.obj["quiet"] = quiet

    if verbose:
        verbose_token = set_verbose_logging(True)
        ctx.call_on_close(lambda: reset_verbose_logging(verbose_token))
    # MAGE_JOBS beats the config file; --jobs beats both
    if jobs is None and not os.environ.get("MAGE_JOBS") and config.get("jobs") is not None:
        try:
            jobs = int(config["jobs"])
        except (TypeError, ValueError) as exc:
            raise click.ClickException(f"Invalid jobs value in config: {exc}") from exc
    if jobs is not None:
        jobs_token = set_jobs(jobs)
        ctx.call_on_close(lambda: reset_jobs(jobs_token))


@cli.command("init")
@click.argument("directory", type=click.Path(file_okay=False), default=".")
@click.option("--overwrite", is_flag=True, help="Replace an existing magefile.toml.")
def init_cmd(directory, overwrite):
    """
    Write an example magefile.toml into DIRECTORY.
    """
    from . import init

    try:
        path = init(directory, overwrite=overwrite)
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    click.echo(f"Created {path}")


@cli.command("link")
@click.argument("origin")
@click.pass_context
def link_cmd(ctx, origin):
    """
    Symlink every entry of ORIGIN's magefile.

    ORIGIN is a local directory, a GitHub clone URL, or an <owner>/<repo>
    shorthand. Repositories are cloned into the configured default location
    unless it already exists.
    """
    from . import link
    from .utils import default_location

    try:
        outcomes = link(
            origin,
            destination=default_location(ctx.obj["config"]),
            progress=_progress(ctx),
        )
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    _report(outcomes, show_not_installed=True)


@cli.command("clean")
@click.argument("directory")
@click.pass_context
def clean_cmd(ctx, directory):
    """
    Remove the symlinks listed in DIRECTORY's magefile.

    Targets that are not symlinks are left in place.
    """
    from . import clean

    click.echo(f"Cleaning dotfiles from: {directory}")
    try:
        outcomes = clean(directory, progress=_progress(ctx))
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    _report(outcomes)


@cli.command("clone")
@click.argument("repository")
@click.argument("directory")
def clone_cmd(repository, directory):
    """
    Clone REPOSITORY into DIRECTORY without linking anything.
    """
    from . import clone

    try:
        path = clone(repository, directory)
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    click.echo(f"Cloned {repository} into {path}")


@cli.command("sync")
@click.argument("directory", required=False)
@click.pass_context
def sync_cmd(ctx, directory):
    """
    Pull DIRECTORY (default: the clone location), then clean and relink it.
    """
    from . import sync
    from .utils import default_location

    try:
        target = directory or default_location(ctx.obj["config"])
        cleaned, linked = sync(target, progress=_progress(ctx))
    except (OSError, ValueError, RuntimeError) as exc:
        raise _fatal(exc) from exc
    _report(cleaned)
    _report(linked, show_not_installed=True)


def main():
    cli()


if __name__ == "__main__":
    main()
