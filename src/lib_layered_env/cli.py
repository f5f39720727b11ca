"""CLI adapter for ``lib_layered_env`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect which ``.env`` files a directory resolves to, what a
single file parses into, and what the merged environment looks like, without
writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – distribution metadata.
* :func:`cli_files` – resolved ``.env`` files of a directory.
* :func:`cli_parse` – parse one ``.env`` file.
* :func:`cli_read` – merged raw environment, optionally with provenance.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it calls the composition root and the public adapters and
prints JSON. Values are printed as-is, so pipe the output with care when
files hold secrets.
"""

from __future__ import annotations

import asyncio
import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.dotenv.default import DefaultDotEnvLoader
from .adapters.dotenv.parser import parse_env
from .adapters.sources import from_files, from_json, from_process_env
from .application.ports import SourceAdapter
from .core import read_env_raw
from .domain.errors import UsageError

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DIST_NAME: Final[str] = "lib_layered_env"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered .env loader and environment inspector",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DIST_NAME,
    message="lib_layered_env version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DIST_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DIST_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DIST_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("files", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument(
    "directory",
    type=click.Path(path_type=Path, exists=True, file_okay=False, dir_okay=True, readable=True),
)
@click.option("--mode", default=None, help="Mode selecting .env.<mode> variants (defaults to APP_ENV/NODE_ENV)")
@click.option("--file", "files", multiple=True, help="Explicit .env file name (repeatable, overrides --mode)")
@click.option("--all/--existing", "show_all", default=False, help="List every candidate, not only existing files")
def cli_files(directory: Path, mode: Optional[str], files: Sequence[str], show_all: bool) -> None:
    """Print the .env files of DIRECTORY in priority order (highest first) as JSON.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> result = CliRunner().invoke(cli, ["files", tmp.name, "--mode", "test", "--all"])
    >>> [Path(p).name for p in json.loads(result.output)]
    ['.env.test.local', '.env.test', '.env']
    >>> tmp.cleanup()
    """

    loader = DefaultDotEnvLoader(directory, mode=mode, files=list(files) or None)
    if show_all:
        paths = [str(loader.directory / name) for name in loader.file_names()]
    else:
        paths = [item.path for item in loader.load()]
    click.echo(json.dumps(paths, indent=2))


@cli.command("parse", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument(
    "path",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
)
@click.option(
    "--ignore-process-env/--use-process-env",
    default=False,
    help="Do not resolve $NAME references against the process environment",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_parse(path: Path, ignore_process_env: bool, indent: Optional[int]) -> None:
    """Parse a single .env file and print the resulting mapping as JSON."""

    parsed = parse_env(path.read_text(encoding="utf-8"), ignore_process_env=ignore_process_env)
    click.echo(json.dumps(parsed, indent=indent, separators=(",", ":")))


@cli.command("read", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--directory",
    type=click.Path(path_type=Path, exists=True, file_okay=False, dir_okay=True, readable=True),
    default=None,
    help="Directory whose .env files are loaded",
)
@click.option("--mode", default=None, help="Mode selecting .env.<mode> variants (defaults to APP_ENV/NODE_ENV)")
@click.option("--file", "files", multiple=True, help="Explicit .env file name (repeatable, requires --directory)")
@click.option(
    "--json",
    "json_files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Flat JSON file layered after the .env files (repeatable, later wins)",
)
@click.option(
    "--ignore-process-env/--use-process-env",
    default=False,
    help="Leave the process environment out of the merge and of interpolation",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.option(
    "--provenance/--no-provenance",
    default=False,
    help="Include the winning source of every key in the output",
)
def cli_read(
    directory: Optional[Path],
    mode: Optional[str],
    files: Sequence[str],
    json_files: Sequence[Path],
    ignore_process_env: bool,
    indent: Optional[int],
    provenance: bool,
) -> None:
    """Merge the configured sources and print the raw environment as JSON.

    Without ``--json`` the directory's .env files are merged and the process
    environment is overlaid on top. With ``--json`` an explicit source list is
    built instead: the .env files (when ``--directory`` is given), each JSON
    file in order, then the process environment.
    """

    file_names = list(files) or None
    if file_names is not None and directory is None:
        raise UsageError("The '--file' option requires --directory.")
    if json_files:
        sources = _build_sources(directory, mode, file_names, json_files, ignore_process_env)
        data, meta = asyncio.run(read_env_raw(sources=sources))
    else:
        data, meta = asyncio.run(
            read_env_raw(
                directory=directory,
                mode=mode,
                files=file_names,
                ignore_process_env=ignore_process_env,
            )
        )
    payload: object = {"env": data, "provenance": meta} if provenance else data
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":")))


def _build_sources(
    directory: Optional[Path],
    mode: Optional[str],
    files: Optional[list[str]],
    json_files: Sequence[Path],
    ignore_process_env: bool,
) -> list[SourceAdapter]:
    """Return the explicit adapter list used by ``read --json``."""

    sources: list[SourceAdapter] = []
    if directory is not None:
        sources.append(from_files(directory, mode=mode, files=files, ignore_process_env=ignore_process_env))
    sources.extend(from_json(path) for path in json_files)
    if not ignore_process_env:
        sources.append(from_process_env())
    return sources


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DIST_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
