"""CLI interface for tplsync - StackGuardian template pull/push."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, NoReturn, Optional

import click
from rich.console import Console

from . import __version__
from .config import DEFAULT_BASE_PATH, SyncConfig
from .errors import LocalIOError, TemplateSyncError
from .remote import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .sync import TemplateSync
from .utils import configure_logging, console, err_console, mask_secret


_SYNC_OPTIONS = [
    click.option("--token", envvar="SG_TOKEN", default=None, help="API token (SG_TOKEN)."),
    click.option(
        "--template-id",
        envvar="SG_TEMPLATE_ID",
        default=None,
        help="Template id, /<org>/<name>[:<rev>] or <name>[:<rev>] with --org (SG_TEMPLATE_ID).",
    ),
    click.option(
        "--org",
        envvar="SG_ORG_ID",
        default=None,
        help="Organization; switches to org + name addressing (SG_ORG_ID).",
    ),
    click.option(
        "--base-url",
        envvar="SG_BASE_URL",
        default=DEFAULT_BASE_URL,
        show_default=True,
        help="Template service URL (SG_BASE_URL).",
    ),
    click.option(
        "--base-path",
        envvar="SG_BASE_PATH",
        default=DEFAULT_BASE_PATH,
        show_default=True,
        type=click.Path(path_type=Path, file_okay=False),
        help="Directory holding the local template files (SG_BASE_PATH).",
    ),
    click.option(
        "--yaml",
        "use_yaml",
        envvar="SG_USE_YAML",
        is_flag=True,
        default=False,
        help="Read/write schema.yaml and ui.yaml instead of JSON files.",
    ),
    click.option(
        "--timeout",
        envvar="SG_TIMEOUT",
        type=float,
        default=DEFAULT_TIMEOUT,
        show_default=True,
        help="HTTP request timeout in seconds (SG_TIMEOUT).",
    ),
    click.option(
        "--debug", envvar="DEBUG", is_flag=True, default=False, help="Verbose debug output."
    ),
]


def sync_options(func: Callable) -> Callable:
    """Attach the options shared by every command, in declaration order."""
    for option in reversed(_SYNC_OPTIONS):
        func = option(func)
    return func


def _build_sync(
    token: Optional[str],
    template_id: Optional[str],
    org: Optional[str],
    base_url: str,
    base_path: Path,
    use_yaml: bool,
    timeout: float,
    debug: bool,
    progress: Optional[Console] = None,
) -> TemplateSync:
    configure_logging(debug)
    config = SyncConfig.build(
        token=token,
        template_id=template_id,
        org=org,
        base_url=base_url,
        base_path=base_path,
        use_yaml=use_yaml,
        timeout=timeout,
        debug=debug,
    )
    if debug:
        err_console.print(
            f"Config: token={mask_secret(config.token)} template={config.ref} "
            f"base_url={config.base_url} base_path={config.base_path} "
            f"mode={config.mode.value} timeout={config.timeout}",
            markup=False,
            highlight=False,
        )
    return TemplateSync(config, progress=progress)


def _fail(exc: TemplateSyncError) -> NoReturn:
    err_console.print(f"[ERROR] {exc}", style="bold red", markup=False, highlight=False)
    raise SystemExit(1)


def _write_github_output(lines: dict[str, str]) -> None:
    gh_out = os.getenv("GITHUB_OUTPUT")
    if not gh_out:
        return
    try:
        with open(gh_out, "a", encoding="utf-8") as f:
            for key, value in lines.items():
                f.write(f"{key}={value}\n")
    except OSError as exc:
        _fail(LocalIOError(f"Cannot write GitHub output {gh_out}: {exc}"))


@click.group()
@click.version_option(__version__, prog_name="tplsync")
def cli() -> None:
    """StackGuardian template sync."""
    pass


@cli.command("pull")
@sync_options
@click.option("--github-output", is_flag=True, help="Write GitHub Actions outputs")
def pull_cmd(github_output: bool, **options) -> None:
    """
    Fetch a template revision into the local files.

    Writes documentation.md, schema.<ext> and ui.<ext> under the base path.
    Fields missing from the remote revision leave the local file untouched.
    """
    try:
        result = _build_sync(**options).pull()
    except TemplateSyncError as exc:
        _fail(exc)
    if github_output:
        _write_github_output(
            {
                "template_id": result.template_id,
                "changed": "true" if result.changed else "false",
            }
        )


@cli.command("push")
@sync_options
def push_cmd(**options) -> None:
    """
    Patch the latest unpublished template revision with the local files.

    Refuses to touch a published revision.
    """
    try:
        _build_sync(**options).push()
    except TemplateSyncError as exc:
        _fail(exc)


@cli.command("resolve")
@sync_options
@click.option("--github-output", is_flag=True, help="Write GitHub Actions outputs")
def resolve_cmd(github_output: bool, **options) -> None:
    """Print the pinned template id a pull or push would use.

    Only the id goes to stdout; progress messages go to stderr.
    """
    try:
        ref = _build_sync(progress=err_console, **options).resolve()
    except TemplateSyncError as exc:
        _fail(exc)
    console.print(ref.template_id, markup=False, highlight=False)
    if github_output:
        _write_github_output({"template_id": ref.template_id})
