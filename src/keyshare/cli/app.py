"""CLI application entry point and command routing for keyshare.

This module is the **sole error boundary** for the entire application.
It catches :class:`~keyshare.exceptions.KeyshareError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* The invocation context (home directory, prompt string) is resolved once
  here and passed down; the process never changes directory.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import getpass
import socket
import sys
from pathlib import Path
from typing import NoReturn

from keyshare.cli import exit_codes
from keyshare.cli.console import configure_logging, console
from keyshare.config import Settings
from keyshare.core.models import InvocationConfig, InvocationContext
from keyshare.core.naming import derive_filenames
from keyshare.exceptions import KeyshareError, ToolFailedError
from keyshare.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _UsageParser(argparse.ArgumentParser):
    """Parser that reports usage errors on stdout with the usage exit code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stdout)
        self.exit(exit_codes.USAGE_ERROR, f"{self.prog}: error: {message}\n")


def _destination(value: str) -> str:
    """Validate an scp destination of the form ``[user@]host:dir``."""
    host, sep, _ = value.partition(":")
    if not sep or not host or host.endswith("@"):
        raise argparse.ArgumentTypeError(
            f"invalid destination {value!r}; expected user@host:dir",
        )
    return value


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``keyshare [options] <key>`` — build, sign and optionally upload
    * ``keyshare --doctor``        — environment diagnostics
    * ``keyshare --version``
    """
    parser = _UsageParser(
        prog="keyshare",
        usage="%(prog)s [options] <keyIdentifier>",
        description="Publish a signed, verifiable copy of your public key.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "key_id",
        nargs="?",
        default=None,
        metavar="keyIdentifier",
        help="GnuPG key ID, fingerprint or user ID to publish.",
    )
    parser.add_argument(
        "-u",
        "--upload",
        dest="upload",
        type=_destination,
        metavar="user@host:dir",
        help="Copy the key and its signature here with scp.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="outfile",
        metavar="outfile",
        help="Output filename (default: <keyIdentifier>.asc).",
    )
    parser.add_argument(
        "-f",
        "--fingerprint",
        dest="otr_fingerprint",
        metavar="otrFingerprint",
        help="OTR fingerprint to include without asking.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every step and external command.",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check that gpg and scp are available, then exit.",
    )
    return parser


def build_config(args: argparse.Namespace) -> InvocationConfig:
    """Turn parsed arguments into an :class:`InvocationConfig`."""
    outfile, sigfile = derive_filenames(args.key_id, args.outfile)
    return InvocationConfig(
        key_id=args.key_id,
        outfile=outfile,
        sigfile=sigfile,
        otr_fingerprint=args.otr_fingerprint or None,
        upload_destination=args.upload,
    )


def build_context(
    config: InvocationConfig,
    settings: Settings,
    *,
    home: Path | None = None,
) -> InvocationContext:
    """Resolve the home directory and prompt string once."""
    return InvocationContext(
        config=config,
        home=home if home is not None else Path.home(),
        prompt=f"{getpass.getuser()}@{socket.gethostname()}:~$",
        tool_url=settings.tool_url,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_publish(context: InvocationContext, settings: Settings) -> int:
    """Run the full preamble → assemble → sign → publish workflow.

    Flow:
    1. Check that gpg (and scp, when uploading) are installed.
    2. Instantiate infra adapters + the core workflow.
    3. Build the preamble interactively, or reuse a pending one.
    4. Assemble, sign and optionally upload.
    """
    from keyshare.cli.prompts import QuestionaryPrompter
    from keyshare.core.models import PublishState
    from keyshare.core.state import detect_state
    from keyshare.core.workflow import PublishWorkflow
    from keyshare.infra.artifacts import LocalArtifactStore
    from keyshare.infra.gpg import GpgKeyService, GpgSigningService
    from keyshare.infra.scp import ScpRemoteCopy
    from keyshare.infra.tool_detector import require_tool

    config = context.config
    require_tool(settings.gpg)
    if config.upload_destination:
        require_tool(settings.scp)

    store = LocalArtifactStore()
    paths = context.paths
    if detect_state(paths, store) is PublishState.PREAMBLE_COMPLETE:
        console.print(
            f"[yellow]Resuming:[/yellow] reusing existing preamble {paths.pending.name}"
        )

    workflow = PublishWorkflow(
        context,
        store=store,
        key_service=GpgKeyService(settings.gpg),
        signing_service=GpgSigningService(settings.gpg),
        remote=ScpRemoteCopy(settings.scp),
        prompter=QuestionaryPrompter(),
    )
    state = workflow.run()

    console.print(f"\n[bold green]Key written:[/bold green]  {paths.output}")
    console.print(f"[bold green]Signature:[/bold green]    {paths.signature}")
    if state is PublishState.PUBLISHED:
        console.print(
            f"[bold green]Uploaded to:[/bold green]  {config.upload_destination}"
        )
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from keyshare.cli.doctor import run_doctor

    return run_doctor(settings)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the keyshare CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = Settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.doctor:
        return _handle_doctor(settings)

    if not args.key_id:
        parser.print_usage(sys.stdout)
        return exit_codes.USAGE_ERROR

    context = build_context(build_config(args), settings)
    return _handle_publish(context, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.  External tool
    failures exit with the tool's own status.
    """
    try:
        code = main()
        sys.exit(code)
    except KeyshareError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        if isinstance(exc, ToolFailedError):
            sys.exit(exc.exit_status)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
