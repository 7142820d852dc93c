"""Main CLI application for Ergobox."""

import logging
import sys
from importlib.metadata import distribution
from typing import Annotated

import typer

from ergobox.cli.decorators.error_handling import (
    handle_errors,
    print_stack_trace_if_verbose,
)
from ergobox.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "setup_logging"]


__version__ = distribution("ergobox").version

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        verbose: int = 0,
        log_file: str | None = None,
        config_file: str | None = None,
    ):
        """Initialize AppContext.

        Args:
            verbose: Verbosity level
            log_file: Path to log file
            config_file: Path to configuration file
        """
        from ergobox.config.user_config import create_user_config

        self.verbose = verbose
        self.log_file = log_file
        self.config_file = config_file
        self.user_config = create_user_config(cli_config_path=config_file)


app = typer.Typer(
    name="ergobox",
    help=f"""Ergobox keyboard layout compiler v{__version__}

Turns an ergogen-style layout description into a key matrix and keeps a
multi-layer keymap that exports to both ZMK and QMK sources:

Layout YAML → Keys + Matrix → Project (.kb.json) → ZMK / QMK sources

Common workflows:
  • Inspect a layout:  ergobox resolve layout.yaml
  • Start a project:   ergobox project init layout.yaml -o split.kb.json
  • Assign keys:       ergobox bind key split.kb.json main_inner_home A --mod lctrl
  • Export sources:    ergobox export split.kb.json build/ --target all""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging (equivalent to -vv)"),
    ] = False,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Log to file (JSON lines)")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Ergobox keyboard layout compiler."""
    if version:
        print(f"Ergobox v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    app_context = _create_app_context(verbose, log_file, config_file)
    ctx.obj = app_context

    log_level = logging.WARNING
    if debug:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    elif verbose >= 2:
        log_level = logging.DEBUG
    elif not verbose and log_file is None:
        # Without explicit CLI flags the config file decides
        log_level = app_context.user_config.get_log_level_int()

    setup_logging(level=log_level, log_file=log_file)


@handle_errors
def _create_app_context(
    verbose: int, log_file: str | None, config_file: str | None
) -> AppContext:
    return AppContext(verbose=verbose, log_file=log_file, config_file=config_file)


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0
    try:
        app()
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
