"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any, NoReturn

import typer

from ergobox.cli.helpers.output import print_error_message
from ergobox.core.errors import (
    ConfigError,
    ExportError,
    LayoutParseError,
    ProjectFileError,
)
from ergobox.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Known errors are logged as structured events, reported to the user and
    turned into exit status 1.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except LayoutParseError as e:
            logger.error("layout_parse_error", error=str(e))
            _fail(e)
        except ProjectFileError as e:
            logger.error("project_file_error", error=str(e), context=e.context)
            _fail(e)
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            _fail(e)
        except ExportError as e:
            logger.error("export_error", error=str(e))
            _fail(e)
        except FileNotFoundError as e:
            logger.error("file_not_found", error=str(e))
            _fail(e)
        except ValueError as e:
            logger.error("invalid_value", error=str(e))
            _fail(e)
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            _fail(e)

    return wrapper


def _fail(error: Exception) -> NoReturn:
    print_error_message(str(error))
    print_stack_trace_if_verbose()
    raise typer.Exit(1) from error


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-v", "-vv", "--verbose", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
