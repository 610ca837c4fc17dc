"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from rich.console import Console

from .config import configure_logging
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

err_console = Console(stderr=True)


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Automatic --debug flag enabling debug logging on stderr
    - Dict results printed as JSON on stdout
    - Consistent error handling: message on stderr, JSON error object
      on stdout with --json, exit code from the exception
    """
    @click.option('--debug', is_flag=True, help='Enable debug logging')
    @wraps(func)
    def wrapper(*args, **kwargs):
        debug = kwargs.pop('debug', False)
        json_output = kwargs.get('json_output', False)
        configure_logging(debug)

        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict):
                print(json.dumps(result, ensure_ascii=False), flush=True)
            elif result is not None:
                print(result, flush=True)
            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            err_console.print("[red]Interrupted by user[/red]")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            if json_output:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except (OSError, ValueError) as e:
            err_console.print(f"[red]Command failed:[/red] {e}")
            sys.exit(get_exit_code_for_exception(e))

    return wrapper
