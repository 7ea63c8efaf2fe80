"""
Process boundary for build scripts

Library operations raise exceptions; ``run_build`` turns them into a single
diagnostic line and a nonzero exit status, the way a build script is
expected to halt at its first failure.
"""

import functools
import sys
from typing import Any, Callable, TypeVar

from . import utils
from .exceptions import ConfigurationError, InternalInvariantViolation, UserError

F = TypeVar("F", bound=Callable[..., Any])


def run_build(build: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Run a build function, terminating the process on the first failure

    Args:
        build: Build entry point
        *args: Positional arguments for ``build``
        **kwargs: Keyword arguments for ``build``

    Returns:
        Whatever ``build`` returns
    """
    try:
        return build(*args, **kwargs)
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        sys.exit(130)
    except ConfigurationError as e:
        # The logger itself depends on configuration, so stay off it here
        print(f"[ERROR]: {e}", file=sys.stderr)
        sys.exit(1)
    except InternalInvariantViolation as e:
        utils.bug(str(e))
    except UserError as e:
        utils.error(str(e))


def build_main(build: F) -> F:
    """Decorator form of run_build for a script's main function"""

    @functools.wraps(build)
    def wrapper(*args, **kwargs):
        return run_build(build, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


__all__ = ["run_build", "build_main"]
