"""
limebuild
A minimalist incremental-build helper for build scripts written in Python
"""

__version__ = "0.1.0"

from .command import OutcomeKind, ProcessOutcome, execute, invoke, tokenize
from .enumeration import enum_files, enum_files_recursive
from .exceptions import (
    InternalInvariantViolation,
    LimeBuildError,
    UserError,
)
from .fs import create_path, ensure_directory_path, exists, get_modification_time, is_directory
from .main import build_main, run_build
from .paths import BuildPath, as_path, parse, pwd
from .staleness import call_if_out_of_date, call_if_self_rebuild_necessary, is_out_of_date
from .utils import bug, cmd_label, error, info, warn

__all__ = [
    "__version__",
    "BuildPath", "as_path", "parse", "pwd",
    "exists", "is_directory", "get_modification_time", "ensure_directory_path", "create_path",
    "enum_files", "enum_files_recursive",
    "OutcomeKind", "ProcessOutcome", "tokenize", "invoke", "execute",
    "is_out_of_date", "call_if_out_of_date", "call_if_self_rebuild_necessary",
    "info", "warn", "error", "bug", "cmd_label",
    "run_build", "build_main",
    "LimeBuildError", "UserError", "InternalInvariantViolation",
]
