"""
Modification-time based staleness decisions

A target is stale when it does not exist, or when any of its dependencies
was modified after it. Rebuild actions are plain zero-argument callables and
run at most once per decision, before the decision call returns.
"""

import os
import sys
from typing import Callable, Iterable, List, Optional, Union

from . import utils
from .exceptions import MissingDependencyError
from .fs import exists, get_modification_time
from .paths import BuildPath, PathInput, as_path

RebuildAction = Callable[[], object]
Dependencies = Union[PathInput, Iterable[PathInput]]


def _dependency_list(dependencies: Dependencies) -> List[BuildPath]:
    if isinstance(dependencies, (str, BuildPath, os.PathLike)):
        return [as_path(dependencies)]
    return [as_path(dependency) for dependency in dependencies]


def is_out_of_date(target: PathInput, dependencies: Dependencies) -> bool:
    """
    Decide whether a target needs rebuilding

    Args:
        target: Output produced by the rule
        dependencies: One path or an iterable of paths the output is built from

    Returns:
        False for an empty dependency list; True when the target is missing
        or any dependency is strictly newer than it

    Raises:
        MissingDependencyError: The target exists but a dependency does not
    """
    target = as_path(target)
    deps = _dependency_list(dependencies)
    if not deps:
        return False

    if not exists(target):
        return True

    for dep in deps:
        if not exists(dep):
            raise MissingDependencyError(f"dependency '{dep}' of '{target}' does not exist")

    target_time = get_modification_time(target)
    return any(get_modification_time(dep) > target_time for dep in deps)


def call_if_out_of_date(target: PathInput, dependencies: Dependencies,
                        rebuild_action: RebuildAction) -> bool:
    """Run rebuild_action once if target is out of date; return whether it ran"""
    if not is_out_of_date(target, dependencies):
        return False

    utils.info(f'"{target}" is out-of-date, calling remedial function...')
    rebuild_action()
    utils.info(f'"{target}" remedied')
    return True


def _running_image() -> BuildPath:
    if getattr(sys, "frozen", False):
        return as_path(sys.executable)
    return as_path(sys.argv[0])


def call_if_self_rebuild_necessary(source_path: PathInput, rebuild_action: RebuildAction,
                                   executable: Optional[PathInput] = None) -> bool:
    """
    Run rebuild_action once if the build script's source is newer than the
    running executable image

    The running process is not replaced; a rebuild action that wants the new
    binary to take over has to re-execute it itself.

    Args:
        source_path: Source the running executable was built from
        rebuild_action: Callable that rebuilds the executable
        executable: Image to compare against. Defaults to sys.executable for a
            frozen build, otherwise to the script being run (sys.argv[0])

    Returns:
        True if the action ran
    """
    image = as_path(executable) if executable is not None else _running_image()
    source = as_path(source_path)
    if not exists(source):
        raise MissingDependencyError(f"build script source '{source}' does not exist")
    if not exists(image):
        raise MissingDependencyError(f"running executable '{image}' does not exist")

    if get_modification_time(image) >= get_modification_time(source):
        return False

    utils.info("self rebuild necessary, calling self rebuild function...")
    rebuild_action()
    utils.info("self rebuild finished")
    return True


__all__ = ["RebuildAction", "is_out_of_date", "call_if_out_of_date", "call_if_self_rebuild_necessary"]
