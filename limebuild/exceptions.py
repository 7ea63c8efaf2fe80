"""Holds exceptions raised by limebuild"""


class LimeBuildError(RuntimeError):
    """Base exception for every limebuild failure"""


class UserError(LimeBuildError):
    """Raised when a build script asks for something that cannot be done"""


class InternalInvariantViolation(LimeBuildError):
    """Raised when limebuild reaches a state its own preconditions forbid"""


class ConfigurationError(UserError):
    """Raised when build options cannot be loaded or fail validation"""


class PathSyntaxError(UserError):
    """Raised when a raw string cannot be parsed into a path"""


class PathAbsoluteNotAllowedError(UserError):
    """Raised when an absolute path is supplied where a relative one is required"""


class PathHasNoParentError(UserError):
    """Raised when the parent folder of a too-short path is requested"""


class PathHasNoFilenameError(UserError):
    """Raised when the filename of the root path is requested"""


class PathHierarchyInvalidError(UserError):
    """Raised when a path is not located beneath the requested base"""


class SymlinkCycleError(UserError):
    """Raised when symbolic link resolution exceeds the configured depth"""


class PathNotADirectoryError(UserError):
    """Raised when a path that must be a directory is something else"""


class FilesystemAccessError(UserError):
    """Raised when the host refuses a filesystem operation"""


class MissingDependencyError(UserError):
    """Raised when a declared dependency does not exist"""


class UnterminatedQuoteError(UserError):
    """Raised when a command line has an odd number of double quotes"""


class EmptyCommandError(UserError):
    """Raised when a command line contains no program name"""


class CommandFailedError(UserError):
    """Raised when an executed command does not finish successfully"""

    def __init__(self, message: str, outcome=None):
        super().__init__(message)
        self.outcome = outcome
