"""
Standard exit codes and exceptions for gitversioning.

Following Unix/POSIX conventions for command-line tools. The exception
classes double as the library's error hierarchy: everything the engine
raises is a CommandError, so the CLI can map it to an exit code.
"""
from typing import Optional, Sequence

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file or filter pattern error
GIT_ERROR = 72           # A git command failed or path is not a repository
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'ValueError': CONFIG_ERROR,
    'ConfigError': CONFIG_ERROR,
    'TagFilterError': CONFIG_ERROR,
    'VersionParseError': CONFIG_ERROR,
    'GitCommandError': GIT_ERROR,
    'NotAGitRepositoryError': GIT_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    CommandError instances carry their own code; anything else is
    looked up by class name.
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class VersioningError(CommandError):
    """Raised by VersionEvaluator.version() when no version can be derived.

    The root cause is chained as ``__cause__``.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message, exit_code)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class TagFilterError(ConfigError):
    """Raised when a tag filter pattern is malformed."""


class VersionParseError(ConfigError):
    """Raised when a version extracted from a tag is not a semantic version.

    This means the tag filter pattern does not fit the tags in the
    repository, which the caller has to fix.
    """
    def __init__(self, tag: str, version: str):
        super().__init__(f"Failed to parse version: {version} (from tag {tag})")
        self.tag = tag
        self.version = version


class GitCommandError(CommandError):
    """Raised when a git command exits with a non-zero status."""
    def __init__(self, command: Sequence[str], returncode: int,
                 stderr: Optional[str] = None):
        cmd = ' '.join(command)
        message = f"git command failed ({returncode}): {cmd}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message, GIT_ERROR)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class NotAGitRepositoryError(CommandError):
    """Raised when a path is not inside a git work tree."""
    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}", GIT_ERROR)
        self.path = path
