"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NoStagedChangesError: Raised when there are no staged changes
- HookError: Raised when the prepare-commit-msg hook cannot be changed
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class HookError(GitError):
    """Raised when installing or removing the git hook fails."""

    pass
