"""Git plumbing for gitscribe.

This package wraps the git commands gitscribe needs:
- exceptions: GitError, NoStagedChangesError, HookError
- runner: run_git_command, get_repo_root, get_git_dir
- command: GitCommand, DEFAULT_EXCLUDE_LIST, HOOK_NAME
"""

# Exceptions
from gitscribe.git.exceptions import (
    GitError,
    HookError,
    NoStagedChangesError,
)

# Runner utilities
from gitscribe.git.runner import (
    get_git_dir,
    get_repo_root,
    run_git_command,
)

# Diff, commit and hook operations
from gitscribe.git.command import (
    DEFAULT_EXCLUDE_LIST,
    HOOK_NAME,
    HOOK_SCRIPT,
    GitCommand,
)


__all__ = [
    # Exceptions
    "GitError",
    "HookError",
    "NoStagedChangesError",
    # Runner
    "run_git_command",
    "get_repo_root",
    "get_git_dir",
    # Command
    "GitCommand",
    "DEFAULT_EXCLUDE_LIST",
    "HOOK_NAME",
    "HOOK_SCRIPT",
]
