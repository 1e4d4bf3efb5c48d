"""Git command runner and repository utilities.

Contains:
- run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
- get_git_dir: Get the .git directory of the current repository
"""

import logging
import subprocess
from pathlib import Path

from gitscribe.git.exceptions import GitError

logger = logging.getLogger(__name__)


def run_git_command(args: list[str], strip: bool = True) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("Running git %s", args[0] if args else "")
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {args[0]}\n{e.stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = run_git_command(["rev-parse", "--show-toplevel"])
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")


def get_git_dir() -> Path:
    """Get the git directory of the current working tree.

    Returns:
        Path to the .git directory (absolute).

    Raises:
        GitError: If not in a git repository.
    """
    try:
        git_dir = run_git_command(["rev-parse", "--absolute-git-dir"])
        return Path(git_dir)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
