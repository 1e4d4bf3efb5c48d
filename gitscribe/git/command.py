"""Staged diff collection, commits and hook management.

Contains:
- GitCommand: Git operations configured with diff context, exclusions and amend mode
- DEFAULT_EXCLUDE_LIST: Files always left out of the diff sent to the LLM
- HOOK_NAME / HOOK_SCRIPT: The prepare-commit-msg hook installed by gitscribe
"""

import os
import stat
from pathlib import Path
from typing import Optional

from gitscribe.git.exceptions import HookError, NoStagedChangesError
from gitscribe.git.runner import run_git_command


# Lock files are generated and only inflate the prompt.
# yarn.lock, Cargo.lock, Gemfile.lock, Pipfile.lock, etc. match *.lock
DEFAULT_EXCLUDE_LIST = [
    "package-lock.json",
    "pnpm-lock.yaml",
    "*.lock",
    "go.sum",
]

HOOK_NAME = "prepare-commit-msg"

HOOK_SCRIPT = """#!/bin/sh
# Installed by gitscribe. Remove with: gitscribe hook uninstall
# Only generate a message when git has not been given one already.
if [ -z "$2" ]; then
  gitscribe commit --file "$1" --preview --no-confirm
fi
"""


class GitCommand:
    """Git operations used to summarize and commit staged changes."""

    def __init__(
        self,
        diff_unified: int = 3,
        exclude_list: Optional[list[str]] = None,
        amend: bool = False,
    ):
        """Initialize the command wrapper.

        Args:
            diff_unified: Lines of context in generated diffs.
            exclude_list: Extra file patterns to leave out of the diff.
            amend: Compare HEAD^ with HEAD instead of the index.
        """
        self.diff_unified = diff_unified
        self.exclude_list = DEFAULT_EXCLUDE_LIST + list(exclude_list or [])
        self.amend = amend

    def _exclude_pathspecs(self) -> list[str]:
        return [f":(exclude,top){pattern}" for pattern in self.exclude_list]

    def _target(self) -> list[str]:
        if self.amend:
            return ["HEAD^", "HEAD"]
        return ["--staged"]

    def diff_names(self) -> list[str]:
        """List the changed file names, honoring the exclude list.

        Returns:
            List of file paths relative to the repository root.
        """
        output = run_git_command(
            ["diff", "--name-only"] + self._target() + self._exclude_pathspecs()
        )
        return [line for line in output.splitlines() if line.strip()]

    def diff_files(self) -> str:
        """Get the diff of the changed files.

        Returns:
            The diff text.

        Raises:
            NoStagedChangesError: If nothing (outside the exclude list) is staged.
            GitError: If git fails.
        """
        if not self.diff_names():
            raise NoStagedChangesError(
                "No staged changes found. Stage your changes first with: git add <files>"
            )

        return run_git_command(
            [
                "diff",
                "--ignore-all-space",
                "--diff-algorithm=minimal",
                f"--unified={self.diff_unified}",
            ]
            + self._target()
            + self._exclude_pathspecs(),
            strip=False,
        )

    def commit(self, message: str) -> str:
        """Record the staged changes with the given message.

        The commit skips pre-commit hooks and adds a Signed-off-by trailer.

        Args:
            message: The commit message.

        Returns:
            Output of git commit.
        """
        args = ["commit", "--no-verify", "--signoff", f"--message={message}"]
        if self.amend:
            args.append("--amend")
        return run_git_command(args)

    def hooks_dir(self) -> Path:
        """Get the hooks directory of the current repository."""
        return Path(run_git_command(["rev-parse", "--git-path", "hooks"]))

    def install_hook(self) -> Path:
        """Install the prepare-commit-msg hook.

        Returns:
            Path to the installed hook file.

        Raises:
            HookError: If a prepare-commit-msg hook already exists.
        """
        hooks_dir = self.hooks_dir()
        target = hooks_dir / HOOK_NAME
        if target.exists():
            raise HookError(f"Hook file {HOOK_NAME} already exists: {target}")

        hooks_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(HOOK_SCRIPT)
        os.chmod(target, stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH)
        return target

    def uninstall_hook(self) -> Path:
        """Remove the prepare-commit-msg hook.

        Returns:
            Path of the removed hook file.

        Raises:
            HookError: If no prepare-commit-msg hook is installed.
        """
        target = self.hooks_dir() / HOOK_NAME
        if not target.is_file():
            raise HookError(f"Hook file {HOOK_NAME} does not exist: {target}")
        target.unlink()
        return target
