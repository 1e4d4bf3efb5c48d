"""Isolated process execution for API key helpers.

An executor runs one helper command in its own process tree so that a
timeout can stop the shell and everything it started. The platform
implementations live in posix_executor.py and windows_executor.py; callers
only use get_executor().
"""

import logging
import subprocess
import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

from gitscribe.keyhelper.context import HelperContext
from gitscribe.keyhelper.exceptions import HelperExecutionError, HelperTimeoutError

logger = logging.getLogger(__name__)

# Maximum time to wait for the API key helper script to execute
HELPER_TIMEOUT = 10.0

# Time between the graceful and the forceful termination of a helper
TERMINATE_GRACE_PERIOD = 2.0


@dataclass
class ExecutionResult:
    """Outcome of a helper process that exited on its own."""

    stdout: str
    returncode: int


class IsolatedExecutor(ABC):
    """Runs a shell command in an isolated process group or job.

    An instance runs a single command; get_executor() returns a new one
    for every call.
    """

    grace_period: float = TERMINATE_GRACE_PERIOD

    @abstractmethod
    def spawn(self, command: str) -> subprocess.Popen:
        """Start the command through the system shell.

        stdout and stderr must both be pipes.

        Raises:
            HelperSpawnError: If the process cannot be started or isolated.
        """
        pass

    @abstractmethod
    def terminate(self, process: subprocess.Popen, exited: threading.Event) -> None:
        """Stop the process and all of its descendants after a timeout.

        Args:
            process: The running helper shell.
            exited: Set once the helper's output pipes are closed and the
                shell has been reaped.
        """
        pass

    def release(self) -> None:
        """Free platform resources held for the process."""
        pass

    def run(self, command: str, ctx: HelperContext, timeout: float) -> ExecutionResult:
        """Run the command until it exits, the timeout passes or ctx is cancelled.

        Args:
            command: The helper shell command.
            ctx: Cancellation carrier for the call.
            timeout: Seconds to wait before terminating the process tree.

        Returns:
            The captured stdout and exit status.

        Raises:
            HelperSpawnError: If the process cannot be started.
            HelperExecutionError: If the output could not be collected.
            HelperTimeoutError: If the timeout passed or ctx was cancelled.
        """
        try:
            process = self.spawn(command)
            return self._wait(process, ctx, timeout)
        finally:
            self.release()

    def _wait(self, process: subprocess.Popen, ctx: HelperContext, timeout: float) -> ExecutionResult:
        exited = threading.Event()
        wakeup = threading.Event()
        output: dict = {}

        def _communicate() -> None:
            try:
                output["stdout"], _ = process.communicate()
            except (OSError, ValueError) as e:
                output["error"] = e
            finally:
                exited.set()
                wakeup.set()

        waiter = threading.Thread(
            target=_communicate,
            name=f"keyhelper-wait-{process.pid}",
            daemon=True,
        )
        waiter.start()

        # Whichever comes first wakes us: process exit, deadline or cancel()
        unsubscribe = ctx.on_cancel(wakeup.set)
        try:
            wakeup.wait(timeout)
        finally:
            unsubscribe()

        if exited.is_set():
            waiter.join()
            if "error" in output:
                raise HelperExecutionError(
                    "api_key_helper output could not be collected"
                ) from output["error"]
            try:
                stdout = (output.get("stdout") or b"").decode("utf-8")
            except UnicodeDecodeError:
                # The error carries the offending bytes, which are part of the key
                raise HelperExecutionError(
                    "api_key_helper output is not valid UTF-8",
                    returncode=process.returncode,
                ) from None
            return ExecutionResult(stdout=stdout, returncode=process.returncode)

        reason = "was cancelled" if ctx.cancelled else f"exceeded {timeout:g}s"
        logger.warning("api_key_helper %s, terminating its process tree", reason)
        self.terminate(process, exited)
        waiter.join(self.grace_period)

        # Output produced before the kill is discarded: it may be incomplete
        raise HelperTimeoutError(
            f"api_key_helper command timed out after {timeout:g}s",
            timeout=timeout,
        )


def get_executor() -> IsolatedExecutor:
    """Get an executor for the current platform.

    Returns:
        A new executor instance for a single helper run.
    """
    if sys.platform == "win32":
        from gitscribe.keyhelper.windows_executor import WindowsJobExecutor

        return WindowsJobExecutor()

    from gitscribe.keyhelper.posix_executor import PosixProcessGroupExecutor

    return PosixProcessGroupExecutor()
