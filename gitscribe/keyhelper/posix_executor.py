"""POSIX helper executor based on process groups."""

import logging
import os
import signal
import subprocess
import threading
import time

from gitscribe.keyhelper.exceptions import HelperSpawnError
from gitscribe.keyhelper.executor import IsolatedExecutor

logger = logging.getLogger(__name__)

SHELL = "/bin/sh"


class PosixProcessGroupExecutor(IsolatedExecutor):
    """Runs the helper in /bin/sh as the leader of a new process group.

    On timeout the whole group gets SIGTERM, then SIGKILL if anything in
    the group is still alive after the grace period.
    """

    def spawn(self, command: str) -> subprocess.Popen:
        try:
            # process_group=0 calls setpgid(0, 0) in the child, so pgid == pid
            return subprocess.Popen(
                [SHELL, "-c", command],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                process_group=0,
            )
        except OSError as e:
            raise HelperSpawnError(f"api_key_helper start failed: {e.strerror}") from e

    def terminate(self, process: subprocess.Popen, exited: threading.Event) -> None:
        pgid = process.pid
        deadline = time.monotonic() + self.grace_period

        self._signal_group(pgid, signal.SIGTERM)

        # Shell first, then any descendants that outlived it
        exited.wait(self.grace_period)
        while self._group_alive(pgid) and time.monotonic() < deadline:
            time.sleep(0.05)

        if self._group_alive(pgid):
            logger.warning("api_key_helper did not stop after SIGTERM, sending SIGKILL")
            self._signal_group(pgid, signal.SIGKILL)

        # Reap the shell even if a descendant still holds the pipes open
        process.wait()

    @staticmethod
    def _signal_group(pgid: int, sig: int) -> None:
        try:
            os.killpg(pgid, sig)
        except ProcessLookupError:
            logger.debug("Process group %d already gone", pgid)
        except PermissionError:
            logger.debug("Process group %d only has exited members left", pgid)

    @staticmethod
    def _group_alive(pgid: int) -> bool:
        try:
            os.killpg(pgid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Group exists but its members are no longer ours to signal
            return True
        return True
