"""Windows helper executor based on Job Objects."""

import logging
import subprocess
import threading
from typing import Optional

import pywintypes
import win32api
import win32con
import win32job
import win32process

from gitscribe.keyhelper.exceptions import HelperSpawnError
from gitscribe.keyhelper.executor import IsolatedExecutor

logger = logging.getLogger(__name__)

SHELL = "cmd.exe"

ERROR_ACCESS_DENIED = 5


def _create_kill_on_close_job():
    """Create a Job Object that kills all its processes when closed.

    Returns:
        The job handle.
    """
    job = win32job.CreateJobObject(None, "")
    info = win32job.QueryInformationJobObject(job, win32job.JobObjectExtendedLimitInformation)
    info["BasicLimitInformation"]["LimitFlags"] |= win32job.JOB_OBJECT_LIMIT_KILL_ON_JOB_CLOSE
    win32job.SetInformationJobObject(job, win32job.JobObjectExtendedLimitInformation, info)
    return job


class WindowsJobExecutor(IsolatedExecutor):
    """Runs the helper in cmd.exe inside a dedicated Job Object.

    On timeout the job is terminated, which stops cmd.exe and every
    process it started in one step. There is no grace period.
    """

    def __init__(self):
        self._job = None
        self._process_handle: Optional[object] = None

    def spawn(self, command: str) -> subprocess.Popen:
        try:
            self._job = _create_kill_on_close_job()
        except pywintypes.error as e:
            raise HelperSpawnError(f"create job failed: {e.strerror}") from e

        process = self._start(command)

        try:
            self._process_handle = win32api.OpenProcess(
                win32con.PROCESS_ALL_ACCESS, False, process.pid
            )
            win32job.AssignProcessToJobObject(self._job, self._process_handle)
        except pywintypes.error as e:
            # Without the job, grandchildren could not be stopped on timeout
            process.kill()
            process.communicate()
            raise HelperSpawnError(f"assign process to job failed: {e.strerror}") from e

        return process

    def _start(self, command: str) -> subprocess.Popen:
        flags = win32process.CREATE_NEW_PROCESS_GROUP | win32process.CREATE_BREAKAWAY_FROM_JOB
        try:
            return self._popen(command, flags)
        except OSError as e:
            if getattr(e, "winerror", None) != ERROR_ACCESS_DENIED:
                raise HelperSpawnError(f"api_key_helper start failed: {e.strerror}") from e

        # The parent's job forbids breakaway; nested jobs still work
        logger.debug("Breakaway from parent job denied, starting helper inside it")
        try:
            return self._popen(command, win32process.CREATE_NEW_PROCESS_GROUP)
        except OSError as e:
            raise HelperSpawnError(f"api_key_helper start failed: {e.strerror}") from e

    @staticmethod
    def _popen(command: str, creationflags: int) -> subprocess.Popen:
        return subprocess.Popen(
            [SHELL, "/c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            creationflags=creationflags,
        )

    def terminate(self, process: subprocess.Popen, exited: threading.Event) -> None:
        try:
            win32job.TerminateJobObject(self._job, 1)
        except pywintypes.error as e:
            logger.warning("TerminateJobObject failed (%s), killing helper shell only", e.strerror)
            process.kill()
        process.wait()

    def release(self) -> None:
        # Closing the job also kills anything left in it (KILL_ON_JOB_CLOSE)
        if self._process_handle is not None:
            self._process_handle.Close()
            self._process_handle = None
        if self._job is not None:
            self._job.Close()
            self._job = None
