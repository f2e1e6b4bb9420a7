"""Child process spawning and tree termination helpers.

Children are started in their own process group (a new session on Unix, a
new process group on Windows) so a timed-out command can be killed together
with anything it spawned, e.g. the hooks or pagers ``git`` launches.

Termination escalates:
- Unix: SIGTERM to the group, wait for the leader and the rest of the group,
  then SIGKILL to the group. The group is signalled even after the leader
  has exited, since a grandchild can outlive it while holding the pipes open.
- Windows: CTRL_BREAK_EVENT, wait, ``taskkill /T /F``, then ``kill()``
"""

import asyncio
import logging
import os
import signal
import subprocess
import sys
import time
from asyncio.subprocess import Process
from typing import Any

logger = logging.getLogger(__name__)

# Seconds a child gets to exit after the polite signal
GRACEFUL_TIMEOUT: float = 2.0

# Seconds between checks for surviving process group members
GROUP_POLL_INTERVAL: float = 0.05

if sys.platform == "win32":
    WINDOWS_CREATIONFLAGS = (
        subprocess.CREATE_NEW_PROCESS_GROUP |
        subprocess.CREATE_NO_WINDOW
    )
else:
    WINDOWS_CREATIONFLAGS = 0


def isolated_group_kwargs() -> dict[str, Any]:
    """Keyword arguments for create_subprocess_exec that isolate the child group."""
    if sys.platform == "win32":
        return {"creationflags": WINDOWS_CREATIONFLAGS}
    return {"start_new_session": True}


async def _wait_quietly(process: Process, timeout: float | None) -> bool:
    """Wait for exit; return True if the process exited within timeout."""
    try:
        if timeout is None:
            await process.wait()
        else:
            await asyncio.wait_for(process.wait(), timeout=timeout)
    except TimeoutError:
        return False
    except ProcessLookupError:
        pass
    return True


async def terminate_process_tree(
    process: Process,
    graceful_timeout: float = GRACEFUL_TIMEOUT,
) -> None:
    """Terminate a process and its process group, then reap it.

    Safe to call on a process that already exited. On Unix the group is
    still signalled in that case; on Windows there is nothing left to do,
    as ``taskkill /T`` cannot find descendants of an exited parent.

    Args:
        process: The asyncio subprocess to terminate.
        graceful_timeout: Seconds to wait after the polite signal before
            escalating to a forceful kill.
    """
    pid = process.pid
    if pid is None:
        return

    if sys.platform == "win32":
        if process.returncode is None:
            await _terminate_windows(process, pid, graceful_timeout)
    else:
        await _terminate_unix(process, pid, graceful_timeout)


def _signal_group(process: Process, pid: int, sig: int) -> bool:
    """Send sig to the group led by pid, falling back to the child alone.

    Children started with isolated_group_kwargs() lead their own group, so
    the group id is the child pid, and stays valid after the leader exits
    for as long as any member is alive.

    Returns False if neither the group nor the child is left to signal.
    """
    try:
        os.killpg(pid, sig)
        return True
    except OSError as e:
        logger.debug("Signal %d to group %d failed (%s); signalling child only", sig, pid, e)
    if process.returncode is not None:
        return False
    try:
        process.send_signal(sig)
    except ProcessLookupError:
        return False
    return True


def _group_alive(pgid: int) -> bool:
    try:
        os.killpg(pgid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


async def _wait_group_exit(pgid: int, timeout: float) -> bool:
    """Poll until group pgid is empty; return True if it emptied in time."""
    deadline = time.monotonic() + timeout
    while _group_alive(pgid):
        if time.monotonic() >= deadline:
            return False
        await asyncio.sleep(GROUP_POLL_INTERVAL)
    return True


async def _terminate_unix(process: Process, pid: int, graceful_timeout: float) -> None:
    if not _signal_group(process, pid, signal.SIGTERM):
        return
    deadline = time.monotonic() + graceful_timeout
    if await _wait_quietly(process, graceful_timeout):
        if await _wait_group_exit(pid, max(deadline - time.monotonic(), 0.0)):
            return

    logger.debug("Process group %d survived SIGTERM, sending SIGKILL", pid)
    _signal_group(process, pid, signal.SIGKILL)
    await _wait_quietly(process, None)


async def _taskkill_tree(pid: int, timeout: float) -> None:
    """Force-kill pid and its descendants with ``taskkill /T /F``."""
    try:
        killer = await asyncio.create_subprocess_exec(
            "taskkill", "/T", "/F", "/PID", str(pid),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            creationflags=WINDOWS_CREATIONFLAGS,
        )
        await asyncio.wait_for(killer.wait(), timeout=timeout)
    except (FileNotFoundError, TimeoutError, OSError) as e:
        logger.debug("taskkill for PID %d did not complete: %s", pid, e)


async def _terminate_windows(process: Process, pid: int, graceful_timeout: float) -> None:
    if hasattr(signal, "CTRL_BREAK_EVENT"):
        try:
            os.kill(pid, signal.CTRL_BREAK_EVENT)
        except ProcessLookupError:
            return
        except OSError as e:
            logger.debug("CTRL_BREAK_EVENT to %d failed: %s", pid, e)
        else:
            if await _wait_quietly(process, graceful_timeout):
                return

    await _taskkill_tree(pid, graceful_timeout)
    if await _wait_quietly(process, 0.5):
        return

    logger.debug("Killing git process %d directly", pid)
    try:
        process.kill()
    except ProcessLookupError:
        return
    await _wait_quietly(process, None)
