"""Run an assembled dump/restore command in a shell.

Two policies, selected per job by ``BackupConfig.debug``:

- debug: a non-zero exit status or a timeout raises ``ProcessFailedError``
  (``ProcessTimeoutError`` for timeouts).
- normal: the command runs best-effort; failures are logged and the
  result is returned (``None`` after a timeout).

A shell that cannot be launched at all raises ``ProcessFailedError`` under
both policies.

The shell runs in its own session, so a timeout kills the whole pipeline
(dump tool and compressor), not just ``/bin/sh``.
"""

import logging
import os
import signal
import subprocess

from db_dumper.exceptions import ProcessFailedError, ProcessTimeoutError

logger = logging.getLogger(__name__)


def mask(command: str, secrets: list[str] | None = None) -> str:
    """Replace every non-empty secret in ``command`` with ``***``."""
    for secret in secrets or []:
        if secret:
            command = command.replace(secret, "***")
    return command


def run_shell_command(
    command: str,
    timeout: float | None = None,
    debug: bool = False,
    secrets: list[str] | None = None,
) -> subprocess.CompletedProcess | None:
    """Run ``command`` through the shell with an optional timeout.

    Args:
        command: Complete shell command line (redirects and pipes allowed).
        timeout: Seconds before the process group is killed; ``None`` waits forever.
        debug: Raise on non-zero exit status and on timeout.
        secrets: Values masked in log messages and error text.

    Returns:
        The completed process, or ``None`` if it timed out in normal mode.

    Raises:
        ProcessFailedError: If the shell cannot be started, or (debug) the
            command exits non-zero.
        ProcessTimeoutError: (debug) If the command exceeds ``timeout``.
    """
    shown = mask(command, secrets)
    logger.debug("Running: %s", shown)

    try:
        proc = subprocess.Popen(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            start_new_session=True,
        )
    except OSError as e:
        raise ProcessFailedError(str(e), command=shown) from e

    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as e:
        _kill_group(proc)
        message = f"Command timed out after {timeout} seconds: {shown}"
        if debug:
            raise ProcessTimeoutError(message, command=shown) from e
        logger.warning(message)
        return None

    result = subprocess.CompletedProcess(command, proc.returncode, stdout, stderr)

    if result.stdout:
        logger.debug("STDOUT: %s", result.stdout.strip())

    if result.returncode != 0:
        stderr = mask(result.stderr.strip(), secrets)
        message = f"Command failed with exit code {result.returncode}: {shown}"
        if stderr:
            message = f"{message}\n{stderr}"
        if debug:
            raise ProcessFailedError(
                message,
                command=shown,
                returncode=result.returncode,
                stderr=stderr,
            )
        logger.warning(message)

    return result


def _kill_group(proc: subprocess.Popen) -> None:
    """SIGKILL every process in the shell's session and reap the shell."""
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass   # group already gone
    proc.communicate()
