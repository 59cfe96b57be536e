"""
Local process sandbox.

Launches one command as the leader of a fresh process group, feeds it a
fixed stdin payload while draining stdout and stderr, and kills the whole
group once the wall-clock deadline passes. Only the deadline is enforced;
memory, filesystem and network isolation belong to the container backend.
"""

from __future__ import annotations

import enum
import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence


class JudgeError(Exception):
    pass


class Outcome(str, enum.Enum):
    COMPLETED = 'Completed'
    TIMED_OUT = 'TimedOut'
    CRASHED = 'CrashedOrFailedToStart'


@dataclass(frozen=True)
class Result:
    outcome: Outcome
    stdout: bytes = b''
    stderr: bytes = b''
    duration: int = 0  # ms
    exit_code: Optional[int] = None
    message: str = ''


class ProcessHandle:
    """
    Owns a child process and its process group.

    Leaving the ``with`` block kills every process left in the group,
    reaps the child and closes every pipe.
    """

    def __init__(self, command: Sequence[str], cwd: Path | str | None = None):
        self.proc = subprocess.Popen(
            list(command),
            cwd=cwd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=True,
        )

    @property
    def pid(self) -> int:
        return self.proc.pid

    def terminate(self):
        try:
            os.killpg(self.proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            # group already gone
            try:
                self.proc.kill()
            except ProcessLookupError:
                pass

    def __enter__(self) -> ProcessHandle:
        return self

    def __exit__(self, exc_type, exc, tb):
        # the leader may be gone while children it started still run
        self.terminate()
        self.proc.wait()
        for stream in (self.proc.stdin, self.proc.stdout, self.proc.stderr):
            if stream is None:
                continue
            try:
                stream.close()
            except BrokenPipeError:
                pass
        return False


@dataclass
class Sandbox:
    command: Sequence[str]
    cwd: Path | str | None = None
    time_limit: Optional[float] = None  # sec., None disables the deadline
    stdin: bytes = b''

    def run(self) -> Result:
        if not self.command:
            raise JudgeError('empty command')
        start = time.monotonic()
        try:
            handle = ProcessHandle(self.command, cwd=self.cwd)
        except OSError as exc:
            return Result(
                outcome=Outcome.CRASHED,
                duration=_elapsed_ms(start),
                message=str(exc),
            )
        with handle:
            try:
                # communicate() writes stdin and drains both output pipes
                # together, then closes stdin so EOF readers terminate
                stdout, stderr = handle.proc.communicate(
                    input=self.stdin,
                    timeout=self.time_limit,
                )
            except subprocess.TimeoutExpired:
                handle.terminate()
                return Result(
                    outcome=Outcome.TIMED_OUT,
                    duration=_elapsed_ms(start),
                    message='time limit exceeded',
                )
        return Result(
            outcome=Outcome.COMPLETED,
            stdout=stdout,
            stderr=stderr,
            duration=_elapsed_ms(start),
            exit_code=handle.proc.returncode,
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
