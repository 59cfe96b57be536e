from __future__ import annotations

import shlex
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import docker
import requests
import urllib3

from runner.sandbox import JudgeError, Outcome, Result
from judge import config as grader_config
from judge.utils import logger

# stdin payload staged next to the sources, redirected by the shell
STDIN_NAME = '.stdin'
# /bin/sh exit codes for "not executable" and "command not found"
_LAUNCH_FAILURE_CODES = {126, 127}


def to_host_path(path: Path | str, cfg: dict) -> Path:
    """
    Map a workspace path seen by the grader to the path the docker daemon
    sees. Differs only when the grader itself runs in a container with the
    workspace root mounted from ``host_root``.
    """
    p = Path(path).expanduser().resolve()
    sandbox_root = cfg.get('sandbox_root')
    host_root = cfg.get('host_root')
    if not sandbox_root or not host_root:
        return p
    try:
        rel = p.relative_to(Path(sandbox_root).expanduser().resolve())
    except ValueError:
        return p
    return Path(host_root).expanduser() / rel


@dataclass
class ContainerSandbox:
    command: Sequence[str]
    image: str
    cwd: Path | str
    time_limit: Optional[float] = None  # sec.
    stdin: bytes = b''
    cfg: dict = field(default_factory=grader_config.get_container_config)

    def run(self) -> Result:
        if not self.command:
            raise JudgeError('empty command')
        workspace = Path(self.cwd)
        (workspace / STDIN_NAME).write_bytes(self.stdin)
        client = docker.APIClient(base_url=self.cfg['docker_url'])
        host_config = client.create_host_config(
            binds={
                str(to_host_path(workspace, self.cfg)): {
                    'bind': '/src',
                    'mode': 'rw',
                }
            },
            network_mode='none',
            mem_limit=self.cfg['mem_limit'],
            tmpfs={'/tmp': 'rw,noexec,nosuid'},
        )
        start = time.monotonic()
        try:
            container = client.create_container(
                image=self.image,
                command=[
                    '/bin/sh',
                    '-c',
                    f'{shlex.join(self.command)} < {STDIN_NAME}',
                ],
                working_dir='/src',
                host_config=host_config,
            )
        except docker.errors.DockerException as exc:
            return Result(
                outcome=Outcome.CRASHED,
                duration=_elapsed_ms(start),
                message=f'failed to create container: {exc}',
            )
        try:
            client.start(container)
            try:
                exit_status = client.wait(container, timeout=self.time_limit)
            except (requests.exceptions.ReadTimeout,
                    requests.exceptions.ConnectionError) as exc:
                if not _is_read_timeout(exc):
                    return Result(
                        outcome=Outcome.CRASHED,
                        duration=_elapsed_ms(start),
                        message=f'lost connection to docker: {exc}',
                    )
                try:
                    client.kill(container)
                except docker.errors.DockerException as kill_exc:
                    # exited right at the deadline
                    logger().debug(f'kill after timeout failed: {kill_exc}')
                return Result(
                    outcome=Outcome.TIMED_OUT,
                    duration=_elapsed_ms(start),
                    message='time limit exceeded',
                )
            duration = _elapsed_ms(start)
            stdout = client.logs(container, stdout=True, stderr=False)
            stderr = client.logs(container, stdout=False, stderr=True)
        except docker.errors.DockerException as exc:
            return Result(
                outcome=Outcome.CRASHED,
                duration=_elapsed_ms(start),
                message=f'container execution failed: {exc}',
            )
        finally:
            try:
                client.remove_container(container, v=True, force=True)
            except docker.errors.DockerException as exc:
                logger().warning(f'failed to remove container: {exc}')
        exit_code = exit_status.get('StatusCode', 1)
        if exit_code in _LAUNCH_FAILURE_CODES:
            return Result(
                outcome=Outcome.CRASHED,
                stderr=stderr,
                duration=duration,
                exit_code=exit_code,
                message=stderr.decode('utf-8', 'replace'),
            )
        return Result(
            outcome=Outcome.COMPLETED,
            stdout=stdout,
            stderr=stderr,
            duration=duration,
            exit_code=exit_code,
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _is_read_timeout(exc: requests.exceptions.RequestException) -> bool:
    # some transports wrap urllib3's ReadTimeoutError in a plain
    # ConnectionError instead of raising ReadTimeout
    if isinstance(exc, requests.exceptions.ReadTimeout):
        return True
    return any(
        isinstance(arg, urllib3.exceptions.ReadTimeoutError)
        or isinstance(getattr(arg, 'reason', None),
                      urllib3.exceptions.ReadTimeoutError)
        for arg in exc.args)
