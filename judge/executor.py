from pathlib import Path
from typing import Optional, Sequence

from runner.container import ContainerSandbox
from runner.sandbox import Result, Sandbox
from . import config
from .constant import Language, RunnerBackend
from .utils import logger


def create_sandbox(
    language: Language,
    command: Sequence[str],
    cwd: Path,
    time_limit: Optional[float] = None,
    stdin: bytes = b'',
):
    if config.RUNNER_BACKEND == RunnerBackend.DOCKER:
        cfg = config.get_container_config()
        image = cfg['image'].get(Language(language).value)
        if not image:
            raise ValueError(f'no container image for {language.value}')
        return ContainerSandbox(
            command=command,
            image=image,
            cwd=cwd,
            time_limit=time_limit,
            stdin=stdin,
            cfg=cfg,
        )
    return Sandbox(
        command=command,
        cwd=cwd,
        time_limit=time_limit,
        stdin=stdin,
    )


def execute(artifact, stdin: bytes, time_limit: float) -> Result:
    """Run a built artifact once under the submission's deadline."""
    logger().debug(f'execute {artifact.command} [limit={time_limit}s]')
    result = create_sandbox(
        language=artifact.language,
        command=artifact.command,
        cwd=artifact.cwd,
        time_limit=time_limit,
        stdin=stdin,
    ).run()
    logger().debug(f'execution finished [outcome={result.outcome.value}, '
                   f'exit={result.exit_code}, {result.duration}ms]')
    return result
