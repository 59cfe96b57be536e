from dataclasses import dataclass
from pathlib import Path

from runner.sandbox import Outcome
from . import config
from .constant import Language
from .exception import CompileError
from .executor import create_sandbox
from .file_manager import CompilationUnit
from .language import get_profile
from .utils import logger


@dataclass(frozen=True)
class ExecutableArtifact:
    language: Language
    command: list[str]
    cwd: Path


def build(unit: CompilationUnit) -> ExecutableArtifact:
    """
    Turn a compilation unit into something runnable.

    Interpreted languages skip the toolchain and run the source itself.
    Raises :class:`CompileError` with the toolchain diagnostic otherwise.
    """
    profile = get_profile(unit.language)
    source = unit.source_path.name
    artifact = ExecutableArtifact(
        language=unit.language,
        command=profile.run_command(source, unit.entry),
        cwd=unit.workspace,
    )
    if not profile.needs_build:
        return artifact
    command = profile.build_command(source, unit.entry)
    logger().debug(f'build {command} [token={unit.token}]')
    result = create_sandbox(
        language=unit.language,
        command=command,
        cwd=unit.workspace,
        time_limit=config.BUILD_TIMEOUT,
    ).run()
    if result.outcome == Outcome.TIMED_OUT:
        raise CompileError(
            f'compilation exceeded {config.BUILD_TIMEOUT} seconds')
    if result.outcome == Outcome.CRASHED:
        raise CompileError(result.message
                           or f'failed to launch {command[0]}')
    if result.exit_code != 0:
        raise CompileError(_diagnostic(result, command))
    return artifact


def _diagnostic(result, command) -> str:
    for stream in (result.stderr, result.stdout):
        text = stream.decode('utf-8', 'replace')
        if text.strip():
            return text
    return f'{command[0]} exited with status {result.exit_code}'
