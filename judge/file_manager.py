import base64
import binascii
import secrets
import shutil
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from . import config
from .constant import Language
from .exception import MaterializationError
from .language import get_profile
from .utils import logger


@dataclass(frozen=True)
class CompilationUnit:
    token: str
    language: Language
    workspace: Path
    source_path: Path
    # entry-point name the toolchain sees, e.g. the Java class name
    entry: str


def decode_source(encoded: str) -> str:
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MaterializationError(f'source is not valid base64: {exc}') from exc
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise MaterializationError(f'source is not valid utf-8: {exc}') from exc


def new_token() -> str:
    return secrets.token_hex(8)


@contextmanager
def materialize(
    encoded_source: str,
    language: Language,
    root_dir: Optional[Path] = None,
) -> Iterator[CompilationUnit]:
    """
    Stage a submission as a compilation unit inside its own workspace.

    The workspace is named by a random token so concurrent runs never share
    files, including the fixed binary name native builds write. It is
    removed when the ``with`` block exits, whatever the reason.
    """
    profile = get_profile(language)
    source = decode_source(encoded_source)
    root_dir = Path(root_dir or config.WORK_DIR)
    token = new_token()
    entry = f'{profile.entry_prefix}{token}'
    workspace = root_dir / token
    try:
        workspace.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise MaterializationError(
            f'cannot create workspace {workspace}: {exc}') from exc
    try:
        if profile.rewrite is not None:
            source = profile.rewrite.apply(source, entry)
        source_path = workspace / profile.source_name(entry)
        try:
            source_path.write_text(source, encoding='utf-8')
        except OSError as exc:
            raise MaterializationError(
                f'cannot write {source_path}: {exc}') from exc
        logger().debug(f'materialized [token={token}, lang={language.value}]')
        yield CompilationUnit(
            token=token,
            language=Language(language),
            workspace=workspace,
            source_path=source_path,
            entry=entry,
        )
    finally:
        clean_data(workspace)


def clean_data(workspace: Path):
    try:
        shutil.rmtree(workspace)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger().error(f'failed to remove workspace {workspace}: {exc}')
