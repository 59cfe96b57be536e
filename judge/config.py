import json
import os
from pathlib import Path

from .constant import CompareMode, RunnerBackend

# per-run workspaces are created below this directory
WORK_DIR = Path(os.getenv(
    'WORK_DIR',
    'submissions',
))
# build deadline in seconds, unset means the compiler may run to completion
_build_timeout_raw = os.getenv('BUILD_TIMEOUT', '')
BUILD_TIMEOUT = float(_build_timeout_raw) if _build_timeout_raw else None
RUNNER_BACKEND = RunnerBackend(os.getenv('RUNNER_BACKEND', 'local'))
COMPARE_MODE = CompareMode(os.getenv('COMPARE_MODE', 'collapse'))
PORT = int(os.getenv('PORT', '3000'))
# upper bound on a submission's time limit in seconds
MAX_TIME_LIMIT = int(os.getenv('MAX_TIME_LIMIT', '3600'))

# toolchain binaries, looked up on PATH unless absolute
TOOLCHAIN = {
    'cc': os.getenv('CC', 'gcc'),
    'cxx': os.getenv('CXX', 'g++'),
    'javac': os.getenv('JAVAC', 'javac'),
    'java': os.getenv('JAVA', 'java'),
    'python': os.getenv('PYTHON', 'python3'),
}

_DEFAULT_GRADER_CONFIG_PATH = Path(
    os.getenv('GRADER_CONFIG', '.config/grader.json'))


def _load_grader_config(path: Path) -> dict:
    try:
        with path.open() as f:
            return json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError:
        return {}


def get_container_config(config_path: str | Path | None = None) -> dict:
    path = Path(config_path) if config_path else _DEFAULT_GRADER_CONFIG_PATH
    cfg = _load_grader_config(path).get('container', {})
    cfg.setdefault('docker_url',
                   os.getenv('DOCKER_URL', 'unix://var/run/docker.sock'))
    cfg.setdefault('image', {})
    cfg.setdefault('mem_limit', os.getenv('CONTAINER_MEM_LIMIT', '256m'))
    return cfg
