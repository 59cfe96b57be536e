import os
import shutil
import time
from pathlib import Path

import pytest


def require_tool(name: str):
    return pytest.mark.skipif(
        shutil.which(name) is None,
        reason=f'{name} not installed',
    )


def pid_alive(pid: int) -> bool:
    # a reaped or zombie process no longer counts as running
    status = Path(f'/proc/{pid}/status')
    try:
        for line in status.read_text().splitlines():
            if line.startswith('State:'):
                return 'Z' not in line.split()[1]
    except FileNotFoundError:
        return False
    return True


def wait_dead(pid: int, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not pid_alive(pid):
            return True
        time.sleep(0.05)
    return not pid_alive(pid)


def workspace_entries(root: Path) -> list:
    if not root.exists():
        return []
    return sorted(os.listdir(root))
