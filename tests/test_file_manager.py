import base64
import stat
from pathlib import Path

import pytest

from judge import file_manager
from judge.constant import Language
from judge.exception import MaterializationError
from tests.helpers import workspace_entries


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


JAVA_SOURCE = """
public class Main {
    public static void main(String[] args) {
        System.out.println("hi");
    }
}
"""


def test_materialize_python(work_dir):
    with file_manager.materialize(_b64("print(1)"), Language.PY) as unit:
        assert unit.workspace.parent == work_dir
        assert unit.workspace.name == unit.token
        assert unit.source_path == unit.workspace / f"{unit.token}.py"
        assert unit.source_path.read_text() == "print(1)"
    assert not unit.workspace.exists()


@pytest.mark.parametrize(
    "language, suffix",
    [
        (Language.C, ".c"),
        (Language.CPP, ".cpp"),
        (Language.PY, ".py"),
    ],
)
def test_source_name_per_language(language, suffix):
    with file_manager.materialize(_b64("x"), language) as unit:
        assert unit.source_path.suffix == suffix
        assert unit.entry == unit.token


def test_java_entry_point_rewrite():
    with file_manager.materialize(_b64(JAVA_SOURCE), Language.JAVA) as unit:
        assert unit.entry == f"C{unit.token}"
        assert unit.source_path.name == f"C{unit.token}.java"
        text = unit.source_path.read_text()
        assert f"public class C{unit.token} {{" in text
        assert "class Main" not in text


def test_java_without_placeholder_is_written_unchanged():
    source = "public class Solution {}"
    with file_manager.materialize(_b64(source), Language.JAVA) as unit:
        assert unit.source_path.read_text() == source


def test_concurrent_units_never_share_a_workspace():
    with file_manager.materialize(_b64("a"), Language.CPP) as first, \
            file_manager.materialize(_b64("b"), Language.CPP) as second:
        assert first.token != second.token
        assert first.workspace != second.workspace
        assert first.source_path.read_text() == "a"
        assert second.source_path.read_text() == "b"


def test_tokens_are_unique():
    tokens = {file_manager.new_token() for _ in range(1000)}
    assert len(tokens) == 1000


def test_workspace_removed_when_body_raises(work_dir):
    with pytest.raises(RuntimeError):
        with file_manager.materialize(_b64("x"), Language.PY) as unit:
            (unit.workspace / "main").write_bytes(b"\x7fELF")
            raise RuntimeError("runner crashed")
    assert workspace_entries(work_dir) == []


@pytest.mark.parametrize(
    "encoded",
    [
        "not base64!!",
        "abc",
        base64.b64encode(b"\xff\xfe\xfd").decode(),
    ],
)
def test_malformed_source_raises(encoded, work_dir):
    with pytest.raises(MaterializationError):
        with file_manager.materialize(encoded, Language.PY):
            pass
    assert workspace_entries(work_dir) == []


def test_unwritable_root_raises(tmp_path):
    root = tmp_path / "readonly"
    root.mkdir()
    root.chmod(stat.S_IRUSR | stat.S_IXUSR)
    try:
        if _writable(root):
            pytest.skip("running with privileges that ignore permissions")
        with pytest.raises(MaterializationError):
            with file_manager.materialize(_b64("x"),
                                          Language.PY,
                                          root_dir=root):
                pass
    finally:
        root.chmod(stat.S_IRWXU)


def _writable(path) -> bool:
    scratch = path / "scratch"
    try:
        scratch.mkdir()
    except OSError:
        return False
    scratch.rmdir()
    return True


def test_source_write_failure_removes_workspace(work_dir, monkeypatch):

    def full_disk(self, *args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(Path, "write_text", full_disk)
    with pytest.raises(MaterializationError) as excinfo:
        with file_manager.materialize(_b64("print(1)"), Language.PY):
            pass
    assert "No space left" in str(excinfo.value)
    assert workspace_entries(work_dir) == []
