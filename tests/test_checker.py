import pytest

from judge import checker, config
from judge.constant import CompareMode


@pytest.mark.parametrize(
    "output, answer",
    [
        # exactly the same
        ("aaa\nbbb\n", "aaa\nbbb\n"),
        # crlf
        ("crlf\r\n", "crlf\n"),
        # trailing space before new line
        ("aaa  \nbbb\n", "aaa\nbbb\n"),
        # redundant new lines anywhere
        ("\n\naaa\n\n\nbbb\n\n", "aaa\nbbb"),
        # spacing inside a line
        ("1 2 3\n", "123"),
        # empty string
        ("", ""),
        # only new lines and spaces
        ("\n \r\n ", ""),
        (b"Hello, World!", "Hello, World!\n"),
    ],
)
def test_collapse_accepts(output, answer):
    assert checker.is_same(output, answer, CompareMode.COLLAPSE)


@pytest.mark.parametrize(
    "output, answer",
    [
        ("aaa\nbbc\n", "aaa\nbbb\n"),
        ("Hello, world!", "Hello, World!"),
        ("1 2 3", "1 2 3 4"),
        # tabs are not collapsed
        ("a\tb", "ab"),
        ("", "0"),
    ],
)
def test_collapse_rejects(output, answer):
    assert not checker.is_same(output, answer, CompareMode.COLLAPSE)


def test_normalize_removes_exactly_three_characters():
    assert checker.normalize(" a\r\nb\tc \n") == "ab\tc"


@pytest.mark.parametrize(
    "output, answer, expected",
    [
        ("1 2\n", "1  2", True),
        ("1\n2\n", "1 2", True),
        ("12", "1 2", False),
    ],
)
def test_token_mode(output, answer, expected):
    assert checker.is_same(output, answer, CompareMode.TOKEN) is expected


@pytest.mark.parametrize(
    "output, answer, expected",
    [
        ("aaa  \nbbb\n\n", "aaa\nbbb\n", True),
        ("aaa\n\nbbb\n", "aaa\nbbb\n", False),
        ("aaa\n bbb\n", "aaa\nbbb\n", False),
        ("crlf\r\n", "crlf\n", True),
    ],
)
def test_line_mode(output, answer, expected):
    assert checker.is_same(output, answer, CompareMode.LINE) is expected


def test_mode_defaults_to_config(monkeypatch):
    monkeypatch.setattr(config, "COMPARE_MODE", CompareMode.TOKEN)
    assert not checker.is_same("12", "1 2")
    monkeypatch.setattr(config, "COMPARE_MODE", CompareMode.COLLAPSE)
    assert checker.is_same("12", "1 2")


def test_undecodable_output_is_wrong_not_fatal():
    assert not checker.is_same(b"\xff\xfe", "ok")
