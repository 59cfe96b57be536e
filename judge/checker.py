"""
Output comparison.

The default ``collapse`` mode drops every carriage return, space and
newline on both sides before an exact comparison, so ``1 2`` and ``12`` are
considered equal. ``token`` and ``line`` are stricter alternatives.
"""

from typing import Union

from . import config
from .constant import CompareMode

_COLLAPSED_CHARS = ('\r', ' ', '\n')


def normalize(s: str) -> str:
    for ch in _COLLAPSED_CHARS:
        s = s.replace(ch, '')
    return s


def tokenize(s: str) -> list:
    return s.split()


def strip_lines(s: str) -> list:
    # strip trailing space for each line
    ss = [line.rstrip() for line in s.splitlines()]
    # strip redundant new line
    while len(ss) and ss[-1] == '':
        del ss[-1]
    return ss


_NORMALIZERS = {
    CompareMode.COLLAPSE: normalize,
    CompareMode.TOKEN: tokenize,
    CompareMode.LINE: strip_lines,
}


def is_same(
    output: Union[bytes, str],
    expected: str,
    mode: CompareMode | None = None,
) -> bool:
    if isinstance(output, bytes):
        output = output.decode('utf-8', 'replace')
    normalizer = _NORMALIZERS[CompareMode(mode or config.COMPARE_MODE)]
    return normalizer(output) == normalizer(expected)
