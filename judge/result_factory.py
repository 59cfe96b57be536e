"""
Factory functions for the verdicts a grading run can end in.

Score and error location are placeholders and stay 0 for every verdict.
"""

from .constant import Status
from .schema import Verdict


def make_accepted(time: int = 0) -> Verdict:
    return Verdict(status=Status.AC, accepted=True, time=time)


def make_wrong_answer(time: int = 0) -> Verdict:
    return Verdict(status=Status.WA, time=time)


def make_compile_error(diagnostic: str) -> Verdict:
    """
    Build a compile error verdict.

    Args:
        diagnostic: Toolchain output shown to the submitter

    Returns:
        Verdict with ``isCompileError`` set
    """
    return Verdict(
        status=Status.CE,
        isCompileError=True,
        errorContent=diagnostic,
    )


def make_time_limit_exceeded(time_limit: int) -> Verdict:
    """
    Build a TLE verdict. ``time`` reports the limit itself in ms, since the
    real running time is unknown once the process is killed.
    """
    return Verdict(
        status=Status.TLE,
        isTLE=True,
        time=time_limit * 1000,
    )


def make_runtime_error(message: str = '', time: int = 0) -> Verdict:
    return Verdict(
        status=Status.RE,
        time=time,
        errorContent=message,
        otherError=True,
    )
