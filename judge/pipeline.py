from runner.sandbox import Outcome
from . import result_factory
from .build_strategy import build
from .checker import is_same
from .exception import CompileError, GraderError, MaterializationError
from .executor import execute
from .file_manager import materialize
from .schema import SubmissionRequest, Verdict
from .utils import logger


def judge_submission(req: SubmissionRequest) -> Verdict:
    """
    Grade one submission and return its verdict.

    Materialize -> build -> run -> compare. The first failing stage decides
    the verdict and later stages are skipped. Never raises; the workspace is
    removed before returning.
    """
    tag = f'[problem={req.problemID}, user={req.userID}, lang={req.lang.value}]'
    logger().debug(f'received submission {tag}')
    try:
        verdict = _run_stages(req)
    except MaterializationError as e:
        logger().error(f'materialization failed {tag}: {e}')
        verdict = result_factory.make_runtime_error(str(e))
    except GraderError as e:
        logger().error(f'grader fault {tag}: {e}')
        verdict = result_factory.make_runtime_error(str(e))
    except Exception as e:
        logger().exception(f'unexpected fault {tag}')
        verdict = result_factory.make_runtime_error(
            f'internal error: {e.__class__.__name__}')
    logger().info(f'verdict {verdict.status.value} {tag}')
    return verdict


def _run_stages(req: SubmissionRequest) -> Verdict:
    with materialize(req.inputCode, req.lang) as unit:
        try:
            artifact = build(unit)
        except CompileError as e:
            logger().debug(f'compile error [token={unit.token}]')
            return result_factory.make_compile_error(e.diagnostic)
        result = execute(
            artifact,
            stdin=req.input.encode('utf-8'),
            time_limit=req.timelimit,
        )
    if result.outcome == Outcome.TIMED_OUT:
        return result_factory.make_time_limit_exceeded(req.timelimit)
    if result.outcome == Outcome.CRASHED:
        return result_factory.make_runtime_error(result.message,
                                                 time=result.duration)
    logger().debug('judging...')
    if is_same(result.stdout, req.output):
        return result_factory.make_accepted(time=result.duration)
    return result_factory.make_wrong_answer(time=result.duration)
