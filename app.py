import os
import logging
from flask import Flask, request, jsonify
from pydantic import ValidationError
from judge import config
from judge.constant import Language
from judge.pipeline import judge_submission
from judge.schema import SubmissionRequest

logging.basicConfig(
    filename=os.getenv("LOG_FILE") or None,
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
app = Flask(__name__)
if __name__ != "__main__":
    # let flask app use gunicorn's logger
    gunicorn_logger = logging.getLogger("gunicorn.error")
    if gunicorn_logger.handlers:
        app.logger.handlers = gunicorn_logger.handlers
        app.logger.setLevel(gunicorn_logger.level)
        logging.getLogger().handlers = gunicorn_logger.handlers
        logging.getLogger().setLevel(gunicorn_logger.level)

# Allow overriding log level via environment variable
if os.getenv("GRADER_DEBUG", "").lower() == "true":
    app.logger.setLevel(logging.DEBUG)
    logging.getLogger().setLevel(logging.DEBUG)
logger = app.logger


def _error(msg: str, code: int):
    return jsonify({
        "status": "err",
        "msg": msg,
    }), code


@app.post("/v1/judge-submission")
def judge():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        logger.debug("reject submission: body is not a json object")
        return _error("request body must be a json object", 400)
    try:
        req = SubmissionRequest.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"reject submission: {e}")
        return _error(str(e), 400)
    logger.debug(
        f"received submission [problem={req.problemID}, user={req.userID}]")
    verdict = judge_submission(req)
    return jsonify(verdict.model_dump(mode="json")), 200


@app.get("/status")
def status():
    return jsonify({
        "languages": [lang.value for lang in Language],
        "backend": config.RUNNER_BACKEND.value,
    }), 200


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=config.PORT, threaded=True)
