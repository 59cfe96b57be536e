import base64
import sys

import pytest

from judge import config
from judge.schema import SubmissionRequest


@pytest.fixture(autouse=True)
def work_dir(tmp_path, monkeypatch):
    # every test gets a private workspace root and a python interpreter
    # that is known to exist
    root = tmp_path / 'submissions'
    monkeypatch.setattr(config, 'WORK_DIR', root)
    monkeypatch.setitem(config.TOOLCHAIN, 'python', sys.executable)
    return root


@pytest.fixture
def make_request():

    def make_request(source: str, lang: str = 'python', **kwargs):
        payload = {
            'problemID': 'p1',
            'userID': 'u1',
            'inputCode': base64.b64encode(source.encode()).decode(),
            'lang': lang,
            'input': '',
            'output': '',
            'timelimit': 2,
        }
        payload.update(kwargs)
        return SubmissionRequest.model_validate(payload)

    return make_request
