from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from . import config
from .constant import Language, Status

_LANGUAGE_ALIASES = {
    'c11': Language.C,
    'cpp': Language.CPP,
    'cpp17': Language.CPP,
    'cxx': Language.CPP,
    'g++': Language.CPP,
    'py': Language.PY,
    'python3': Language.PY,
}


class SubmissionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    problemID: str
    userID: str
    inputCode: str  # base64
    lang: Language
    input: str = ''
    output: str = ''
    timelimit: int = Field(gt=0, le=config.MAX_TIME_LIMIT)  # sec.

    @field_validator('lang', mode='before')
    @classmethod
    def _coerce_language(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            v = _LANGUAGE_ALIASES.get(v, v)
        return v


class Verdict(BaseModel):
    status: Status
    accepted: bool = False
    time: int = 0  # ms
    isCompileError: bool = False
    errorContent: str = ''
    isTLE: bool = False
    score: int = 0
    errorAt: int = 0
    otherError: bool = False
