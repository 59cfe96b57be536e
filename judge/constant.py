from enum import Enum


class Language(str, Enum):
    C = 'c'
    CPP = 'c++'
    JAVA = 'java'
    PY = 'python'


class Status(str, Enum):
    AC = 'AC'
    CE = 'CE'
    TLE = 'TLE'
    WA = 'WA'
    RE = 'RE'


class CompareMode(str, Enum):
    COLLAPSE = 'collapse'
    TOKEN = 'token'
    LINE = 'line'


class RunnerBackend(str, Enum):
    LOCAL = 'local'
    DOCKER = 'docker'
