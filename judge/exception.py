class GraderError(Exception):
    """Base class of every fault raised inside the grading pipeline."""


class MaterializationError(GraderError):
    """Raised when submitted source cannot be decoded or staged on disk."""


class UnsupportedLanguageError(GraderError):
    pass


class CompileError(GraderError):
    """Raised by the build stage; carries the toolchain diagnostic."""

    def __init__(self, diagnostic: str):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic
