from dataclasses import dataclass
from typing import Optional, Tuple

from . import config
from .constant import Language
from .exception import UnsupportedLanguageError

# the binary name every native build writes inside its own workspace
BINARY_NAME = 'main'


@dataclass(frozen=True)
class EntryRewrite:
    placeholder: str
    replacement: str  # formatted with `entry`

    def apply(self, source: str, entry: str) -> str:
        return source.replace(
            self.placeholder,
            self.replacement.format(entry=entry),
        )


@dataclass(frozen=True)
class LanguageProfile:
    suffix: str
    run: Tuple[str, ...]
    build: Optional[Tuple[str, ...]] = None
    rewrite: Optional[EntryRewrite] = None
    # prefix of the per-run entry-point name
    entry_prefix: str = ''

    @property
    def needs_build(self) -> bool:
        return self.build is not None

    def source_name(self, entry: str) -> str:
        return f'{entry}{self.suffix}'

    def build_command(self, source: str, entry: str) -> list[str]:
        if self.build is None:
            return []
        return self._render(self.build, source, entry)

    def run_command(self, source: str, entry: str) -> list[str]:
        return self._render(self.run, source, entry)

    @staticmethod
    def _render(template, source: str, entry: str) -> list[str]:
        return [
            part.format(
                source=source,
                entry=entry,
                binary=BINARY_NAME,
                **config.TOOLCHAIN,
            ) for part in template
        ]


PROFILES = {
    Language.C:
    LanguageProfile(
        suffix='.c',
        build=('{cc}', '{source}', '-o', '{binary}', '-O2', '-lm'),
        run=('./{binary}', ),
    ),
    Language.CPP:
    LanguageProfile(
        suffix='.cpp',
        build=('{cxx}', '{source}', '-o', '{binary}', '-O2'),
        run=('./{binary}', ),
    ),
    Language.JAVA:
    LanguageProfile(
        suffix='.java',
        build=('{javac}', '{source}'),
        run=('{java}', '-cp', '.', '{entry}'),
        rewrite=EntryRewrite('class Main', 'class {entry}'),
        entry_prefix='C',
    ),
    Language.PY:
    LanguageProfile(
        suffix='.py',
        run=('{python}', '{source}'),
    ),
}


def get_profile(language: Language) -> LanguageProfile:
    try:
        return PROFILES[Language(language)]
    except (KeyError, ValueError):
        raise UnsupportedLanguageError(
            f'unsupported language: {language}') from None
