"""Parsing of cfg(...) target conditions from the manifest."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import Error


class ManifestCfgParseError(Error):
    """A cfg condition could not be parsed."""

    def __init__(self, expect: str, rest: str) -> None:
        super().__init__(f"expect {expect}, next is {rest}")
        self.expect = expect
        self.rest = rest


class Os(Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


class Compiler(Enum):
    GCC = "gcc"
    MSVC = "msvc"
    CLANG = "clang"
    APPLE_CLANG = "apple_clang"


@dataclass(frozen=True)
class CfgAll:
    """True when every predicate holds."""

    predicates: tuple[CfgPredicate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))


@dataclass(frozen=True)
class CfgAny:
    """True when at least one predicate holds."""

    predicates: tuple[CfgPredicate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "predicates", tuple(self.predicates))


@dataclass(frozen=True)
class CfgNot:
    """Negation of a predicate."""

    predicate: CfgPredicate


CfgOption = Os | Compiler
CfgPredicate = Os | Compiler | CfgAll | CfgAny | CfgNot

_SPACE = " \t\n\v\f\r"
_OS_SYMBOLS = {member.value: member for member in Os}
_COMPILER_SYMBOLS = {member.value: member for member in Compiler}


class _Parser:
    """Recursive-descent parser; whitespace is skipped before every token."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _skip(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in _SPACE:
            self._pos += 1

    def _accept(self, literal: str) -> bool:
        start = self._pos
        self._skip()
        if self._text.startswith(literal, self._pos):
            self._pos += len(literal)
            return True
        self._pos = start
        return False

    def _fail(self, what: str, start: int) -> None:
        raise ManifestCfgParseError(what, self._text[start:])

    def _expect(self, literal: str) -> None:
        start = self._pos
        if not self._accept(literal):
            self._fail(f'"{literal}"', start)

    def _expect_symbol(self, table: dict, name: str):
        start = self._pos
        self._skip()
        matches = [key for key in table if self._text.startswith(key, self._pos)]
        if not matches:
            self._pos = start
            self._fail(f"<{name}>", start)
        key = max(matches, key=len)
        self._pos += len(key)
        return table[key]

    def parse(self) -> CfgPredicate:
        if not self._accept("cfg"):
            raise ManifestCfgParseError("cfg", self._text)
        self._expect("(")
        predicate = self._expect_predicate()
        self._expect(")")
        return predicate

    def _expect_predicate(self) -> CfgPredicate:
        start = self._pos
        predicate = self._predicate()
        if predicate is None:
            self._fail("<CfgPredicate>", start)
        return predicate

    def _predicate(self) -> CfgPredicate | None:
        for alternative in (self._option, self._all, self._any, self._not):
            predicate = alternative()
            if predicate is not None:
                return predicate
        return None

    def _option(self) -> CfgOption | None:
        for keyword, table in (("os", _OS_SYMBOLS), ("compiler", _COMPILER_SYMBOLS)):
            if self._accept(keyword):
                self._expect("=")
                self._expect('"')
                value = self._expect_symbol(table, keyword)
                self._expect('"')
                return value
        return None

    def _predicate_list(self, keyword: str) -> list[CfgPredicate] | None:
        if not self._accept(keyword):
            return None
        self._expect("(")
        start = self._pos
        first = self._predicate()
        if first is None:
            self._fail("<CfgPredicateList>", start)
        predicates = [first]
        while True:
            mark = self._pos
            if not self._accept(","):
                break
            predicate = self._predicate()
            if predicate is None:
                self._pos = mark
                break
            predicates.append(predicate)
        self._expect(")")
        return predicates

    def _all(self) -> CfgAll | None:
        predicates = self._predicate_list("all")
        return None if predicates is None else CfgAll(tuple(predicates))

    def _any(self) -> CfgAny | None:
        predicates = self._predicate_list("any")
        return None if predicates is None else CfgAny(tuple(predicates))

    def _not(self) -> CfgNot | None:
        if not self._accept("not"):
            return None
        self._expect("(")
        predicate = self._expect_predicate()
        self._expect(")")
        return CfgNot(predicate)


def parse_cfg(text: str) -> CfgPredicate:
    """Parse a condition such as cfg(all(os = "linux", not(compiler = "gcc")))."""
    return _Parser(text).parse()