"""Generic version parsing and ordering.

Versions are a dotted numeric release followed by an optional qualifier, the
way plugin builds are versioned in a Maven style repository::

    1.0  1.2.3  1.1.0-SNAPSHOT  2.0-beta-2  1.0.Final  3.4-rc1

Ordering rules:

- Release numbers compare numerically; trailing zeros are ignored so
  ``1 == 1.0 == 1.0.0``.
- Qualifier tokens compare in this order: ``alpha`` < ``beta`` < ``milestone``
  < ``rc``/``cr`` < ``snapshot`` < release < other words < numbers.
  ``ga``, ``final`` and ``release`` are spelled-out releases and are ignored.
  ``a``, ``b`` and ``m`` are shorthands for alpha/beta/milestone when directly
  followed by a number (``1.0b2``).
- A qualifier always ends with an implicit release marker, hence
  ``1.0-alpha-SNAPSHOT < 1.0-alpha < 1.0-alpha1``.
"""

from __future__ import annotations

import re
from functools import total_ordering

from ucover.core.exceptions import MalformedVersionError

_VERSION_RE = re.compile(r"^(?P<release>\d+(?:\.\d+)*)(?P<qualifier>.*)$")
_QUALIFIER_RE = re.compile(r"^[-._+]?[A-Za-z0-9]+(?:[-._+][A-Za-z0-9]+)*$")
_TOKEN_RE = re.compile(r"\d+|[a-z]+")

# token classes, lowest first
_PRE_RELEASE = 0
_TERMINATOR = 1
_WORD = 2
_NUMBER = 3

_PRE_RELEASE_RANKS = {
    "alpha": -5,
    "beta": -4,
    "milestone": -3,
    "cr": -2,
    "rc": -2,
    "snapshot": -1,
}
_SHORTHANDS = {"a": "alpha", "b": "beta", "m": "milestone"}
_RELEASE_ALIASES = frozenset({"ga", "final", "release"})

_END = (_TERMINATOR, 0, "")

Token = tuple[int, int, str]


def _tokenize_qualifier(text: str, qualifier: str) -> tuple[Token, ...]:
    if not qualifier:
        return (_END,)
    if not _QUALIFIER_RE.match(qualifier):
        raise MalformedVersionError(text, f"invalid qualifier {qualifier!r}")

    raw = _TOKEN_RE.findall(qualifier.lower())
    tokens: list[Token] = []
    for index, token in enumerate(raw):
        if token.isdigit():
            tokens.append((_NUMBER, int(token), ""))
            continue
        followed_by_number = index + 1 < len(raw) and raw[index + 1].isdigit()
        if token in _SHORTHANDS and followed_by_number:
            token = _SHORTHANDS[token]
        if token in _RELEASE_ALIASES:
            continue
        if token in _PRE_RELEASE_RANKS:
            if token == "cr":
                token = "rc"
            tokens.append((_PRE_RELEASE, _PRE_RELEASE_RANKS[token], token))
        else:
            tokens.append((_WORD, 0, token))
    tokens.append(_END)
    return tuple(tokens)


@total_ordering
class GenericVersion:
    """Parsed, totally ordered version identifier.

    Two versions are equal exactly when their canonical forms are identical.
    """

    __slots__ = ("_text", "_release", "_qualifier")

    def __init__(self, text: str, release: tuple[int, ...], qualifier: tuple[Token, ...]):
        self._text = text
        self._release = release
        self._qualifier = qualifier

    @classmethod
    def parse(cls, text: str) -> GenericVersion:
        """Parse ``text`` into a GenericVersion.

        Raises:
            MalformedVersionError: If the text violates the version grammar.
        """
        if not isinstance(text, str):
            raise MalformedVersionError(repr(text), "not a string")
        stripped = text.strip()
        if not stripped:
            raise MalformedVersionError(text, "empty version")

        m = _VERSION_RE.match(stripped)
        if not m:
            raise MalformedVersionError(text, "must start with a number")

        release = [int(part) for part in m.group("release").split(".")]
        while release and release[-1] == 0:
            release.pop()
        qualifier = _tokenize_qualifier(text, m.group("qualifier"))
        return cls(stripped, tuple(release), qualifier)

    @property
    def text(self) -> str:
        """The version text as it was parsed."""
        return self._text

    @property
    def key(self) -> tuple:
        return (self._release, self._qualifier)

    @property
    def canonical(self) -> str:
        release = ".".join(str(n) for n in self._release) or "0"
        words = []
        for kind, number, word in self._qualifier[:-1]:
            words.append(str(number) if kind == _NUMBER else word)
        return "-".join([release, *words])

    @property
    def is_snapshot(self) -> bool:
        """True when the last qualifier token is ``snapshot``."""
        if len(self._qualifier) < 2:
            return False
        kind, _, word = self._qualifier[-2]
        return kind == _PRE_RELEASE and word == "snapshot"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericVersion):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: GenericVersion) -> bool:
        if not isinstance(other, GenericVersion):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"GenericVersion({self._text!r})"


def parse(text: str) -> GenericVersion:
    """Parse a version string, raising MalformedVersionError on bad input."""
    return GenericVersion.parse(text)


def compare(a: GenericVersion | str, b: GenericVersion | str) -> int:
    """Compare two versions.

    Returns:
        -1, 0 or 1 when ``a`` is less than, equal to or greater than ``b``.
    """
    left = a if isinstance(a, GenericVersion) else GenericVersion.parse(a)
    right = b if isinstance(b, GenericVersion) else GenericVersion.parse(b)
    if left.key < right.key:
        return -1
    if left.key > right.key:
        return 1
    return 0


VersionIdentifier = GenericVersion
