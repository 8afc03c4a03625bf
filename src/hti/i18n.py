"""Localization: language tables and localizable text.

A :class:`Language` is a flat ``key -> string`` table parsed from a JSON
object.  :class:`LanguageManager` holds the installed languages and the
active one.  :class:`Text` is an immutable sequence of literal strings and
:class:`LocalizingString` keys; it resolves against a manager and caches the
result for as long as the same language stays active.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Iterator, Union

from hti.errors import LanguageLoadError

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LANGUAGE",
    "Language",
    "LanguageManager",
    "LocalizingString",
    "Text",
    "TextLike",
]

DEFAULT_LANGUAGE = "default"


class Language:
    """A single language table."""

    def __init__(self, content: dict[str, str] | None = None) -> None:
        self._content: dict[str, str] = dict(content or {})

    @classmethod
    def from_json(cls, content: str | bytes) -> Language:
        """Parse a JSON object into a language table.

        String values are used as is; numbers and booleans are converted to
        their JSON spelling and ``null`` to ``""``.  Nested arrays or objects
        are rejected.

        Raises:
            LanguageLoadError: if *content* is not valid JSON or not an
                object of scalar values.
        """
        try:
            root = json.loads(content)
        except ValueError as exc:
            raise LanguageLoadError(f"Malformed language JSON: {exc}") from exc

        if not isinstance(root, dict):
            raise LanguageLoadError(
                f"Language root must be a JSON object, got {type(root).__name__}"
            )

        table: dict[str, str] = {}
        for key, value in root.items():
            if isinstance(value, str):
                table[key] = value
            elif value is None:
                table[key] = ""
            elif isinstance(value, (bool, int, float)):
                table[key] = json.dumps(value)
            else:
                raise LanguageLoadError(
                    f"Value for {key!r} must be a scalar, got {type(value).__name__}"
                )
        return cls(table)

    @classmethod
    def from_file(cls, path: str | Path) -> Language:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LanguageLoadError(f"Cannot read language file {path}: {exc}") from exc
        return cls.from_json(content)

    @classmethod
    def from_resource(cls, package: str, resource: str) -> Language:
        """Load a table shipped as package data, e.g. ``("hti", "locales/en.json")``."""
        try:
            content = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
        except (OSError, ModuleNotFoundError, UnicodeDecodeError) as exc:
            raise LanguageLoadError(
                f"Cannot read language resource {package}:{resource}: {exc}"
            ) from exc
        return cls.from_json(content)

    def __len__(self) -> int:
        return len(self._content)

    def __contains__(self, key: object) -> bool:
        return key in self._content

    def localize(self, key: str) -> str:
        """Return the string for *key*, or *key* itself if it is missing."""
        return self._content.get(key, key)


class LanguageManager:
    """Installed languages plus the currently active one.

    A ``"default"`` language with no entries is installed and active from
    the start, so every key resolves to itself until a real table is
    switched in.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Language] = {DEFAULT_LANGUAGE: Language()}
        self._current: str = DEFAULT_LANGUAGE

    @property
    def current(self) -> str:
        return self._current

    @property
    def active(self) -> Language:
        return self._languages[self._current]

    def names(self) -> list[str]:
        return list(self._languages)

    def install(self, name: str, language: Language) -> None:
        self._languages[name] = language
        logger.debug("Installed language %r (%d entries)", name, len(language))

    def load(self, name: str, content: str | bytes) -> None:
        """Parse *content* as JSON and install it as *name*.

        On failure nothing is installed and the active language is unchanged.
        """
        self.install(name, Language.from_json(content))

    def load_file(self, name: str, path: str | Path) -> None:
        self.install(name, Language.from_file(path))

    def load_resource(self, name: str, package: str, resource: str) -> None:
        self.install(name, Language.from_resource(package, resource))

    def switch(self, name: str) -> None:
        """Make *name* the active language; unknown names are ignored."""
        if name not in self._languages:
            logger.debug("Ignoring switch to unknown language %r", name)
            return
        self._current = name

    def localize(self, key: str) -> str:
        return self.active.localize(key)

    def resolve(self, name: str, key: str) -> str:
        """Look *key* up in the language *name*, active or not.

        Falls back to *key* itself when the language or the key is missing.
        """
        language = self._languages.get(name)
        if language is None:
            return key
        return language.localize(key)


class LocalizingString:
    """A lookup key resolved against the active language."""

    __slots__ = ("key",)

    def __init__(self, key: str) -> None:
        self.key = key

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LocalizingString) and other.key == self.key

    def __hash__(self) -> int:
        return hash(("LocalizingString", self.key))

    def __repr__(self) -> str:
        return f"LocalizingString({self.key!r})"

    def __add__(self, other: TextLike) -> Text:
        return Text(self) + other

    def __radd__(self, other: TextLike) -> Text:
        return Text.of(other) + Text(self)

    def localize(self, languages: LanguageManager) -> str:
        return languages.localize(self.key)


_Part = Union[str, LocalizingString]


class Text:
    """Literal strings and lookup keys, concatenated.

    ``Text`` values are immutable: ``+`` and ``+=`` build a new value.  The
    resolved string is cached against the identity of the active
    :class:`Language`, so switching (or reloading) the active language is
    picked up on the next :meth:`localize` without explicit invalidation.
    """

    __slots__ = ("_parts", "_cache", "_cache_language")

    def __init__(self, *parts: TextLike) -> None:
        flat: list[_Part] = []
        for part in parts:
            if isinstance(part, Text):
                flat.extend(part._parts)
            elif isinstance(part, (str, LocalizingString)):
                flat.append(part)
            else:
                raise TypeError(f"Cannot build Text from {type(part).__name__}")
        self._parts: tuple[_Part, ...] = tuple(flat)
        self._cache: str = ""
        self._cache_language: Language | None = None

    @classmethod
    def of(cls, value: TextLike) -> Text:
        if isinstance(value, Text):
            return value
        return cls(value)

    @property
    def parts(self) -> tuple[_Part, ...]:
        return self._parts

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[_Part]:
        return iter(self._parts)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Text) and other._parts == self._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __repr__(self) -> str:
        return f"Text{self._parts!r}"

    def __add__(self, other: TextLike) -> Text:
        return Text(self, Text.of(other))

    def __radd__(self, other: TextLike) -> Text:
        return Text(Text.of(other), self)

    def localize(self, languages: LanguageManager) -> str:
        active = languages.active
        if self._cache_language is not active:
            self._cache = "".join(
                part if isinstance(part, str) else part.localize(languages)
                for part in self._parts
            )
            self._cache_language = active
        return self._cache


TextLike = Union[Text, str, LocalizingString]
