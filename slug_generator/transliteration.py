"""Transliteration of arbitrary text into best-effort ASCII."""

from __future__ import annotations

import locale
import logging
import numbers
import re
from collections import ChainMap
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from .charmap import ASCII_LIMIT, BASE_TABLE, UNKNOWN_REPLACEMENT
from .locales import DEFAULT_CHARSET, DEFAULT_REGISTRY, LocaleRegistry, parse_locale

_LOGGER = logging.getLogger(__name__)

_UTF8_REGEX = re.compile(r"^utf-?8$", re.IGNORECASE)


class InvalidArgumentError(ValueError):
    """Raised when a value cannot be turned into text."""


class CharsetError(ValueError):
    """Raised when bytes cannot be decoded with the requested charset."""


@dataclass(frozen=True)
class DecodeFailure:
    """Returned instead of text when the input bytes cannot be decoded."""

    charset: str
    reason: str

    def __bool__(self) -> bool:
        return False


TranslitResult = Union[str, DecodeFailure]


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def to_text(value: Any, charset: str = DEFAULT_CHARSET) -> str:
    """Coerce ``value`` to ``str``.

    Sequences are joined with single spaces, mappings contribute their values,
    bytes are decoded with ``charset``. Objects without their own string form
    raise :class:`InvalidArgumentError`. Undecodable bytes and unknown
    charsets raise :class:`CharsetError`.
    """

    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, (bool, numbers.Number)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise CharsetError(str(exc)) from exc
    if isinstance(value, Mapping):
        return " ".join(to_text(item, charset) for item in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return " ".join(to_text(item, charset) for item in value)
    if _has_own_str(value):
        try:
            return str(value)
        except Exception as exc:
            raise InvalidArgumentError(
                f"Unable to convert {type(value).__name__} to string: {exc}"
            ) from exc
    if isinstance(value, Iterable):
        return " ".join(to_text(item, charset) for item in value)
    raise InvalidArgumentError(f"It's impossible to convert object `{type(value).__name__}` to string")


def _current_locale() -> Optional[str]:
    # Query only; passing no value leaves the process locale untouched.
    try:
        return locale.setlocale(locale.LC_CTYPE)
    except locale.Error:
        return None


def translit(
    value: Any,
    from_charset: Optional[str] = None,
    from_locale: Optional[str] = None,
    *,
    registry: LocaleRegistry = DEFAULT_REGISTRY,
) -> TranslitResult:
    """Transliterate ``value`` into ASCII using the table for ``from_locale``.

    Characters without a table entry are kept when they are ASCII and replaced
    by ``?`` otherwise. Returns a :class:`DecodeFailure` when byte input cannot
    be decoded with the requested charset.
    """

    if from_locale is not None:
        parsed = parse_locale(from_locale, explicit=True)
    else:
        parsed = parse_locale(_current_locale())
    charset = from_charset or parsed.charset or DEFAULT_CHARSET
    if _UTF8_REGEX.match(charset):
        charset = DEFAULT_CHARSET

    try:
        text = to_text(value, charset)
    except CharsetError as exc:
        _LOGGER.debug("Unable to decode input as %s: %s", charset, exc)
        return DecodeFailure(charset=charset, reason=str(exc))

    if not text:
        return ""

    table: Mapping[str, str] = BASE_TABLE
    profile = registry.resolve(parsed.tag)
    if profile is not None:
        _LOGGER.debug("Using locale profile %s for %s", profile.tag, parsed.tag)
        table = ChainMap(dict(profile.overrides), BASE_TABLE)
        for rule in profile.rules:
            text = rule.apply(text, table)

    parts = []
    for char in text:
        replacement = table.get(char)
        if replacement is None:
            replacement = char if ord(char) < ASCII_LIMIT else UNKNOWN_REPLACEMENT
        parts.append(replacement)
    return "".join(parts)


__all__ = [
    "CharsetError",
    "DecodeFailure",
    "InvalidArgumentError",
    "TranslitResult",
    "to_text",
    "translit",
]
