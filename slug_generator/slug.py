"""Turn arbitrary text into a URL-safe slug."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional

from unidecode import unidecode

from .config import DEFAULT_DELIMITER, DEFAULT_LOCALE, SlugConfig
from .locales import DEFAULT_REGISTRY, LocaleRegistry
from .transliteration import DecodeFailure, translit

_LOGGER = logging.getLogger(__name__)

_DISALLOWED_REGEX = re.compile(r"[^a-zA-Z0-9/_|+ -]+")
_SEPARATOR_CLASS = r"/_|+ \-"


def _normalize(text: str, config: SlugConfig) -> str:
    delimiter = config.delimiter
    escaped = re.escape(delimiter)

    def _to_delimiter(_match: "re.Match[str]") -> str:
        return delimiter

    for item in config.remove:
        text = text.replace(item, " ")
    text = unidecode(text)
    text = _DISALLOWED_REGEX.sub(_to_delimiter, text)
    text = re.sub(f"{escaped}+", _to_delimiter, text)
    text = text.strip(delimiter).lower()
    # Runs may mix separators with the delimiter itself.
    text = re.sub(f"(?:[{_SEPARATOR_CLASS}]|{escaped})+", _to_delimiter, text)
    return text.strip().strip(delimiter)


def generate_with(
    value: Any,
    config: SlugConfig,
    *,
    registry: LocaleRegistry = DEFAULT_REGISTRY,
) -> str:
    """Build a slug from ``value`` using an existing :class:`SlugConfig`."""

    ascii_text = translit(value, from_locale=config.locale, registry=registry)
    if isinstance(ascii_text, DecodeFailure):
        _LOGGER.warning("Cannot decode input as %s: %s", ascii_text.charset, ascii_text.reason)
        return ""
    return _normalize(ascii_text, config)


def generate(
    value: Any,
    remove: Optional[Iterable[str]] = (),
    delimiter: str = DEFAULT_DELIMITER,
    locale: Optional[str] = DEFAULT_LOCALE,
    *,
    registry: LocaleRegistry = DEFAULT_REGISTRY,
) -> str:
    """Generate a slug such as ``what-the-hell-is-it``.

    ``remove`` lists literal substrings that are blanked out before
    normalization. The result only contains ``[a-z0-9]`` and ``delimiter``
    and never starts, ends with or repeats the delimiter. ``locale=None``
    uses the process ``LC_CTYPE`` setting.
    """

    config = SlugConfig(remove=remove, delimiter=delimiter, locale=locale)
    return generate_with(value, config, registry=registry)


class Slugger:
    """Reusable slug factory bound to one configuration."""

    def __init__(
        self,
        config: Optional[SlugConfig] = None,
        *,
        registry: LocaleRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.config = config or SlugConfig()
        self.registry = registry

    def __call__(self, value: Any) -> str:
        return generate_with(value, self.config, registry=self.registry)


__all__ = ["Slugger", "generate", "generate_with"]
