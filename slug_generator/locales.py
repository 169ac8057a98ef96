"""Locale profiles that adjust transliteration for a given language."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, Union

_LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DEFAULT_CHARSET = "utf-8"

MATCH_PREFIX = "prefix"
MATCH_EXACT = "exact"

MAX_REPLACEMENT_LENGTH = 4

_LOCALE_REGEX = re.compile(
    r"^([a-z]{2})(?:[-_]([a-z]{2}))?(?:\.([^@]+))?(?:@.+)?$", re.IGNORECASE
)

Replacement = Union[str, Callable[["re.Match[str]", Mapping[str, str]], str]]


@dataclass(frozen=True)
class LocaleTag:
    """A parsed ``language[-region][.charset]`` locale string."""

    language: str
    region: Optional[str] = None
    charset: Optional[str] = None

    @property
    def tag(self) -> str:
        if self.region:
            return f"{self.language}-{self.region}"
        return self.language


def parse_locale(value: Optional[str], *, explicit: bool = False) -> LocaleTag:
    """Parse ``cs_CZ.UTF-8`` or ``sr_RS@latin`` style strings.

    Unparsable values fall back to English/UTF-8, unless ``explicit`` is set:
    a tag the caller asked for is then kept as-is (lowercased) so that it only
    matches profiles by its own prefix.
    """

    if value:
        match = _LOCALE_REGEX.match(value.strip())
        if match:
            language, region, charset = match.groups()
            return LocaleTag(
                language=language.lower(),
                region=region.lower() if region else None,
                charset=charset,
            )
    if explicit and value is not None:
        _LOGGER.debug("Unable to parse locale %r, matching it verbatim", value)
        return LocaleTag(language=value.strip().lower().replace("_", "-"))
    _LOGGER.debug("Unable to parse locale %r, using %s/%s", value, DEFAULT_LANGUAGE, DEFAULT_CHARSET)
    return LocaleTag(language=DEFAULT_LANGUAGE, charset=DEFAULT_CHARSET)


@dataclass(frozen=True)
class SubstitutionRule:
    """A pattern replaced across the whole string before per-character lookup.

    ``replacement`` is either a plain string or a callable receiving the match
    and the working transliteration table.
    """

    pattern: "re.Pattern[str]"
    replacement: Replacement

    def apply(self, text: str, table: Mapping[str, str]) -> str:
        if callable(self.replacement):
            replace = self.replacement
            return self.pattern.sub(lambda match: replace(match, table), text)
        return self.pattern.sub(self.replacement, text)


def table_case(case: str) -> Callable[["re.Match[str]", Mapping[str, str]], str]:
    """Build a replacement that looks the matched text up and re-cases the result."""

    converters = {"upper": str.upper, "lower": str.lower, "title": str.title}
    try:
        convert = converters[case]
    except KeyError:
        raise ValueError(f"Unsupported table case {case!r}") from None

    def _replace(match: "re.Match[str]", table: Mapping[str, str]) -> str:
        matched = match.group(0)
        return convert(table.get(matched, matched))

    return _replace


@dataclass(frozen=True)
class LocaleProfile:
    tag: str
    match: str = MATCH_PREFIX
    overrides: Mapping[str, str] = field(default_factory=dict)
    rules: Tuple[SubstitutionRule, ...] = ()

    def __post_init__(self) -> None:
        tag = self.tag.strip().lower().replace("_", "-")
        if not tag:
            raise ValueError("Locale profile tag must not be empty")
        if self.match not in (MATCH_PREFIX, MATCH_EXACT):
            raise ValueError(f"Locale profile {tag}: unknown match mode {self.match!r}")
        for key, value in self.overrides.items():
            if len(key) != 1:
                raise ValueError(f"Locale profile {tag}: override key {key!r} must be one character")
            if not isinstance(value, str):
                raise ValueError(f"Locale profile {tag}: override for {key!r} must be a string")
            if not value.isascii() or len(value) > MAX_REPLACEMENT_LENGTH:
                raise ValueError(
                    f"Locale profile {tag}: override for {key!r} must be ASCII of at most "
                    f"{MAX_REPLACEMENT_LENGTH} characters, got {value!r}"
                )
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))
        object.__setattr__(self, "rules", tuple(self.rules))

    def matches(self, locale_tag: str) -> bool:
        if self.match == MATCH_EXACT:
            return locale_tag == self.tag
        return locale_tag.startswith(self.tag)


class LocaleRegistry:
    """Ordered collection of locale profiles; the first matching profile wins."""

    def __init__(self, profiles: Iterable[LocaleProfile] = ()) -> None:
        self._lock = threading.Lock()
        self._profiles: Tuple[LocaleProfile, ...] = tuple(profiles)

    def register(self, profile: LocaleProfile, *, first: bool = False) -> None:
        with self._lock:
            if first:
                self._profiles = (profile, *self._profiles)
            else:
                self._profiles = (*self._profiles, profile)
        _LOGGER.debug("Registered locale profile %s (%s)", profile.tag, profile.match)

    def extend(self, profiles: Iterable[LocaleProfile]) -> "LocaleRegistry":
        """Return a new registry checking ``profiles`` before this one's."""

        return LocaleRegistry((*profiles, *self._profiles))

    def resolve(self, locale_tag: str) -> Optional[LocaleProfile]:
        for profile in self._profiles:
            if profile.matches(locale_tag):
                return profile
        return None

    @property
    def profiles(self) -> Tuple[LocaleProfile, ...]:
        return self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


_UMLAUTS = {
    "Ä": "A",
    "ä": "a",
    "Ö": "O",
    "ö": "o",
    "Ü": "U",
    "ü": "u",
}

# Consonants that keep a following е/ё from being read as "ye".
_RU_CONSONANTS_UPPER = "БВГДЖЗКЛМНПРСТФХЦЧШЩ"
_RU_CONSONANTS = "бвгджзклмнпрстфхцчшщ" + _RU_CONSONANTS_UPPER

_RUSSIAN_RULES: List[SubstitutionRule] = [
    SubstitutionRule(re.compile(f"(?<![{_RU_CONSONANTS}])[её]"), "ye"),
    SubstitutionRule(re.compile(f"(?<![{_RU_CONSONANTS_UPPER}])[ЕЁ](?![а-яёy])"), "YE"),
    SubstitutionRule(re.compile(f"(?<![{_RU_CONSONANTS_UPPER}])[ЕЁ]"), "Ye"),
    SubstitutionRule(re.compile("[ЖХЦЧШЩЮЯ](?![а-яёy])"), table_case("upper")),
]

BUILTIN_PROFILES: Tuple[LocaleProfile, ...] = (
    LocaleProfile("en", MATCH_PREFIX, _UMLAUTS),
    LocaleProfile(
        "fi-fi",
        MATCH_EXACT,
        {"ä": "a", "ö": "o", "ü": "u", "Ä": "A", "Ö": "O"},
    ),
    LocaleProfile("fr", MATCH_PREFIX, {"Æ": "Ae", **_UMLAUTS, "'": "-", "’": "-"}),
    LocaleProfile("is-is", MATCH_EXACT, {"Æ": "Ae"}),
    LocaleProfile("ua", MATCH_PREFIX, {"и": "y", "ѣ": "i"}),
    LocaleProfile("ru", MATCH_PREFIX, {"Ї": "I", "ї": "i"}, tuple(_RUSSIAN_RULES)),
)

DEFAULT_REGISTRY = LocaleRegistry(BUILTIN_PROFILES)

__all__ = [
    "BUILTIN_PROFILES",
    "DEFAULT_CHARSET",
    "DEFAULT_LANGUAGE",
    "DEFAULT_REGISTRY",
    "LocaleProfile",
    "LocaleRegistry",
    "LocaleTag",
    "MATCH_EXACT",
    "MATCH_PREFIX",
    "MAX_REPLACEMENT_LENGTH",
    "SubstitutionRule",
    "parse_locale",
    "table_case",
]
