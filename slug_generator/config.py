"""Configuration loading utilities for the slug generator."""

from __future__ import annotations

import logging
import os
import pathlib
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .locales import (
    DEFAULT_REGISTRY,
    MATCH_PREFIX,
    LocaleProfile,
    LocaleRegistry,
    SubstitutionRule,
    table_case,
)
from .transliteration import InvalidArgumentError

_LOGGER = logging.getLogger(__name__)

DEFAULT_DELIMITER = "-"
DEFAULT_LOCALE = "cs_CZ.UTF-8"
DEFAULT_CONFIG_PATH = pathlib.Path(
    os.environ.get("SLUG_GENERATOR_CONFIG", "/etc/slug_generator/config.yml")
)


class ConfigurationError(RuntimeError):
    """Raised when the provided configuration file is invalid."""


def normalize_remove(remove: Any) -> Tuple[str, ...]:
    """Turn whatever the caller passed as a removal list into a tuple of strings."""

    if remove is None:
        return ()
    if isinstance(remove, str):
        return (remove,) if remove else ()
    try:
        items = list(remove)
    except TypeError:
        _LOGGER.debug("Ignoring non-iterable removal list %r", remove)
        return ()
    return tuple(str(item) for item in items if item is not None and str(item))


@dataclass(slots=True)
class SlugConfig:
    remove: Tuple[str, ...] = ()
    delimiter: str = DEFAULT_DELIMITER
    locale: Optional[str] = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        self.remove = normalize_remove(self.remove)
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise InvalidArgumentError(f"Delimiter must be a single character, got {self.delimiter!r}")
        if not self.delimiter.isascii() or self.delimiter.isalnum():
            raise InvalidArgumentError(
                f"Delimiter must be a non-alphanumeric ASCII character, got {self.delimiter!r}"
            )
        if self.locale is not None and not isinstance(self.locale, str):
            raise InvalidArgumentError(f"Locale must be a string, got {type(self.locale).__name__}")


@dataclass(slots=True)
class Settings:
    slug: SlugConfig = field(default_factory=SlugConfig)
    registry: LocaleRegistry = DEFAULT_REGISTRY


def _load_yaml(path: pathlib.Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Configuration file {path} does not exist") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Unable to parse YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Top level of configuration must be a mapping")
    return data


def _build_rule(tag: str, entry: Any) -> SubstitutionRule:
    if not isinstance(entry, dict) or "pattern" not in entry:
        raise ConfigurationError(f"Locale {tag}: rules must be mappings with a 'pattern'")
    try:
        pattern = re.compile(str(entry["pattern"]))
    except re.error as exc:
        raise ConfigurationError(f"Locale {tag}: invalid pattern {entry['pattern']!r}: {exc}") from exc
    if "table_case" in entry:
        try:
            return SubstitutionRule(pattern, table_case(str(entry["table_case"])))
        except ValueError as exc:
            raise ConfigurationError(f"Locale {tag}: {exc}") from exc
    replacement = entry.get("replacement")
    if not isinstance(replacement, str):
        raise ConfigurationError(f"Locale {tag}: rule needs a 'replacement' string or 'table_case'")
    return SubstitutionRule(pattern, replacement)


def _build_profile(entry: Any) -> LocaleProfile:
    if not isinstance(entry, dict):
        raise ConfigurationError("Locale entries must be mappings")
    tag = entry.get("tag")
    if not isinstance(tag, str) or not tag:
        raise ConfigurationError("Locale entries need a 'tag'")
    overrides = entry.get("overrides", {})
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Locale {tag}: overrides must be a mapping")
    rules_raw = entry.get("rules", [])
    if not isinstance(rules_raw, list):
        raise ConfigurationError(f"Locale {tag}: rules must be a list")
    rules = tuple(_build_rule(tag, rule) for rule in rules_raw)
    try:
        return LocaleProfile(
            tag=tag,
            match=entry.get("match", MATCH_PREFIX),
            overrides={str(key): value for key, value in overrides.items()},
            rules=rules,
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def load_config(path: Optional[pathlib.Path] = None) -> Settings:
    path = path or DEFAULT_CONFIG_PATH
    raw = _load_yaml(path)

    remove = raw.get("remove", [])
    if remove is not None and not isinstance(remove, list):
        raise ConfigurationError("remove must be a list when provided")

    try:
        slug_config = SlugConfig(
            remove=tuple(remove or ()),
            delimiter=raw.get("delimiter", DEFAULT_DELIMITER),
            locale=raw.get("locale", DEFAULT_LOCALE),
        )
    except InvalidArgumentError as exc:
        raise ConfigurationError(str(exc)) from exc

    locales_raw = raw.get("locales", [])
    if not isinstance(locales_raw, list):
        raise ConfigurationError("locales must be a list when provided")
    profiles: List[LocaleProfile] = [_build_profile(entry) for entry in locales_raw]
    registry = DEFAULT_REGISTRY.extend(profiles) if profiles else DEFAULT_REGISTRY
    _LOGGER.debug("Loaded %s with %s extra locale profile(s)", path, len(profiles))
    return Settings(slug=slug_config, registry=registry)


__all__ = [
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DELIMITER",
    "DEFAULT_LOCALE",
    "Settings",
    "SlugConfig",
    "load_config",
    "normalize_remove",
]
