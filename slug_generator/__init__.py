"""Slug generator package."""

from .config import ConfigurationError, SlugConfig, load_config
from .locales import DEFAULT_REGISTRY, LocaleProfile, LocaleRegistry
from .slug import Slugger, generate, generate_with
from .transliteration import CharsetError, DecodeFailure, InvalidArgumentError, translit

__all__ = [
    "CharsetError",
    "ConfigurationError",
    "DEFAULT_REGISTRY",
    "DecodeFailure",
    "InvalidArgumentError",
    "LocaleProfile",
    "LocaleRegistry",
    "SlugConfig",
    "Slugger",
    "generate",
    "generate_with",
    "load_config",
    "translit",
]
