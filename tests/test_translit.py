"""Tests for the transliteration step."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from slug_generator import transliteration as translit_module
from slug_generator.transliteration import (
    CharsetError,
    DecodeFailure,
    InvalidArgumentError,
    to_text,
    translit,
)


class Title:
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value


class Opaque:
    pass


def test_base_table_uses_digraphs_for_umlauts():
    assert translit("Ärger", from_locale="cs_CZ.UTF-8") == "Aerger"


def test_english_overrides_umlauts():
    assert translit("Ärger Öl Über", from_locale="en") == "Arger Ol Uber"


def test_overrides_do_not_leak_between_calls():
    assert translit("ä", from_locale="en_US") == "a"
    assert translit("ä", from_locale="cs") == "ae"


@pytest.mark.parametrize(
    "locale, expected",
    [
        ("fi_FI", "a"),
        ("fi-fi", "a"),
        ("fi", "ae"),
        ("fi_SE", "ae"),
    ],
)
def test_finnish_profile_requires_region(locale, expected):
    assert translit("ä", from_locale=locale) == expected


def test_french_apostrophes_become_hyphens():
    assert translit("l'été", from_locale="fr_FR") == "l-ete"
    assert translit("l’Æther", from_locale="fr") == "l-Aether"


def test_icelandic_ligature():
    assert translit("Æ", from_locale="is_IS") == "Ae"
    assert translit("Æ", from_locale="cs") == "A"


def test_ukrainian_overrides():
    assert translit("и", from_locale="ua") == "y"
    assert translit("и", from_locale="cs") == "i"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("поезд", "poyezd"),
        ("лес", "les"),
        ("Ёлка", "Yelka"),
        ("ЕЛЬ", "YEL"),
        ("ЖУК", "ZHUK"),
        ("Жук", "Zhuk"),
        ("ЩИ", "SHCHI"),
        ("Ї", "I"),
        ("Привет", "Privet"),
    ],
)
def test_russian_substitutions(text, expected):
    assert translit(text, from_locale="ru_RU.UTF-8") == expected


def test_russian_rules_only_apply_to_russian():
    assert translit("ЖУК", from_locale="cs") == "ZhUK"
    assert translit("поезд", from_locale="cs") == "poezd"


def test_greek_and_georgian():
    assert translit("Ελληνικά", from_locale="en") == "Ellinika"
    assert translit("ქართული", from_locale="en") == "kartuli"


def test_symbols_and_deletions():
    assert translit("10 € – ½", from_locale="en") == "10 EUR - 1/2"
    assert translit("объём", from_locale="cs") == "obem"


def test_unknown_characters_become_question_marks():
    assert translit("日本 ok", from_locale="en") == "?? ok"


def test_empty_input():
    assert translit("", from_locale="en") == ""
    assert translit(None, from_locale="en") == ""


def test_sequences_are_joined_with_spaces():
    assert translit(["Ahoj", "světe"], from_locale="cs") == "Ahoj svete"
    assert translit(("a", 1, 2.5), from_locale="cs") == "a 1 2.5"
    assert translit({"first": "Zdeněk"}, from_locale="cs") == "Zdenek"


def test_objects_with_string_form():
    assert translit(Title("Čau"), from_locale="cs") == "Cau"


def test_objects_without_string_form_are_rejected():
    with pytest.raises(InvalidArgumentError) as excinfo:
        translit(Opaque(), from_locale="cs")
    assert "Opaque" in str(excinfo.value)


def test_bytes_are_decoded_with_the_given_charset():
    raw = "žluť".encode("iso-8859-2")
    assert translit(raw, from_charset="iso-8859-2", from_locale="cs") == "zlut"


def test_charset_from_locale_is_used_for_bytes():
    raw = "žluť".encode("iso-8859-2")
    assert translit(raw, from_locale="cs_CZ.iso-8859-2") == "zlut"


def test_undecodable_bytes_return_failure():
    result = translit(b"\xff\xfe\xfa", from_locale="en")
    assert isinstance(result, DecodeFailure)
    assert not result
    assert result.charset == "utf-8"


def test_unknown_charset_returns_failure():
    result = translit(b"abc", from_charset="no-such-charset", from_locale="en")
    assert isinstance(result, DecodeFailure)


def test_locale_falls_back_to_process_setting(monkeypatch):
    monkeypatch.setattr(translit_module, "_current_locale", lambda: "en_US.UTF-8")
    assert translit("ä") == "a"
    monkeypatch.setattr(translit_module, "_current_locale", lambda: "de_DE.UTF-8")
    assert translit("ä") == "ae"


def test_unparsable_process_locale_means_english(monkeypatch):
    monkeypatch.setattr(translit_module, "_current_locale", lambda: None)
    assert translit("ä") == "a"


def test_explicit_locale_with_modifier_keeps_its_language():
    assert translit("Ärger", from_locale="de_DE@euro") == "Aerger"
    assert translit("ЖУК", from_locale="ru_RU@x") == "ZHUK"


def test_explicit_unparsable_locale_does_not_become_english():
    assert translit("Ärger", from_locale="POSIX") == "Aerger"
    assert translit("Ärger", from_locale="C") == "Aerger"


def test_to_text_wraps_decoding_errors():
    with pytest.raises(CharsetError):
        to_text(b"\xff", "utf-8")
    with pytest.raises(CharsetError):
        to_text(b"abc", "no-such-charset")


def _broken_items():
    yield "ok"
    raise KeyError("missing")


def test_errors_from_iterated_input_propagate():
    with pytest.raises(KeyError):
        translit(_broken_items(), from_locale="en")


def test_to_text_joins_generators():
    assert to_text(word for word in ("a", "b")) == "a b"


def test_concurrent_calls_with_different_locales():
    inputs = [("Ärger", "en"), ("Ärger", "cs"), ("ЖУК", "ru"), ("ЖУК", "cs")] * 50
    expected = {"en": "Arger", "cs": "Aerger", "ru": "ZHUK"}

    def run(item):
        text, locale = item
        return item, translit(text, from_locale=locale)

    with ThreadPoolExecutor(max_workers=8) as pool:
        for (text, locale), result in pool.map(run, inputs):
            if text == "ЖУК":
                assert result == ("ZHUK" if locale == "ru" else "ZhUK")
            else:
                assert result == expected[locale]
