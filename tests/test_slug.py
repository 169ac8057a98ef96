"""Tests for slug generation."""

import re

import pytest

from slug_generator import InvalidArgumentError, SlugConfig, Slugger, generate, generate_with
from slug_generator import transliteration as translit_module
from slug_generator.slug import _normalize

SLUG_REGEX = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

SAMPLES = [
    "? What ~!# the &&& hell --- is ... it?????",
    "Héllo Wörld",
    "Příliš žluťoučký kůň úpěl ďábelské ódy",
    "Straße über alles",
    "Ελληνικά γράμματα",
    "ქართული ენა",
    "Привет, мир!",
    "a/b|c+d_e f-g",
    "  --x--  ",
    "日本語",
    "™ © ®",
    "",
]


def test_noise_is_collapsed():
    assert generate("? What ~!# the &&& hell --- is ... it?????") == "what-the-hell-is-it"


def test_default_locale_uses_base_table():
    assert generate("Héllo Wörld") == "hello-woerld"


def test_english_locale_drops_umlaut_marks():
    assert generate("Héllo Wörld", locale="en") == "hello-world"
    assert generate("Ärger", locale="en") == "arger"


def test_russian():
    assert generate("Привет мир", locale="ru") == "privet-mir"
    assert generate("Ёлка и поезд", locale="ru_RU.UTF-8") == "yelka-i-poyezd"


def test_czech_sentence():
    assert generate("Příliš žluťoučký kůň úpěl ďábelské ódy") == "prilis-zlutoucky-kun-upel-dabelske-ody"


def test_empty_input():
    assert generate("", remove=[], delimiter="-") == ""


@pytest.mark.parametrize("text", ["?!?", "日本語", "   ", "--- ___ ///"])
def test_symbol_only_input_gives_empty_slug(text):
    assert generate(text) == ""


def test_custom_delimiter_recollapses_separators():
    assert generate("a//b__c  d", delimiter="_") == "a_b_c_d"


def test_delimiter_outside_separator_set_is_not_doubled():
    assert generate("a.-b", delimiter=".") == "a.b"
    assert generate(".a b.", delimiter=".") == "a.b"


def test_space_delimiter():
    assert generate(" a b ", delimiter=" ") == "a b"
    assert generate("a--b", delimiter=" ") == "a b"


def test_backslash_delimiter():
    assert generate("a b\\c", delimiter="\\") == "a\\b\\c"
    assert generate("\\\\x", delimiter="\\") == "x"


def test_separators_become_delimiter():
    assert generate("a/b|c+d_e f-g") == "a-b-c-d-e-f-g"


def test_remove_list_blanks_substrings():
    assert generate("foo[BAD]bar", remove=["[BAD]"]) == "foo-bar"


def test_remove_list_is_applied_in_order():
    assert generate("abcd", remove=["bc", "abd"]) == "a-d"
    assert generate("abcd", remove=["abcd", "bc"]) == ""


def test_remove_matches_transliterated_text():
    assert generate("Ärger im Büro", remove=["Aerger"]) == "im-buero"


@pytest.mark.parametrize("remove", [None, (), 42, [None, ""]])
def test_malformed_remove_list_is_ignored(remove):
    assert generate("Hello World", remove=remove) == "hello-world"


def test_single_string_remove():
    assert generate("Hello World", remove="World") == "hello"


@pytest.mark.parametrize("delimiter", ["", "--", "a", "7", "ž"])
def test_invalid_delimiter(delimiter):
    with pytest.raises(InvalidArgumentError):
        generate("Hello", delimiter=delimiter)


def test_sequence_input():
    assert generate(["Hello", "World"]) == "hello-world"


def test_undecodable_bytes_produce_no_slug():
    assert generate(b"\xff\xfe") == ""


def test_locale_modifier_is_ignored():
    assert generate("Ärger", locale="de_DE@euro") == "aerger"


def test_none_locale_uses_process_setting(monkeypatch):
    monkeypatch.setattr(translit_module, "_current_locale", lambda: "en_US.UTF-8")
    assert generate("Ärger", locale=None) == "arger"
    assert Slugger(SlugConfig(locale=None))("Wörld") == "world"


def test_locale_must_be_text():
    with pytest.raises(InvalidArgumentError):
        SlugConfig(locale=42)


def test_errors_from_iterated_input_propagate():
    def items():
        yield "ok"
        raise KeyError("missing")

    with pytest.raises(KeyError):
        generate(items())


def test_bytes_input():
    assert generate("Čau světe".encode("utf-8")) == "cau-svete"


@pytest.mark.parametrize("text", SAMPLES)
def test_output_charset(text):
    slug = generate(text)
    assert slug == "" or SLUG_REGEX.match(slug)


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("locale", ["cs_CZ.UTF-8", "en", "fr", "ru"])
def test_idempotent(text, locale):
    slug = generate(text, locale=locale)
    assert generate(slug, locale=locale) == slug


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent_with_underscore(text):
    slug = generate(text, delimiter="_")
    assert generate(slug, delimiter="_") == slug
    assert "__" not in slug
    assert not slug.startswith("_") and not slug.endswith("_")


def test_leftover_unicode_is_transliterated():
    assert _normalize("Crème brûlée", SlugConfig()) == "creme-brulee"


def test_generate_with_config():
    config = SlugConfig(remove=("draft",), delimiter="_", locale="en")
    assert generate_with("Über draft Plan", config) == "uber_plan"


def test_slugger_reuses_config():
    slugger = Slugger(SlugConfig(delimiter="+", locale="en"))
    assert slugger("Hello Wörld") == "hello+world"
    assert slugger("a - b") == "a+b"
    assert Slugger()("Wörld") == "woerld"
