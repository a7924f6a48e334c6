from __future__ import annotations

import pytest

from domain_registry.validate import MAX_DOMAIN_LENGTH, is_valid_domain


@pytest.mark.parametrize(
    "name",
    [
        "a.b",
        "example.com",
        "example.org",
        "user1domain.com",
        "EXAMPLE.COM",
        "123.456",
        "a-b.com",
        "my-site.c-o",
        "x" * 100 + "." + "y" * 100,
    ],
)
def test_accepts_well_formed_names(name: str) -> None:
    assert is_valid_domain(name) is True


@pytest.mark.parametrize(
    "name",
    [
        "",
        ".a",
        "a.",
        "a..b",
        ".example.com",
        "example.com.",
        "example..com",
        "-a.b",
        "a-.b",
        "a.-b",
        "a.b-",
        "-.b",
        ".",
        "-",
    ],
)
def test_rejects_separator_and_hyphen_boundaries(name: str) -> None:
    assert is_valid_domain(name) is False


@pytest.mark.parametrize(
    "name",
    [
        "example-com",
        "example*com",
        "example?com",
        "example]com",
        "exampleЪcom",
        "example com",
        "examplecom",
    ],
)
def test_rejects_names_without_a_single_separator_or_with_bad_chars(name: str) -> None:
    assert is_valid_domain(name) is False


@pytest.mark.parametrize("bad", ["*", "?", "]", " ", "Ъ", "é", "_", "/", "\t", "\x00"])
def test_rejects_any_illegal_char_even_with_one_separator(bad: str) -> None:
    assert is_valid_domain(f"exa{bad}mple.com") is False
    assert is_valid_domain(f"example.c{bad}om") is False


def test_two_separators_is_rejected_even_when_well_spaced() -> None:
    # Only a single label pair is registrable.
    assert is_valid_domain("www.example.com") is False


def test_length_bound() -> None:
    at_limit = "a" * (MAX_DOMAIN_LENGTH - 4) + ".com"
    assert len(at_limit) == MAX_DOMAIN_LENGTH
    assert is_valid_domain(at_limit) is True

    over = "a" * (MAX_DOMAIN_LENGTH - 3) + ".com"
    assert len(over) == MAX_DOMAIN_LENGTH + 1
    assert is_valid_domain(over) is False

    assert is_valid_domain("a" * 254 + ".com") is False


@pytest.mark.parametrize("value", [None, 123, b"example.com", ["example.com"], 1.5])
def test_non_string_input_is_rejected_not_raised(value: object) -> None:
    assert is_valid_domain(value) is False
