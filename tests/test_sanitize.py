"""Tests for sanitize_filename."""

import pytest

from fade_compendiums import sanitize_filename


def test_sanitize_plain_name():
    assert sanitize_filename("Goblin") == "Goblin"


def test_sanitize_spaces():
    assert sanitize_filename("Goblin Chief") == "Goblin_Chief"


def test_sanitize_windows_invalid_chars():
    assert sanitize_filename('a<b>c:d"e|f?g*h\\i/j') == "a_b_c_d_e_f_g_h_i_j"


def test_sanitize_ampersand_run_collapses():
    assert sanitize_filename("Salt & Pepper") == "Salt_Pepper"


def test_sanitize_collapses_existing_underscores():
    assert sanitize_filename("a__b___c") == "a_b_c"


def test_sanitize_strips_edges():
    assert sanitize_filename("  /Orc/  ") == "Orc"
    assert sanitize_filename("__Orc__") == "Orc"


def test_sanitize_keeps_unicode():
    assert sanitize_filename("Épée Noire") == "Épée_Noire"


@pytest.mark.parametrize("value", ["", None, 42, ["a"], "   ", "___", "<>"])
def test_sanitize_fallback(value):
    assert sanitize_filename(value) == "unnamed"


@pytest.mark.parametrize(
    "value",
    ["Goblin Chief", " a & b ", "x__y", "<<>>", "Dragon: Red / Ancient", "tab\there", "_"],
)
def test_sanitize_is_idempotent(value):
    once = sanitize_filename(value)
    assert sanitize_filename(once) == once
