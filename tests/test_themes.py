"""Tests for feedback themes."""

import pytest

from courier.feedback.themes import DISCORD_DARK, DISCORD_LIGHT, Severity, get_theme


def test_get_theme_by_name():
    assert get_theme("dark") is DISCORD_DARK
    assert get_theme("LIGHT") is DISCORD_LIGHT


def test_unknown_theme_raises():
    with pytest.raises(KeyError, match="Unknown feedback theme"):
        get_theme("neon")


def test_every_severity_has_a_colour():
    for theme in (DISCORD_DARK, DISCORD_LIGHT):
        assert {theme.colour_for(s).value for s in Severity} == {
            theme.primary.value,
            theme.secondary.value,
            theme.success.value,
            theme.warning.value,
            theme.fault_or_danger.value,
        }


def test_error_uses_fault_colour():
    assert DISCORD_DARK.colour_for(Severity.ERROR) == DISCORD_DARK.fault_or_danger
    assert DISCORD_DARK.colour_for(Severity.NEUTRAL) == DISCORD_DARK.secondary
