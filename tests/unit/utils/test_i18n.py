from __future__ import annotations

"""
Unit tests for the Internationalization (i18n) Utility.

Verifies:
1. Nested key resolution and interpolation.
2. Fallback to the key itself on missing entries or locales.
"""

from treefs.utils.i18n import I18n, i18n


def test_default_locale_loaded():
    assert i18n.is_loaded is True
    assert i18n.locale == "en"


def test_nested_key_with_interpolation():
    assert i18n.t("shell.size", size=42) == "Total size: 42 bytes"
    assert i18n.t("shell.prompt", name="docs") == "docs> "


def test_missing_key_returns_key():
    assert i18n.t("no.such.key") == "no.such.key"
    # A branch is not a message
    assert i18n.t("shell") == "shell"


def test_missing_placeholder_returns_template():
    assert i18n.t("shell.size", wrong=1) == "Total size: {size} bytes"


def test_missing_locale_falls_back_to_keys():
    catalog = I18n("xx")

    assert catalog.is_loaded is False
    assert catalog.t("shell.bye") == "shell.bye"
