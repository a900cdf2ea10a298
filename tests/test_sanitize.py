"""
Tests for script name sanitizing.
"""

import re

import pytest

from scriptgen.core.services.sanitize import InvalidNameError, require_name, sanitize_name


class TestSanitizeName:
    def test_clean_name_unchanged(self):
        assert sanitize_name("backup_tool-2") == "backup_tool-2"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("my tool", "mytool"),
            ("../../etc/passwd", "etcpasswd"),
            ("deploy.sh", "deploysh"),
            ("rm -rf $HOME; echo", "rm-rfHOMEecho"),
            ("naïve", "nave"),
            ("tab\tname\n", "tabname"),
        ],
    )
    def test_strips_disallowed(self, raw, expected):
        assert sanitize_name(raw) == expected

    def test_matches_character_class_removal(self):
        """Result equals the input with every char outside [A-Za-z0-9_-] removed."""
        raw = "a!b@c#1_2-3 ä/\\x"
        expected = "".join(c for c in raw if re.fullmatch(r"[A-Za-z0-9_-]", c))
        assert sanitize_name(raw) == expected

    def test_all_disallowed_collapses_to_empty(self):
        assert sanitize_name("!!! ...") == ""


class TestRequireName:
    def test_returns_sanitized(self):
        assert require_name("backup tool!") == "backuptool"

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_name(self, raw):
        with pytest.raises(InvalidNameError, match="name is required"):
            require_name(raw)

    def test_collapsed_name_rejected(self):
        with pytest.raises(InvalidNameError, match="no usable characters"):
            require_name("$$$")
