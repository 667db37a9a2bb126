"""
Tests for company name normalization.
"""

import re

import pytest
from storyguard.scrubbing.normalization import (
    SUFFIX_TAIL_PATTERN,
    normalize_company_name,
    strip_corporate_suffix,
)


class TestNormalizeCompanyName:
    """Test suite for suffix stripping and canonicalization."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Acme Corp.", "acme"),
            ("Globex Holdings, Inc", "globex"),
            ("Stark-Wayne Ltd", "stark wayne"),
            ("Initech Corporation", "initech"),
            ("Umbrella GmbH", "umbrella"),
        ],
    )
    def test_strips_suffixes(self, name, expected):
        """Test that corporate suffixes and separators are removed."""
        assert normalize_company_name(name) == expected

    def test_empty_name(self):
        """Test that an empty name normalizes to an empty string."""
        assert normalize_company_name("") == ""

    def test_suffix_inside_word_is_kept(self):
        """Test that suffix letters inside a word are not stripped."""
        assert normalize_company_name("Cobalt Agency") == "cobalt agency"


class TestStripCorporateSuffix:
    """Test suite for suffix removal that keeps the written form."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Coca-Cola Company", "Coca-Cola"),
            ("Globex Holdings, Inc.", "Globex"),
            ("Stark-Wayne Ltd", "Stark-Wayne"),
            ("Acme", "Acme"),
            ("Group", "Group"),
        ],
    )
    def test_strips_trailing_suffixes(self, name, expected):
        """Test that only trailing suffixes go and punctuation stays."""
        assert strip_corporate_suffix(name) == expected

    def test_empty_name(self):
        """Test that an empty name stays empty."""
        assert strip_corporate_suffix("") == ""


class TestSuffixTailPattern:
    """Test suite for the suffix consumed after a company-name match."""

    def setup_method(self):
        self.pattern = re.compile(rf"Acme{SUFFIX_TAIL_PATTERN}", re.IGNORECASE)

    @pytest.mark.parametrize("text", ["Acme Corp", "Acme CORPORATION", "Acme Ltd", "Acme GmbH"])
    def test_written_suffix_is_consumed(self, text):
        """Test capitalized and all-caps suffixes."""
        assert self.pattern.match(text).group(0) == text

    @pytest.mark.parametrize("text", ["Acme limited churn", "Acme company culture", "acme group"])
    def test_lower_case_word_is_kept(self, text):
        """Test that an ordinary lower-case word after the name is not a suffix."""
        assert self.pattern.match(text).group(0).lower() == "acme"
