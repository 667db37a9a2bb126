"""
Tests for the company scrubber (replacement engine).
"""

import pytest

from storyguard.models.account import Account, Contact
from storyguard.models.content import ScrubConfig
from storyguard.scrubbing.company_scrubber import CompanyScrubber


@pytest.fixture
def scrubber() -> CompanyScrubber:
    return CompanyScrubber()


class TestScrubForAccount:
    """Test suite for the four-step account scrub."""

    def test_longest_match_leaves_no_dangling_suffix(self, scrubber, acme_account):
        """Test that "Acme Corporation" is replaced as a whole."""
        result = scrubber.scrub_for_account(acme_account, "Acme Corporation works with Acme.")

        assert result.scrubbed_text == "the client works with the client."
        assert result.replacements_made == 2
        assert "Corporation" not in result.scrubbed_text

    def test_lower_case_suffix_word_is_prose(self, scrubber, acme_account):
        """Test that a lower-case suffix word after the name survives."""
        result = scrubber.scrub_for_account(acme_account, "Acme limited churn by 40% last year.")

        assert result.scrubbed_text == "the client limited churn by 40% last year."
        assert result.replacements_made == 1

    def test_all_caps_suffix_is_consumed(self, scrubber, acme_account):
        """Test that "ACME CORPORATION" leaves no suffix behind."""
        result = scrubber.scrub_for_account(acme_account, "ACME CORPORATION signed.")
        assert result.scrubbed_text == "the client signed."

    def test_hyphenated_name_without_suffix(self, scrubber):
        """Test that the bare brand of a hyphenated name is scrubbed."""
        account = Account(id="acc_cc", name="Coca-Cola Company", normalized_name="coca cola")
        result = scrubber.scrub_for_account(
            account, "Coca-Cola cut onboarding in half. Coca Cola agreed."
        )

        assert result.scrubbed_text == "the client cut onboarding in half. the client agreed."
        assert result.replacements_made == 2

    def test_possessive_is_consumed(self, scrubber, acme_account):
        """Test that a possessive leaves no orphaned 's."""
        result = scrubber.scrub_for_account(acme_account, "Acme's platform is excellent.")

        assert result.scrubbed_text == "the client platform is excellent."
        assert result.replacements_made == 1

    def test_typographic_possessive_is_consumed(self, scrubber, acme_account):
        """Test the curly apostrophe form of the possessive."""
        result = scrubber.scrub_for_account(acme_account, "Acme’s platform is excellent.")
        assert result.scrubbed_text == "the client platform is excellent."

    def test_hyphen_compound_is_consumed(self, scrubber, acme_account):
        """Test that a hyphen compound becomes a single placeholder."""
        result = scrubber.scrub_for_account(acme_account, "Acme-powered workflows scaled.")

        assert result.scrubbed_text == "the client workflows scaled."
        assert result.replacements_made == 1

    def test_domain_before_name(self, scrubber, acme_account):
        """Test that the domain and the name are replaced separately."""
        result = scrubber.scrub_for_account(
            acme_account, "Contact sales@acme.com about Acme's roadmap"
        )

        assert result.scrubbed_text == "Contact sales@[client-domain] about the client roadmap"
        assert result.replacements_made == 2
        assert result.terms_replaced == ["acme.com", "acme"]

    def test_acronym_case_sensitivity(self, scrubber, ace_account):
        """Test that an upper-case acronym ignores the lower-case word."""
        hit = scrubber.scrub_for_account(ace_account, "Ask ACE support")
        miss = scrubber.scrub_for_account(ace_account, "Please ace this call")

        assert hit.scrubbed_text == "Ask the client support"
        assert miss.scrubbed_text == "Please ace this call"
        assert miss.replacements_made == 0

    def test_contact_attribution_is_one_replacement(self, scrubber, acme_account):
        """Test that "Name, Title of Company" collapses into one phrase."""
        result = scrubber.scrub_for_account(
            acme_account, "Jane Doe, CEO of Acme said it worked"
        )

        assert result.scrubbed_text == "a senior executive at the client said it worked"
        assert result.replacements_made == 1
        assert result.terms_replaced == ["Jane Doe, CEO"]

    def test_parenthesized_attribution(self, scrubber, acme_account):
        """Test the "Name (Title)" form."""
        result = scrubber.scrub_for_account(
            acme_account, "The rollout was led by Bob Stone (VP of Sales)."
        )
        assert result.scrubbed_text == "The rollout was led by a VP at the client."

    def test_quote_attribution(self, scrubber, acme_account):
        """Test a pull-quote attribution line."""
        result = scrubber.scrub_for_account(acme_account, '"We saved 40%" — Jane Doe, CEO')
        assert result.scrubbed_text == '"We saved 40%" — a senior executive at the client'

    def test_bare_contact_names(self, scrubber, acme_account):
        """Test names that appear without a title."""
        result = scrubber.scrub_for_account(
            acme_account, "Jane Doe joined the call and Lee Park took notes."
        )

        assert result.scrubbed_text == (
            "a senior executive at the client joined the call and "
            "a team member at the client took notes."
        )
        assert result.replacements_made == 2

    def test_idempotent(self, scrubber, acme_account):
        """Test that scrubbing scrubbed text makes no further replacements."""
        text = (
            "Jane Doe, CEO of Acme said Acme Corp's rollout via acme.io beat "
            "Acme Corporation's old stack. Bob Stone agreed."
        )
        first = scrubber.scrub_for_account(acme_account, text)
        second = scrubber.scrub_for_account(acme_account, first.scrubbed_text)

        assert first.replacements_made == 5
        assert second.replacements_made == 0
        assert second.scrubbed_text == first.scrubbed_text

    def test_placeholder_is_not_rewritten_by_name_pass(self, scrubber):
        """Test that a name term inside the domain placeholder is left alone."""
        account = Account(id="acc_dom", name="Domain Holdings", domain="domain.com.au")
        first = scrubber.scrub_for_account(account, "Email sales@domain.com.au for a Domain demo.")
        second = scrubber.scrub_for_account(account, first.scrubbed_text)

        assert first.scrubbed_text == "Email sales@[client-domain] for a the client demo."
        assert first.replacements_made == 2
        assert second.replacements_made == 0
        assert second.scrubbed_text == first.scrubbed_text

    def test_inserted_phrases_are_not_rescrubbed(self, scrubber):
        """Test that a name term found in an inserted descriptor is left alone."""
        account = Account(
            id="acc_exec",
            name="Executive Inc",
            contacts=[Contact(name="Jane Doe", title="CEO")],
        )
        result = scrubber.scrub_for_account(account, "Jane Doe, CEO approved it.")

        assert result.scrubbed_text == "a senior executive at the client approved it."
        assert result.replacements_made == 1

    def test_contact_email_replaced_whole(self, scrubber, acme_account):
        """Test that a contact email loses its local part too."""
        result = scrubber.scrub_for_account(
            acme_account, "Write to jane@acme.com or bob@acme.com."
        )

        assert result.scrubbed_text == "Write to [client-domain] or [client-domain]."
        assert result.replacements_made == 2
        assert result.terms_replaced == ["jane@acme.com", "bob@acme.com"]

    def test_word_boundaries(self, scrubber, acme_account):
        """Test that longer words containing the name are untouched."""
        text = "AcmeBot lives in Acmeville."
        result = scrubber.scrub_for_account(acme_account, text)

        assert result.scrubbed_text == text
        assert result.replacements_made == 0

    def test_custom_mapping(self, scrubber, acme_account):
        """Test that custom mappings use their own replacement text."""
        result = scrubber.scrub_for_account(
            acme_account,
            "Acme shipped faster than Acme Corp expected.",
            custom_mappings=[("Acme", "a logistics company")],
        )
        assert result.scrubbed_text == "a logistics company shipped faster than the client expected."

    def test_custom_mapping_cannot_override_domain_placeholder(self, scrubber, acme_account):
        """Test that domains always get the fixed domain placeholder."""
        result = scrubber.scrub_for_account(
            acme_account,
            "Email ops@acme.com today.",
            custom_mappings=[("acme.com", "example.org")],
        )
        assert result.scrubbed_text == "Email ops@[client-domain] today."

    def test_custom_placeholder(self, scrubber, acme_account):
        """Test a configured company placeholder."""
        result = scrubber.scrub_for_account(
            acme_account, "Acme Corp is great.", config=ScrubConfig(placeholder="[REDACTED]")
        )
        assert result.scrubbed_text == "[REDACTED] is great."

    def test_skip_scrub(self, scrubber, acme_account):
        """Test that named pages are returned untouched."""
        text = "Acme Corp is great."
        result = scrubber.scrub_for_account(
            acme_account, text, config=ScrubConfig(skip_scrub=True)
        )

        assert result.scrubbed_text == text
        assert result.replacements_made == 0
        assert result.terms_replaced == []

    def test_empty_text(self, scrubber, acme_account):
        """Test empty and missing text."""
        assert scrubber.scrub_for_account(acme_account, "").scrubbed_text == ""
        assert scrubber.scrub_for_account(acme_account, None).replacements_made == 0

    def test_account_without_domain_or_contacts(self, scrubber):
        """Test that missing account fields just mean fewer terms."""
        account = Account(id="acc_min", name="Initech Corporation")
        result = scrubber.scrub_for_account(account, "Initech shipped on time.")
        assert result.scrubbed_text == "the client shipped on time."


class TestScrubWithTerms:
    """Test suite for the account-free preview scrub."""

    def test_single_name(self, scrubber):
        """Test scrubbing one company name."""
        result = scrubber.scrub_with_terms(
            "We worked with Acme Corp to improve their pipeline.", ["Acme Corp"]
        )

        assert result.scrubbed_text == "We worked with the client to improve their pipeline."
        assert result.replacements_made == 1
        assert result.terms_replaced == ["Acme Corp"]

    def test_case_insensitive(self, scrubber):
        """Test that every casing is scrubbed."""
        result = scrubber.scrub_with_terms("ACME CORP and acme corp are the same.", ["Acme Corp"])
        assert result.scrubbed_text == "the client and the client are the same."

    def test_longest_first(self, scrubber):
        """Test that the longer name wins over its prefix."""
        result = scrubber.scrub_with_terms(
            "Amazon Web Services powers our infrastructure.",
            ["Amazon", "Amazon Web Services"],
        )
        assert result.scrubbed_text == "the client powers our infrastructure."

    def test_skips_single_characters(self, scrubber):
        """Test that 1-character names are ignored."""
        result = scrubber.scrub_with_terms("A is a letter.", ["A"])

        assert result.scrubbed_text == "A is a letter."
        assert result.replacements_made == 0

    def test_placeholder_not_matched_by_later_name(self, scrubber):
        """Test that a shorter name does not match inside the placeholder."""
        result = scrubber.scrub_with_terms(
            "Client Partners Inc rolled out the tool.", ["Client Partners Inc", "Client"]
        )

        assert result.scrubbed_text == "the client rolled out the tool."
        assert result.replacements_made == 1

    def test_custom_placeholder(self, scrubber):
        """Test a custom placeholder."""
        result = scrubber.scrub_with_terms("Acme Corp is a great company.", ["Acme Corp"], "[REDACTED]")
        assert result.scrubbed_text == "[REDACTED] is a great company."
