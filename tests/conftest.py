"""Shared fixtures for scrubbing and publish tests."""

import pytest

from storyguard.models.account import Account, Contact


@pytest.fixture
def acme_account() -> Account:
    return Account(
        id="acc_acme",
        name="Acme Corp",
        normalized_name="acme",
        domain="acme.com",
        domain_aliases=["acme.io"],
        contacts=[
            Contact(name="Jane Doe", title="CEO", email="jane@acme.com", email_domain="acme.com"),
            Contact(
                name="Bob Stone",
                title="VP of Sales",
                email="bob@acme.com",
                email_domain="acme.com",
            ),
            Contact(name="Lee Park", title=None, email="lee@acme.io", email_domain="acme.io"),
        ],
    )


@pytest.fixture
def ace_account() -> Account:
    return Account(
        id="acc_ace",
        name="American Cloud Engines",
        normalized_name="american cloud engines",
        domain="ace.cloud",
    )
