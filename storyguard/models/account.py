"""
Account Graph Models

Read-only view of the Account/Contact graph produced by entity resolution.
The scrubbing core only reads these records; it never mutates or persists them.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class Contact(BaseModel):
    """A person at the client company, as synced from the CRM."""

    name: Optional[str] = None
    title: Optional[str] = None
    email: str = ""
    email_domain: str = ""


class Account(BaseModel):
    """Client company whose identity must never appear in a public page."""

    id: str
    name: str = ""
    normalized_name: str = Field(
        "", description="Suffix-stripped, lower-cased canonical form of the name"
    )
    domain: Optional[str] = None
    domain_aliases: List[str] = Field(
        default_factory=list, description="Additional email/web domains"
    )
    contacts: List[Contact] = Field(default_factory=list)
