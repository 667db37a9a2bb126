"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import re
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

MappingInput = Union[Dict[str, str], Sequence[Tuple[str, str]], None]

# Markdown punctuation ignored when measuring how much prose a body holds
_MARKDOWN_PUNCTUATION = re.compile(r"[`*_#>|\[\]()!~-]")
_WHITESPACE = re.compile(r"\s+")


def flatten_fragments(items: Any) -> List[str]:
    """
    Flatten text fragments to a single-level list of strings.

    Handles various formats:
    - Nested lists: [["a", "b"]] → ["a", "b"]
    - Flat lists: ["a", "b"] → ["a", "b"]
    - Single string: "a" → ["a"]
    - None/empty: None → []

    None entries are dropped so optional fields (e.g. a missing subtitle)
    can be passed through unchanged.

    Args:
        items: Any value that could be a list, nested list, or string

    Returns:
        Flat list of strings
    """
    if not items:
        return []

    if isinstance(items, str):
        return [items]

    if not isinstance(items, (list, tuple)):
        return [str(items)]

    result = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            result.extend(flatten_fragments(item))
        elif isinstance(item, str):
            result.append(item)
        else:
            result.append(str(item))

    return result


def dedupe(items: Iterable[str], case_sensitive: bool = True) -> List[str]:
    """
    Remove duplicates while keeping first-seen order.

    Args:
        items: Strings to deduplicate
        case_sensitive: When False, "Acme" and "acme" count as the same item
            and the first spelling wins

    Returns:
        List of unique strings in original order
    """
    seen = set()
    result = []
    for item in items:
        key = item if case_sensitive else item.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def to_mapping_pairs(mappings: MappingInput) -> List[Tuple[str, str]]:
    """
    Coerce custom org mappings into an ordered list of (pattern, replacement).

    Accepts a dict (insertion order is kept), a sequence of 2-item pairs,
    or None.
    """
    if not mappings:
        return []

    if isinstance(mappings, dict):
        return [(str(k), str(v)) for k, v in mappings.items()]

    pairs = []
    for entry in mappings:
        if len(entry) != 2:
            raise ValueError(f"Custom mapping entries must be pairs, got: {entry!r}")
        pattern, replacement = entry
        pairs.append((str(pattern), str(replacement)))
    return pairs


def strip_markdown(text: Optional[str]) -> str:
    """
    Reduce markdown to plain prose for length checks.

    Markdown punctuation becomes whitespace and runs of whitespace collapse
    to a single space.
    """
    if not text:
        return ""
    plain = _MARKDOWN_PUNCTUATION.sub(" ", text)
    return _WHITESPACE.sub(" ", plain).strip()


def count_words(text: str) -> int:
    """Count whitespace-separated words in already-stripped text."""
    return len(text.split(" ")) if text else 0
