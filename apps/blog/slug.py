"""Slug derivation for post titles."""
import re

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_HYPHENS = re.compile(r"-{2,}")


def slugify(text) -> str:
    """
    Turn a title into a URL-safe identifier.

    "Hello, World!" -> "hello-world"
    """
    slug = str(text).lower()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_WORD.sub("", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
