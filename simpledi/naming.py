"""Name transformation for generated identifiers.

Every generated file embeds the same entity name in several spellings:
``BlogPost`` for classes, ``blogPost`` for variables, ``blog-post`` for
directories and URLs, ``blog_post`` for table names and ``BLOG_POST`` for DI
tokens.  ``NameForms`` computes all of them once from the raw command-line
argument so that every template sees the same values.

Two pluralization policies coexist:

* ``"suffix"`` -- the naive rule (``y`` -> ``ies``, a trailing ``s`` gets
  ``es``, anything else gets ``s``) used for database table names.
* ``"irregular"`` -- an English-aware pluralizer (``inflect``) used for
  route paths and list use cases, so ``person`` becomes ``people``.

They disagree on irregular words (``persons`` vs ``people``); both are kept
and selectable from the project config.
"""

from __future__ import annotations

import re
from typing import Literal

import inflect
from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidArgument

PluralPolicy = Literal["suffix", "irregular"]

PLURAL_POLICIES: tuple[str, ...] = ("suffix", "irregular")

_inflect_engine = inflect.engine()

_SEPARATOR_RE = re.compile(r"[-_\s]+")
_CASE_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_VALID_NAME_RE = re.compile(r"^[A-Za-z](?:[A-Za-z0-9_\- ]*[A-Za-z0-9])?$")


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def split_words(value: str) -> list[str]:
    """Split an identifier into words.

    Hyphens, underscores and whitespace separate words, and an uppercase
    letter following a lowercase letter or digit starts a new one::

        split_words("blog-post")  -> ["blog", "post"]
        split_words("BlogPost")   -> ["Blog", "Post"]
        split_words("get_user Id") -> ["get", "user", "Id"]
    """
    words: list[str] = []
    for chunk in _SEPARATOR_RE.split(value.strip()):
        words.extend(w for w in _CASE_BOUNDARY_RE.split(chunk) if w)
    return words


def to_pascal_case(value: str) -> str:
    """Convert ``blog-post`` / ``blog_post`` / ``blogPost`` to ``BlogPost``.

    Only the first letter of each word is changed; the rest is kept as
    written, so acronyms such as ``HTTPServer`` survive unchanged.
    """
    return "".join(word[0].upper() + word[1:] for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert ``blog-post`` to ``blogPost``."""
    pascal = to_pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_kebab_case(value: str) -> str:
    """Convert ``BlogPost`` or ``blog_post`` to ``blog-post``."""
    result = re.sub(r"([a-z])([A-Z])", r"\1-\2", value)
    result = re.sub(r"[\s_]+", "-", result)
    return result.lower()


def to_snake_case(value: str) -> str:
    """Convert ``BlogPost`` or ``blog-post`` to ``blog_post``."""
    result = re.sub(r"([a-z])([A-Z])", r"\1_\2", value)
    result = re.sub(r"[\s-]+", "_", result)
    return result.lower()


def to_upper_snake_case(value: str) -> str:
    """Convert ``BlogPost`` to ``BLOG_POST``."""
    return to_snake_case(value).upper()


# ---------------------------------------------------------------------------
# Pluralization
# ---------------------------------------------------------------------------


def pluralize_suffix(word: str) -> str:
    """Naive English pluralization by suffix."""
    if not word:
        return word
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith("s"):
        return word + "es"
    return word + "s"


def pluralize_irregular(word: str) -> str:
    """Irregular-aware pluralization of the last word of a compound name.

    ``blog-post`` -> ``blog-posts``, ``person`` -> ``people``,
    ``order_item`` -> ``order_items``.  Separators are preserved.
    """
    match = re.match(r"^(.*[-_\s])?([^-_\s]*)$", word)
    if not match or not match.group(2):
        return word
    head = match.group(1) or ""
    return head + _inflect_engine.plural_noun(match.group(2))


def pluralize(word: str, policy: str = "suffix") -> str:
    """Pluralize *word* according to *policy* (``"suffix"`` or ``"irregular"``).

    Raises:
        ValueError: If the policy is unknown.
    """
    if policy == "suffix":
        return pluralize_suffix(word)
    if policy == "irregular":
        return pluralize_irregular(word)
    raise ValueError(
        f"Unknown plural policy: {policy!r} (expected one of {', '.join(PLURAL_POLICIES)})"
    )


# ---------------------------------------------------------------------------
# NameForms
# ---------------------------------------------------------------------------


class NameForms(BaseModel):
    """Every spelling of one entity or use-case name."""

    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="The name as given on the command line")
    pascal: str = Field(..., description="BlogPost")
    camel: str = Field(..., description="blogPost")
    kebab: str = Field(..., description="blog-post")
    snake: str = Field(..., description="blog_post")
    upper_snake: str = Field(..., description="BLOG_POST")
    plural_kebab: str = Field(..., description="blog-posts")
    plural_pascal: str = Field(..., description="BlogPosts")
    table_name: str = Field(..., description="blog_posts")

    @classmethod
    def from_raw(
        cls,
        raw: str,
        *,
        table_policy: PluralPolicy = "suffix",
        route_policy: PluralPolicy = "irregular",
    ) -> "NameForms":
        """Compute all name forms for *raw*.

        Args:
            raw: Name as typed by the user (``blog-post``, ``BlogPost``...).
            table_policy: Plural policy for the database table name.
            route_policy: Plural policy for route paths and list use cases.
        """
        name = raw.strip()
        kebab = to_kebab_case(name)
        snake = to_snake_case(name)
        plural_kebab = pluralize(kebab, route_policy)
        return cls(
            raw=name,
            pascal=to_pascal_case(name),
            camel=to_camel_case(name),
            kebab=kebab,
            snake=snake,
            upper_snake=to_upper_snake_case(name),
            plural_kebab=plural_kebab,
            plural_pascal=to_pascal_case(plural_kebab),
            table_name=pluralize(snake, table_policy),
        )

    def as_context(self) -> dict[str, str]:
        """Return the forms as a flat Jinja2 context dict."""
        return self.model_dump()


def validate_name(raw: str | None, what: str = "entity") -> str:
    """Reject empty or non-identifier names before they reach the templates.

    Returns:
        The stripped name.

    Raises:
        InvalidArgument: If the name is missing or contains characters that
            cannot form an identifier.
    """
    name = (raw or "").strip()
    if not name:
        raise InvalidArgument(f"{what.capitalize()} name is required")
    if not _VALID_NAME_RE.match(name):
        raise InvalidArgument(
            f"Invalid {what} name {name!r}: use letters, digits, '-', '_' or spaces, "
            "starting with a letter and ending with a letter or digit"
        )
    return name
