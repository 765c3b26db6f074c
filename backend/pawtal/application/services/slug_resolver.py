"""Slug derivation and per-type uniqueness checks."""

import re
import unicodedata
from typing import Protocol

from pawtal.domain.exceptions import DuplicateEntityError, InvalidSlugError

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, ASCII-fold, collapse non-alphanumeric runs to '-', trim '-'."""
    if not value:
        return ""
    value = (
        unicodedata.normalize("NFKD", value)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    return _NON_ALNUM_RE.sub("-", value.lower()).strip("-")


class SlugLookup(Protocol):
    """Anything that can tell which row currently holds a slug."""

    async def find_id_by_slug(self, slug: str) -> str | None: ...


class SlugResolver:
    """Resolves slugs for one collection (pages, articles or categories).

    Collisions are reported, never repaired: there is no auto-suffixing.
    The storage layer's unique constraint remains the final arbiter when two
    writers race between the check and the insert.
    """

    def __init__(self, lookup: SlugLookup, entity_label: str):
        self._lookup = lookup
        self._label = entity_label

    def resolve(self, title: str, explicit_slug: str | None = None) -> str:
        """Normalise an explicit slug, or derive one from the title."""
        source = explicit_slug if explicit_slug is not None else title
        slug = slugify(source)
        if not slug:
            raise InvalidSlugError(source)
        return slug

    async def is_slug_available(self, slug: str, exclude_id: str | None = None) -> bool:
        holder = await self._lookup.find_id_by_slug(slug)
        return holder is None or holder == exclude_id

    async def ensure_available(self, slug: str, exclude_id: str | None = None) -> None:
        if not await self.is_slug_available(slug, exclude_id):
            raise DuplicateEntityError(self._label, "slug", slug)
