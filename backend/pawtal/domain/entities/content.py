"""Content items (pages and articles) and their status state machine."""

import math
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pawtal.domain.clock import ensure_utc, utc_now
from pawtal.domain.exceptions import InvalidStateError

_TAG_RE = re.compile(r"<[^>]*>")

WORDS_PER_MINUTE = 200


class ContentStatus(str, Enum):
    """Lifecycle states shared by pages and articles."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    TRASHED = "trashed"


def estimate_reading_time(html: str) -> int:
    """Whole minutes needed to read ``html`` at 200 wpm, never less than 1."""
    text = _TAG_RE.sub(" ", html or "")
    words = len(text.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


@dataclass
class ContentItem:
    """Fields and transitions common to every content type.

    Writes are permissive: ``apply_changes`` may move an item to any status.
    Only ``mark_restored`` checks the current status.
    """

    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ("title", "slug", "content", "status", "publish_at")
    REVISION_FIELDS: ClassVar[tuple[str, ...]] = ("title", "content")

    title: str
    slug: str
    author_id: str
    content: str = ""
    status: ContentStatus = ContentStatus.DRAFT
    publish_at: datetime | None = None
    trashed_at: datetime | None = None
    category_ids: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def new(cls, *, author_id: str, now: datetime, **fields: Any) -> "ContentItem":
        """Build a fresh item from already-resolved input fields."""
        values = {name: fields[name] for name in cls.EDITABLE_FIELDS if fields.get(name) is not None}
        item = cls(author_id=author_id, created_at=now, updated_at=now, **values)
        item.status = ContentStatus(item.status)
        item.publish_at = ensure_utc(item.publish_at)
        if item.status is ContentStatus.TRASHED:
            item.trashed_at = now
        item.refresh_derived()
        return item

    # ── Transitions ──────────────────────────────────────────────────

    def apply_changes(self, changes: dict[str, Any], now: datetime) -> list[str]:
        """Merge supplied fields over current values (PATCH semantics).

        ``None`` values and unknown keys are ignored. Returns the names of
        fields whose value actually changed.
        """
        changed: list[str] = []
        for name in self.EDITABLE_FIELDS:
            value = changes.get(name)
            if value is None:
                continue
            if name == "status":
                value = ContentStatus(value)
            elif name == "publish_at":
                value = ensure_utc(value)
            if getattr(self, name) == value:
                continue
            if name == "status":
                self._set_status(value, now)
            else:
                setattr(self, name, value)
            changed.append(name)
        self.refresh_derived()
        self.touch(now)
        return changed

    def mark_published(self, now: datetime) -> None:
        self._set_status(ContentStatus.PUBLISHED, now)
        self.touch(now)

    def mark_trashed(self, now: datetime) -> None:
        # Re-trashing restarts the retention window.
        self.status = ContentStatus.TRASHED
        self.trashed_at = now
        self.touch(now)

    def mark_restored(self, now: datetime, entity_type: str = "Content") -> None:
        if self.status is not ContentStatus.TRASHED:
            raise InvalidStateError(
                entity_type,
                self.id,
                self.status.value,
                f"Only trashed {entity_type.lower()}s can be restored (current status: {self.status.value})",
            )
        self._set_status(ContentStatus.DRAFT, now)
        self.touch(now)

    def touch(self, now: datetime) -> None:
        """Bump ``updated_at`` without ever moving it behind ``created_at``."""
        self.updated_at = max(now, self.created_at, self.updated_at)

    def _set_status(self, status: ContentStatus, now: datetime) -> None:
        if status is ContentStatus.TRASHED and self.status is not ContentStatus.TRASHED:
            self.trashed_at = now
        elif status is not ContentStatus.TRASHED:
            self.trashed_at = None
        self.status = status

    # ── Predicates ───────────────────────────────────────────────────

    def is_due(self, now: datetime) -> bool:
        return (
            self.status is ContentStatus.SCHEDULED
            and self.publish_at is not None
            and self.publish_at <= now
        )

    def is_purgeable(self, cutoff: datetime) -> bool:
        return (
            self.status is ContentStatus.TRASHED
            and self.trashed_at is not None
            and self.trashed_at < cutoff
        )

    # ── Derived data ─────────────────────────────────────────────────

    def refresh_derived(self) -> None:
        """Recompute fields derived from the body. Pages have none."""

    def revision_fields(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.REVISION_FIELDS}


@dataclass
class Page(ContentItem):
    """A standalone page (about, contact, ...)."""


@dataclass
class Article(ContentItem):
    """A dated article with a teaser and an estimated reading time."""

    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = ContentItem.EDITABLE_FIELDS + ("short_text",)
    REVISION_FIELDS: ClassVar[tuple[str, ...]] = ("title", "short_text", "content")

    short_text: str = ""
    reading_time_minutes: int = 1

    def refresh_derived(self) -> None:
        self.reading_time_minutes = estimate_reading_time(self.content)


@dataclass(frozen=True)
class ContentType:
    """Descriptor the generic lifecycle engine is parameterised with."""

    name: str
    label: str
    entity_cls: type[ContentItem]

    @property
    def has_short_text(self) -> bool:
        return "short_text" in self.entity_cls.REVISION_FIELDS


PAGE = ContentType(name="page", label="Page", entity_cls=Page)
ARTICLE = ContentType(name="article", label="Article", entity_cls=Article)

CONTENT_TYPES: tuple[ContentType, ...] = (PAGE, ARTICLE)
