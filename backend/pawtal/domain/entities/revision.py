"""Revision — immutable snapshot of a content item's editable fields."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from pawtal.domain.clock import utc_now


@dataclass(frozen=True)
class Revision:
    """One entry in a content item's append-only history.

    ``number`` starts at 1 for the seed revision and grows by one per
    recorded snapshot. ``short_text`` is ``None`` for content types that do
    not carry a teaser.
    """

    item_id: str
    title: str
    content: str
    author_id: str
    number: int = 0
    short_text: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=utc_now)

    def restorable_fields(self) -> dict[str, str]:
        """Fields a revision restore writes back onto the parent item."""
        fields = {"title": self.title, "content": self.content}
        if self.short_text is not None:
            fields["short_text"] = self.short_text
        return fields
