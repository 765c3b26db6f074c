"""SQLAlchemy ORM models for pages, articles, their revisions and category links."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pawtal.infrastructure.database.base import Base


def _generate_uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _ContentColumns:
    """Columns shared by the ``pages`` and ``articles`` tables."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    publish_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    trashed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    author_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class PageModel(_ContentColumns, Base):
    """ORM model — maps to the 'pages' table."""

    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_pages_slug"),
        Index("idx_pages_status_publish_at", "status", "publish_at"),
        Index("idx_pages_status_trashed_at", "status", "trashed_at"),
    )

    def __repr__(self) -> str:
        return f"<PageModel(id={self.id}, slug='{self.slug}', status='{self.status}')>"


class ArticleModel(_ContentColumns, Base):
    """ORM model — maps to the 'articles' table."""

    __tablename__ = "articles"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_articles_slug"),
        Index("idx_articles_status_publish_at", "status", "publish_at"),
        Index("idx_articles_status_trashed_at", "status", "trashed_at"),
    )

    short_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reading_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, slug='{self.slug}', status='{self.status}')>"


class PageRevisionModel(Base):
    """Append-only snapshot of a page's title and content."""

    __tablename__ = "page_revisions"
    __table_args__ = (
        UniqueConstraint("page_id", "number", name="uq_page_revisions_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    item_id: Mapped[str] = mapped_column(
        "page_id",
        String(36),
        ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class ArticleRevisionModel(Base):
    """Append-only snapshot of an article's title, teaser and content."""

    __tablename__ = "article_revisions"
    __table_args__ = (
        UniqueConstraint("article_id", "number", name="uq_article_revisions_number"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    item_id: Mapped[str] = mapped_column(
        "article_id",
        String(36),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    short_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class PageCategoryModel(Base):
    """Join row — page ↔ category."""

    __tablename__ = "page_categories"

    item_id: Mapped[str] = mapped_column(
        "page_id", String(36), ForeignKey("pages.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )


class ArticleCategoryModel(Base):
    """Join row — article ↔ category."""

    __tablename__ = "article_categories"

    item_id: Mapped[str] = mapped_column(
        "article_id", String(36), ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )
