# services/article_service.py
"""
Project articles: news and reports attached to a project.

Articles have their own lifecycle (draft -> published -> archived) and their
own slug namespace. Only published articles whose ``published_at`` is not in
the future are visible on public pages; each public read counts a view.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, col

from core.exceptions import Conflict, NotFound, ValidationFailed
from core.pagination import PageResult, paginate
from models.models import ArticleStatus, ProjectArticle, utcnow
from schemas.article_schema import ArticleCreate, ArticleUpdate
from services.project_service import get_project, slugify, validate_slug

logger = logging.getLogger(__name__)


# ================================================================
#  Helpers
# ================================================================
def _slug_taken(session: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = select(ProjectArticle.id).where(ProjectArticle.slug == slug)
    if exclude_id is not None:
        query = query.where(ProjectArticle.id != exclude_id)
    return session.exec(query).first() is not None


def _unique_slug_from_title(session: Session, title: str) -> str:
    base = slugify(title)
    slug, suffix = base, 2
    while _slug_taken(session, slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


def _required_text(value: Optional[str], field_name: str) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(f"Article {field_name} is required", {field_name: value})
    return value.strip()


def _published_clause(now=None):
    now = now or utcnow()
    return (
        col(ProjectArticle.status) == ArticleStatus.PUBLISHED.value,
        or_(col(ProjectArticle.published_at).is_(None), col(ProjectArticle.published_at) <= now),
    )


def _matches_search(article: ProjectArticle, term: Optional[str]) -> bool:
    if not term:
        return True
    needle = term.casefold()
    return any(
        needle in (text or "").casefold()
        for text in (article.title, article.short_description, article.content)
    )


def _save(session: Session, article: ProjectArticle, action: str) -> ProjectArticle:
    try:
        session.add(article)
        session.commit()
        session.refresh(article)
    except IntegrityError:
        session.rollback()
        raise Conflict(f"An article with slug '{article.slug}' already exists", {"slug": article.slug})
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to %s article '%s'", action, article.title)
        raise
    return article


# ================================================================
#  Lookups
# ================================================================
def get_article(session: Session, article_id: int) -> ProjectArticle:
    article = session.get(ProjectArticle, article_id)
    if not article:
        raise NotFound(f"Article {article_id} not found")
    return article


def list_articles(
    session: Session,
    page: int,
    size: int,
    status: Optional[ArticleStatus] = None,
    project_id: Optional[int] = None,
    search: Optional[str] = None,
) -> PageResult[ProjectArticle]:
    """Newest first; search is case-insensitive over title, short description and content."""
    query = select(ProjectArticle).order_by(col(ProjectArticle.created_at).desc(), col(ProjectArticle.id).desc())
    if status is not None:
        query = query.where(ProjectArticle.status == status.value)
    if project_id is not None:
        query = query.where(ProjectArticle.project_id == project_id)
    term = search.strip() if search else None
    return paginate(session.exec(query).all(), page, size, lambda article: _matches_search(article, term))


def list_project_articles(session: Session, project_id: int, published_only: bool = False) -> List[ProjectArticle]:
    get_project(session, project_id)
    query = select(ProjectArticle).where(ProjectArticle.project_id == project_id)
    if published_only:
        query = query.where(*_published_clause()).order_by(col(ProjectArticle.published_at).desc())
    else:
        query = query.order_by(col(ProjectArticle.sort_order), col(ProjectArticle.created_at).desc())
    return list(session.exec(query).all())


def recent_articles(session: Session, limit: int = 5, project_id: Optional[int] = None) -> List[ProjectArticle]:
    query = select(ProjectArticle).where(*_published_clause())
    if project_id is not None:
        query = query.where(ProjectArticle.project_id == project_id)
    query = query.order_by(col(ProjectArticle.published_at).desc(), col(ProjectArticle.id).desc()).limit(limit)
    return list(session.exec(query).all())


def get_published_by_slug(session: Session, slug: str) -> ProjectArticle:
    """Public read of one article; counts the view."""
    article = session.exec(
        select(ProjectArticle).where(ProjectArticle.slug == slug, *_published_clause())
    ).first()
    if not article:
        raise NotFound(f"Article '{slug}' not found")
    article.view_count = (article.view_count or 0) + 1
    session.add(article)
    session.commit()
    session.refresh(article)
    return article


def article_counts(session: Session) -> Dict[str, int]:
    rows = session.exec(
        select(ProjectArticle.status, func.count(ProjectArticle.id)).group_by(ProjectArticle.status)
    ).all()
    counts = {status.value: 0 for status in ArticleStatus}
    for status_value, count in rows:
        counts[status_value] = count
    return counts


# ================================================================
#  Mutations
# ================================================================
def create_article(session: Session, project_id: int, data: ArticleCreate) -> ProjectArticle:
    project = get_project(session, project_id)
    title = _required_text(data.title, "title")
    content = _required_text(data.content, "content")

    if data.slug and data.slug.strip():
        slug = validate_slug(data.slug)
        if _slug_taken(session, slug):
            raise Conflict(f"An article with slug '{slug}' already exists", {"slug": slug})
    else:
        slug = _unique_slug_from_title(session, title)

    article = ProjectArticle(
        **data.model_dump(exclude={"title", "content", "slug", "publish"}),
        project_id=project.id,
        title=title,
        content=content,
        slug=slug,
    )
    if data.publish:
        article.publish()

    _save(session, article, "create")
    logger.info("Created article %s '%s' in project %s (%s)", article.id, article.title, project.id, article.status)
    return article


def update_article(session: Session, article_id: int, data: ArticleUpdate) -> ProjectArticle:
    article = get_article(session, article_id)
    changes = data.model_dump(exclude_unset=True)

    if "title" in changes:
        changes["title"] = _required_text(changes["title"], "title")
    if "content" in changes:
        changes["content"] = _required_text(changes["content"], "content")
    if "slug" in changes:
        if changes["slug"] is None or not changes["slug"].strip():
            changes.pop("slug")
        else:
            slug = validate_slug(changes["slug"])
            if _slug_taken(session, slug, exclude_id=article.id):
                raise Conflict(f"An article with slug '{slug}' already exists", {"slug": slug})
            changes["slug"] = slug
    if changes.get("sort_order", 0) is None:
        changes.pop("sort_order")

    for field_name, value in changes.items():
        setattr(article, field_name, value)
    article.updated_at = utcnow()

    _save(session, article, "update")
    logger.info("Updated article %s", article.id)
    return article


def set_article_status(session: Session, article_id: int, status: ArticleStatus) -> ProjectArticle:
    """Publish (keeping an earlier publication time), return to draft or archive."""
    article = get_article(session, article_id)
    old_status = article.status
    if status == ArticleStatus.PUBLISHED:
        if old_status != ArticleStatus.PUBLISHED.value:
            article.publish()
    elif status == ArticleStatus.DRAFT:
        article.unpublish()
    else:
        article.archive()
    article.updated_at = utcnow()

    _save(session, article, status.value)
    logger.info("Article %s status %s -> %s", article.id, old_status, article.status)
    return article


def delete_article(session: Session, article_id: int) -> None:
    article = get_article(session, article_id)
    session.delete(article)
    session.commit()
    logger.info("Deleted article %s", article_id)
