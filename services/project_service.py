# services/project_service.py
import logging
import re
from datetime import date
from typing import Dict, List, Optional
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select, col

from core.exceptions import Conflict, InvalidArgument, NotFound, ValidationFailed
from core.pagination import PageResult, paginate
from models.models import Project, ProjectStatus, PUBLIC_STATUSES, TeamMember
from schemas.project_schema import BatchAction, BatchFailure, BatchResult, ProjectCreate, ProjectUpdate
from services.category_service import ensure_category
from services.project_filter import ProjectFilter

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Columns that are NOT NULL; an explicit null in a partial update leaves them unchanged
REQUIRED_FIELDS = {
    "title", "category", "status",
    "show_description", "show_photos", "show_videos", "show_team",
    "show_participation", "show_partners", "show_related",
}


CYRILLIC_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch", "ъ": "",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}


# ================================================================
#  Helpers
# ================================================================
def slugify(value: str) -> str:
    """Latin slug; Cyrillic letters are transliterated first."""
    text = "".join(CYRILLIC_TO_LATIN.get(char, char) for char in value.lower())
    slug = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return slug[:200].strip("-") or uuid4().hex


def validate_slug(slug: str) -> str:
    slug = slug.strip().lower()
    if not SLUG_PATTERN.match(slug):
        raise ValidationFailed(
            "Slug may contain only latin letters, digits and single hyphens",
            {"slug": slug},
        )
    return slug


def validate_dates(start_date: Optional[date], end_date: Optional[date], event_date: Optional[date]) -> None:
    if start_date and end_date and start_date > end_date:
        raise ValidationFailed(
            "Start date must not be after end date",
            {"start_date": str(start_date), "end_date": str(end_date)},
        )
    if start_date and end_date and event_date and not (start_date <= event_date <= end_date):
        raise ValidationFailed(
            "Event date must fall within the project period",
            {"event_date": str(event_date), "start_date": str(start_date), "end_date": str(end_date)},
        )


def _clean_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise ValidationFailed("Project title is required", {"title": title})
    return cleaned


def _slug_taken(session: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = select(Project.id).where(Project.slug == slug)
    if exclude_id is not None:
        query = query.where(Project.id != exclude_id)
    return session.exec(query).first() is not None


def _unique_slug_from_title(session: Session, title: str) -> str:
    base = slugify(title)
    slug, suffix = base, 2
    while _slug_taken(session, slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


def check_version(project: Project, expected_version: Optional[int]) -> None:
    if expected_version is not None and project.version != expected_version:
        raise Conflict(
            "Project was modified by someone else, reload and try again",
            {"expected_version": expected_version, "current_version": project.version},
        )


def stale_write(project_id: Optional[int]) -> Conflict:
    """Conflict for a write whose UPDATE/DELETE no longer matched the loaded version."""
    return Conflict(
        "Project was modified by someone else, reload and try again",
        {"project_id": project_id},
    )


# ================================================================
#  Lookups
# ================================================================
def get_project(session: Session, project_id: int) -> Project:
    project = session.get(Project, project_id)
    if not project:
        raise NotFound(f"Project {project_id} not found")
    return project


def get_project_by_slug(session: Session, slug: str, public_only: bool = False) -> Project:
    query = select(Project).where(Project.slug == slug)
    if public_only:
        query = query.where(col(Project.status).in_(PUBLIC_STATUSES))
    project = session.exec(query).first()
    if not project:
        raise NotFound(f"Project '{slug}' not found")
    return project


def list_projects(
    session: Session,
    project_filter: ProjectFilter,
    page: int,
    size: int,
    statuses: Optional[List[str]] = None,
) -> PageResult[Project]:
    """Load candidates narrowed by the exact-match criteria, then order, filter and slice them."""
    query = project_filter.apply(select(Project)).options(
        selectinload(Project.team_members),
        selectinload(Project.images),
        selectinload(Project.videos),
        selectinload(Project.partners),
    )
    if statuses is not None:
        query = query.where(col(Project.status).in_(statuses))
    candidates = session.exec(query).all()
    ordered = project_filter.sort(candidates)
    result = paginate(ordered, page, size, project_filter.matches)
    logger.debug("%s -> %s of %s projects", project_filter, len(result.items), result.total_count)
    return result


def distinct_categories(session: Session) -> List[str]:
    rows = session.exec(select(Project.category).distinct().order_by(Project.category)).all()
    return [row for row in rows if row]


def event_years(session: Session) -> List[int]:
    dates = session.exec(select(Project.event_date).where(col(Project.event_date).is_not(None))).all()
    return sorted({d.year for d in dates}, reverse=True)


def upcoming_events(session: Session, today: Optional[date] = None, limit: int = 10) -> List[Project]:
    today = today or date.today()
    return list(
        session.exec(
            select(Project)
            .where(
                col(Project.event_date) >= today,
                col(Project.status).in_(PUBLIC_STATUSES + [ProjectStatus.PLANNED.value]),
            )
            .order_by(col(Project.event_date))
            .limit(limit)
        ).all()
    )


def project_stats(session: Session) -> Dict:
    rows = session.exec(select(Project.status, func.count(Project.id)).group_by(Project.status)).all()
    by_status = {status.value: 0 for status in ProjectStatus}
    for status_value, count in rows:
        by_status[status_value] = count
    return {
        "total": sum(by_status.values()),
        "by_status": by_status,
        "non_archived": by_status[ProjectStatus.ACTIVE.value] + by_status[ProjectStatus.ANNUAL.value],
    }


# ================================================================
#  Mutations
# ================================================================
def create_project(
    session: Session,
    data: ProjectCreate,
    team_members: Optional[List[TeamMember]] = None,
) -> Project:
    """Insert the project and link ``team_members`` in the same commit."""
    title = _clean_title(data.title)
    validate_dates(data.start_date, data.end_date, data.event_date)

    if data.slug and data.slug.strip():
        slug = validate_slug(data.slug)
        if _slug_taken(session, slug):
            raise Conflict(f"A project with slug '{slug}' already exists", {"slug": slug})
    else:
        slug = _unique_slug_from_title(session, title)

    values = data.model_dump(exclude={"title", "slug", "category", "status", "team_member_ids"})
    project = Project(
        **values,
        title=title,
        slug=slug,
        status=data.status.value,
        category=ensure_category(session, data.category),
    )
    for member in team_members or []:
        project.link_team_member(member)

    try:
        session.add(project)
        session.commit()
        session.refresh(project)
    except IntegrityError:
        session.rollback()
        raise Conflict(f"A project with slug '{slug}' already exists", {"slug": slug})
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to create project '%s'", title)
        raise

    logger.info(
        "Created project %s '%s' (%s) with %s team members",
        project.id, project.title, project.slug, project.team_member_count,
    )
    return project


def update_project(session: Session, project_id: int, data: ProjectUpdate) -> Project:
    project = get_project(session, project_id)
    check_version(project, data.expected_version)

    changes = data.model_dump(exclude_unset=True, exclude={"expected_version"})

    validate_dates(
        changes.get("start_date", project.start_date),
        changes.get("end_date", project.end_date),
        changes.get("event_date", project.event_date),
    )

    if changes.get("title") is not None:
        changes["title"] = _clean_title(changes["title"])
    if "slug" in changes:
        if changes["slug"] is None or not changes["slug"].strip():
            changes.pop("slug")
        else:
            slug = validate_slug(changes["slug"])
            if _slug_taken(session, slug, exclude_id=project.id):
                raise Conflict(f"A project with slug '{slug}' already exists", {"slug": slug})
            changes["slug"] = slug
    if changes.get("category") is not None:
        changes["category"] = ensure_category(session, changes["category"])
    if changes.get("status") is not None:
        changes["status"] = ProjectStatus(changes["status"]).value

    for field_name, value in changes.items():
        if value is None and field_name in REQUIRED_FIELDS:
            continue
        setattr(project, field_name, value)
    project.touch()

    try:
        session.add(project)
        session.commit()
        session.refresh(project)
    except IntegrityError:
        session.rollback()
        raise Conflict("Project update violates a uniqueness constraint", {"project_id": project_id})
    except StaleDataError:
        session.rollback()
        raise stale_write(project_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to update project %s", project_id)
        raise

    logger.info("Updated project %s (version %s)", project.id, project.version)
    return project


def change_status(session: Session, project_id: int, status: ProjectStatus) -> Project:
    project = get_project(session, project_id)
    if project.status == status.value:
        return project
    old_status = project.status
    project.status = status.value
    project.touch()
    try:
        session.add(project)
        session.commit()
        session.refresh(project)
    except StaleDataError:
        session.rollback()
        raise stale_write(project_id)
    logger.info("Project %s status %s -> %s", project.id, old_status, project.status)
    return project


def delete_project(session: Session, project_id: int) -> None:
    project = get_project(session, project_id)
    try:
        for member in list(project.team_members):
            project.unlink_team_member(member)
        session.delete(project)
        session.commit()
    except StaleDataError:
        session.rollback()
        raise stale_write(project_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to delete project %s", project_id)
        raise
    logger.info("Deleted project %s", project_id)


# ================================================================
#  Batch operations
# ================================================================
def batch_update(session: Session, action: BatchAction, project_ids: List[int]) -> BatchResult:
    """
    Apply ``action`` to each project id in turn. Every id is its own
    transaction; a missing or concurrently modified project is reported in
    ``failed`` and the remaining ids are still processed.
    """
    if not project_ids:
        raise InvalidArgument("No projects selected", {"action": action.value})

    result = BatchResult(action=action)
    for project_id in project_ids:
        try:
            if action == BatchAction.ACTIVATE:
                change_status(session, project_id, ProjectStatus.ACTIVE)
            elif action == BatchAction.ARCHIVE:
                change_status(session, project_id, ProjectStatus.ARCHIVED)
            else:
                delete_project(session, project_id)
        except (NotFound, Conflict) as e:
            result.failed.append(BatchFailure(id=project_id, message=e.message))
            continue
        result.succeeded.append(project_id)

    logger.info(
        "Batch %s: %s succeeded, %s failed",
        action.value, len(result.succeeded), len(result.failed),
    )
    return result
