# services/category_service.py
import logging
import re
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select, col

from core.exceptions import Conflict, NotFound, ValidationFailed
from models.models import Project, ProjectCategory

logger = logging.getLogger(__name__)


def normalize_category_name(name: str) -> str:
    """Trim, lowercase and collapse inner whitespace."""
    return re.sub(r"\s+", " ", (name or "").strip().lower())


def clean_category_name(name: str) -> str:
    cleaned = re.sub(r"\s+", " ", (name or "").strip())
    if not cleaned:
        raise ValidationFailed("Category name is required", {"name": name})
    return cleaned


def find_by_normalized(session: Session, name: str) -> ProjectCategory | None:
    return session.exec(
        select(ProjectCategory).where(ProjectCategory.normalized_name == normalize_category_name(name))
    ).first()


def get_category(session: Session, category_id: int) -> ProjectCategory:
    category = session.get(ProjectCategory, category_id)
    if not category:
        raise NotFound(f"Category {category_id} not found")
    return category


def list_categories(session: Session) -> List[ProjectCategory]:
    return list(session.exec(select(ProjectCategory).order_by(ProjectCategory.name)).all())


def project_counts(session: Session) -> Dict[str, int]:
    rows = session.exec(select(Project.category, func.count(Project.id)).group_by(Project.category)).all()
    return {category: count for category, count in rows}


def ensure_category(session: Session, name: str) -> str:
    """
    Return the canonical label for ``name``, registering a new category when no
    existing one normalises to the same value. Runs inside the caller's transaction.
    """
    cleaned = clean_category_name(name)
    existing = find_by_normalized(session, cleaned)
    if existing:
        return existing.name

    category = ProjectCategory(name=cleaned, normalized_name=normalize_category_name(cleaned))
    session.add(category)
    session.flush()
    logger.info("Registered project category '%s'", cleaned)
    return category.name


def create_category(session: Session, name: str) -> ProjectCategory:
    cleaned = clean_category_name(name)
    if find_by_normalized(session, cleaned):
        raise Conflict(f"Category '{cleaned}' already exists")

    category = ProjectCategory(name=cleaned, normalized_name=normalize_category_name(cleaned))
    try:
        session.add(category)
        session.commit()
        session.refresh(category)
    except IntegrityError:
        session.rollback()
        raise Conflict(f"Category '{cleaned}' already exists")
    logger.info("Created category %s '%s'", category.id, category.name)
    return category


def rename_category(session: Session, category_id: int, name: str) -> ProjectCategory:
    category = get_category(session, category_id)
    cleaned = clean_category_name(name)
    clash = find_by_normalized(session, cleaned)
    if clash and clash.id != category.id:
        raise Conflict(f"Category '{cleaned}' already exists")

    old_name = category.name
    category.name = cleaned
    category.normalized_name = normalize_category_name(cleaned)
    try:
        session.add(category)
        # Projects carry the label, keep them on the canonical name
        for project in session.exec(select(Project).where(col(Project.category) == old_name)).all():
            project.category = cleaned
            project.touch()
            session.add(project)
        session.commit()
        session.refresh(category)
    except IntegrityError:
        session.rollback()
        raise Conflict(f"Category '{cleaned}' already exists")
    except StaleDataError:
        session.rollback()
        raise Conflict("A project in this category was modified meanwhile, try again", {"category_id": category_id})
    logger.info("Renamed category %s '%s' -> '%s'", category.id, old_name, cleaned)
    return category


def delete_category(session: Session, category_id: int) -> None:
    category = get_category(session, category_id)
    session.delete(category)
    session.commit()
    logger.info("Deleted category %s '%s'", category_id, category.name)
