# services/content_service.py
import logging
from typing import Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from core.exceptions import NotFound
from models.models import Project, ProjectImage, ProjectPartner, ProjectVideo
from services.project_service import get_project, stale_write

logger = logging.getLogger(__name__)

C = TypeVar("C", ProjectImage, ProjectVideo, ProjectPartner)


def _commit_project_write(session: Session, project_id: int) -> None:
    try:
        session.commit()
    except StaleDataError:
        session.rollback()
        raise stale_write(project_id)


def add_content(session: Session, project_id: int, model: Type[C], data: BaseModel) -> C:
    project = get_project(session, project_id)
    item = model(**data.model_dump(), project_id=project.id)
    if isinstance(item, ProjectImage) and item.is_key_photo:
        # One key photo per project
        for image in project.images:
            image.is_key_photo = False
            session.add(image)
    project.touch()
    session.add(project)
    session.add(item)
    _commit_project_write(session, project_id)
    session.refresh(item)
    logger.info("Added %s %s to project %s", model.__name__, item.id, project_id)
    return item


def get_content(session: Session, project_id: int, model: Type[C], item_id: int) -> C:
    item = session.get(model, item_id)
    if not item or item.project_id != project_id:
        raise NotFound(f"{model.__name__} {item_id} not found in project {project_id}")
    return item


def delete_content(session: Session, project_id: int, model: Type[C], item_id: int) -> None:
    project: Project = get_project(session, project_id)
    item = get_content(session, project_id, model, item_id)
    session.delete(item)
    project.touch()
    session.add(project)
    _commit_project_write(session, project_id)
    logger.info("Deleted %s %s from project %s", model.__name__, item_id, project_id)
