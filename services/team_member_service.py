# services/team_member_service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, col

from core.exceptions import InvalidArgument, NotFound
from core.pagination import PageResult, paginate
from models.models import TeamMember, utcnow
from schemas.team_member_schema import TeamMemberCreate, TeamMemberUpdate

logger = logging.getLogger(__name__)


def get_member(session: Session, member_id: int) -> TeamMember:
    member = session.get(TeamMember, member_id)
    if not member:
        raise NotFound(f"Team member {member_id} not found")
    return member


def _matches_search(member: TeamMember, term: Optional[str]) -> bool:
    if not term:
        return True
    needle = term.casefold()
    return needle in (member.full_name or "").casefold() or needle in (member.position or "").casefold()


def list_members(
    session: Session,
    page: int,
    size: int,
    search: Optional[str] = None,
    active: Optional[bool] = None,
) -> PageResult[TeamMember]:
    query = select(TeamMember).order_by(col(TeamMember.sort_order), col(TeamMember.full_name))
    if active is not None:
        query = query.where(TeamMember.is_active == active)
    term = search.strip() if search else None
    return paginate(session.exec(query).all(), page, size, lambda member: _matches_search(member, term))


def active_members(session: Session) -> List[TeamMember]:
    return list(
        session.exec(
            select(TeamMember)
            .where(TeamMember.is_active == True)  # noqa: E712
            .order_by(col(TeamMember.sort_order), col(TeamMember.full_name))
        ).all()
    )


def create_member(session: Session, data: TeamMemberCreate) -> TeamMember:
    member = TeamMember(**data.model_dump())
    member.full_name = member.full_name.strip()
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Created team member %s '%s'", member.id, member.full_name)
    return member


def update_member(session: Session, member_id: int, data: TeamMemberUpdate) -> TeamMember:
    member = get_member(session, member_id)
    changes = data.model_dump(exclude_unset=True)
    for field_name, value in changes.items():
        if value is None and field_name in {"full_name", "sort_order", "is_active"}:
            continue
        setattr(member, field_name, value.strip() if field_name == "full_name" else value)
    member.updated_at = utcnow()
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Updated team member %s", member.id)
    return member


def set_active(session: Session, member_id: int, active: bool) -> TeamMember:
    member = get_member(session, member_id)
    member.is_active = active
    member.updated_at = utcnow()
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info("Team member %s %s", member.id, "activated" if active else "deactivated")
    return member


def reorder_members(session: Session, member_ids: List[int]) -> List[TeamMember]:
    """Assign sort order 0..n-1 following ``member_ids``."""
    if len(set(member_ids)) != len(member_ids):
        raise InvalidArgument("Duplicate team member ids in ordering", {"member_ids": member_ids})
    members = [get_member(session, member_id) for member_id in member_ids]
    for position, member in enumerate(members):
        member.sort_order = position
        session.add(member)
    session.commit()
    for member in members:
        session.refresh(member)
    return members


def delete_member(session: Session, member_id: int) -> None:
    member = get_member(session, member_id)
    try:
        for project in list(member.projects):
            project.unlink_team_member(member)
            session.add(project)
        session.delete(member)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to delete team member %s", member_id)
        raise
    logger.info("Deleted team member %s", member_id)
