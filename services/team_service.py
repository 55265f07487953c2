# services/team_service.py
"""
Project team membership.

A project's team is stored once, in the ``project_team_member`` join table.
``reconcile_team`` is the only place that rewrites a whole team: it resolves
every requested id first, then unlinks stale members and links new ones
through ``Project.link_team_member`` / ``Project.unlink_team_member`` so both
``project.team_members`` and ``member.projects`` stay in step, and commits
once.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select, col

from core.exceptions import NotFound
from models.models import Project, ProjectTeamMemberLink, TeamMember
from services.project_service import check_version, stale_write

logger = logging.getLogger(__name__)

MemberIds = Union[None, str, Iterable[Union[int, str]]]


@dataclass
class TeamReconciliation:
    project: Project
    added: List[int] = field(default_factory=list)
    removed: List[int] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def parse_member_ids(raw: MemberIds) -> Tuple[List[int], List[str]]:
    """
    Split ``raw`` into numeric ids (deduplicated, order kept) and the entries
    that are not ids. Accepts ``None``, "1, 2,3" or a list of ints/strings.
    """
    if raw is None:
        return [], []
    tokens = raw.split(",") if isinstance(raw, str) else list(raw)

    ids: List[int] = []
    skipped: List[str] = []
    for token in tokens:
        if isinstance(token, bool):
            skipped.append(str(token))
            continue
        if isinstance(token, int):
            value = token
        else:
            text = str(token).strip()
            if not text:
                continue
            try:
                value = int(text)
            except ValueError:
                skipped.append(text)
                continue
        if value <= 0:
            skipped.append(str(token).strip())
            continue
        if value not in ids:
            ids.append(value)
    return ids, skipped


def resolve_members(session: Session, member_ids: List[int]) -> List[TeamMember]:
    members = []
    for member_id in member_ids:
        member = session.get(TeamMember, member_id)
        if not member:
            raise NotFound(f"Team member {member_id} not found", {"team_member_id": member_id})
        members.append(member)
    return members


def reconcile_team(
    session: Session,
    project: Project,
    target_member_ids: MemberIds,
    expected_version: Optional[int] = None,
) -> TeamReconciliation:
    """Make ``project``'s team exactly the members named in ``target_member_ids``."""
    member_ids, skipped = parse_member_ids(target_member_ids)
    if skipped:
        logger.warning("Project %s: skipping malformed team member ids %s", project.id, skipped)

    check_version(project, expected_version)
    targets = resolve_members(session, member_ids)
    target_ids = set(member_ids)

    result = TeamReconciliation(project=project, skipped=skipped)
    project_id = project.id
    try:
        for member in list(project.team_members):
            if member.id not in target_ids:
                project.unlink_team_member(member)
                session.add(member)
                result.removed.append(member.id)

        for member in targets:
            if project.link_team_member(member):
                session.add(member)
                result.added.append(member.id)

        if result.changed:
            project.touch()
            session.add(project)
            session.commit()
            session.refresh(project)
    except StaleDataError:
        session.rollback()
        raise stale_write(project_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to update team of project %s", project_id)
        raise

    if result.changed:
        logger.info(
            "Project %s team updated: added=%s removed=%s (version %s)",
            project.id, result.added, result.removed, project.version,
        )
    return result


# ================================================================
#  Per-project roles
# ================================================================
def get_link(session: Session, project_id: int, member_id: int) -> ProjectTeamMemberLink:
    link = session.get(ProjectTeamMemberLink, (project_id, member_id))
    if not link:
        raise NotFound(
            f"Team member {member_id} is not part of project {project_id}",
            {"project_id": project_id, "team_member_id": member_id},
        )
    return link


def set_project_role(session: Session, project_id: int, member_id: int, role: Optional[str]) -> ProjectTeamMemberLink:
    link = get_link(session, project_id, member_id)
    link.role = role.strip() if role and role.strip() else None
    session.add(link)
    session.commit()
    session.refresh(link)
    logger.info("Member %s role in project %s set to %r", member_id, project_id, link.role)
    return link


def team_with_roles(session: Session, project: Project) -> List[Tuple[TeamMember, Optional[str]]]:
    """The project's members ordered by sort order then name, with their project role."""
    rows = session.exec(
        select(TeamMember, ProjectTeamMemberLink.role)
        .join(ProjectTeamMemberLink, col(ProjectTeamMemberLink.team_member_id) == TeamMember.id)
        .where(ProjectTeamMemberLink.project_id == project.id)
        .order_by(col(TeamMember.sort_order), col(TeamMember.full_name))
    ).all()
    return [(member, role) for member, role in rows]


def available_members(session: Session, project: Project) -> List[TeamMember]:
    """Active members not yet on the project's team."""
    assigned = {member.id for member in project.team_members}
    members = session.exec(
        select(TeamMember)
        .where(TeamMember.is_active == True)  # noqa: E712
        .order_by(col(TeamMember.sort_order), col(TeamMember.full_name))
    ).all()
    return [member for member in members if member.id not in assigned]


def display_role(member: TeamMember, role: Optional[str]) -> Optional[str]:
    return role or member.position
