# routes/team_members.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional

from core.config import settings
from core.database import get_session
from schemas.team_member_schema import (
    TeamMemberCreate, TeamMemberRead, TeamMemberUpdate, TeamMemberPage,
    TeamMemberReorder, ProjectRoleUpdate, ProjectRoleRead,
)
from services import project_service, team_member_service, team_service


router = APIRouter(tags=["Team Members"])


# ----------------------------------------------------------------------
# ✅ List Team Members (search + active filter, paginated)
# ----------------------------------------------------------------------
@router.get("/", response_model=TeamMemberPage)
def list_team_members(
    page: int = Query(0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    active: Optional[bool] = None,
    session: Session = Depends(get_session),
):
    result = team_member_service.list_members(session, page, size, search=search, active=active)
    return TeamMemberPage(
        items=[TeamMemberRead.model_validate(member) for member in result.items],
        total_count=result.total_count,
        total_pages=result.total_pages,
        page=result.page,
        size=result.size,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


# ----------------------------------------------------------------------
# ✅ Create Team Member
# ----------------------------------------------------------------------
@router.post("/", response_model=TeamMemberRead, status_code=status.HTTP_201_CREATED)
def create_team_member(data: TeamMemberCreate, session: Session = Depends(get_session)):
    member = team_member_service.create_member(session, data)
    return TeamMemberRead.model_validate(member)


# ----------------------------------------------------------------------
# ✅ Reorder Team Members
# ----------------------------------------------------------------------
@router.put("/order", response_model=List[TeamMemberRead])
def reorder_team_members(data: TeamMemberReorder, session: Session = Depends(get_session)):
    members = team_member_service.reorder_members(session, data.member_ids)
    return [TeamMemberRead.model_validate(member) for member in members]


# ----------------------------------------------------------------------
# ✅ Get / Update / Delete Team Member
# ----------------------------------------------------------------------
@router.get("/{member_id}", response_model=TeamMemberRead)
def get_team_member(member_id: int, session: Session = Depends(get_session)):
    return TeamMemberRead.model_validate(team_member_service.get_member(session, member_id))


@router.put("/{member_id}", response_model=TeamMemberRead)
def update_team_member(member_id: int, data: TeamMemberUpdate, session: Session = Depends(get_session)):
    member = team_member_service.update_member(session, member_id, data)
    return TeamMemberRead.model_validate(member)


@router.post("/{member_id}/activate", response_model=TeamMemberRead)
def activate_team_member(member_id: int, session: Session = Depends(get_session)):
    return TeamMemberRead.model_validate(team_member_service.set_active(session, member_id, True))


@router.post("/{member_id}/deactivate", response_model=TeamMemberRead)
def deactivate_team_member(member_id: int, session: Session = Depends(get_session)):
    return TeamMemberRead.model_validate(team_member_service.set_active(session, member_id, False))


@router.delete("/{member_id}")
def delete_team_member(member_id: int, session: Session = Depends(get_session)):
    team_member_service.delete_member(session, member_id)
    return {"message": "Team member deleted successfully"}


# ----------------------------------------------------------------------
# ✅ Per-project Role
# ----------------------------------------------------------------------
@router.put("/{member_id}/projects/{project_id}/role", response_model=ProjectRoleRead)
def set_project_role(
    member_id: int,
    project_id: int,
    data: ProjectRoleUpdate,
    session: Session = Depends(get_session),
):
    project_service.get_project(session, project_id)
    member = team_member_service.get_member(session, member_id)
    link = team_service.set_project_role(session, project_id, member_id, data.role)
    return ProjectRoleRead(
        project_id=link.project_id,
        team_member_id=link.team_member_id,
        role=link.role,
        display_role=team_service.display_role(member, link.role),
    )
