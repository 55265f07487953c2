# routes/projects.py
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import List, Optional
from datetime import date

from core.config import settings
from core.database import get_session
from core.exceptions import InvalidArgument
from core.pagination import PageResult
from models.models import ProjectStatus
from schemas.project_schema import (
    ProjectCreate, ProjectRead, ProjectUpdate, ProjectSummary, ProjectPage,
    ProjectStats, ProjectStatusUpdate, TeamUpdate, TeamUpdateResult,
    ProjectTeamMemberRead, TeamMemberBrief, BatchRequest, BatchResult,
)
from services import project_service, team_service
from services.project_filter import DateField, ProjectFilter

router = APIRouter(tags=["Projects"])
logger = logging.getLogger(__name__)


# ==================================================================
#  Filter query parameters
# ==================================================================
def project_filter_params(
    category: Optional[str] = None,
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    date_field: DateField = DateField.START_DATE,
    year: Optional[int] = None,
    has_photos: Optional[bool] = None,
    has_videos: Optional[bool] = None,
    has_partners: Optional[bool] = None,
    has_team: Optional[bool] = None,
    is_active: Optional[bool] = None,
    is_upcoming: Optional[bool] = None,
    is_completed: Optional[bool] = None,
    is_annual: Optional[bool] = None,
    location: Optional[str] = None,
    show_only_with_location: Optional[bool] = None,
    min_photo_count: Optional[int] = Query(None, ge=0),
    min_video_count: Optional[int] = Query(None, ge=0),
    min_partner_count: Optional[int] = Query(None, ge=0),
    min_team_count: Optional[int] = Query(None, ge=0),
    sort_by: str = "start_date",
    sort_direction: str = "DESC",
) -> ProjectFilter:
    project_filter = ProjectFilter(
        category=category,
        status=status_filter,
        search=search,
        date_from=date_from,
        date_to=date_to,
        date_field=date_field,
        year=year,
        has_photos=has_photos,
        has_videos=has_videos,
        has_partners=has_partners,
        has_team=has_team,
        is_active=is_active,
        is_upcoming=is_upcoming,
        is_completed=is_completed,
        is_annual=is_annual,
        location=location,
        show_only_with_location=show_only_with_location,
        min_photo_count=min_photo_count,
        min_video_count=min_video_count,
        min_partner_count=min_partner_count,
        min_team_count=min_team_count,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    if not project_filter.is_date_range_valid():
        raise InvalidArgument(
            "date_from must not be after date_to",
            {"date_from": str(date_from), "date_to": str(date_to)},
        )
    return project_filter


def page_size_param(size: int = Query(settings.DEFAULT_PAGE_SIZE, le=settings.MAX_PAGE_SIZE)) -> int:
    return size


def to_project_page(result: PageResult) -> ProjectPage:
    return ProjectPage(
        items=[ProjectSummary.model_validate(project) for project in result.items],
        total_count=result.total_count,
        total_pages=result.total_pages,
        page=result.page,
        size=result.size,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


def to_team_result(result: team_service.TeamReconciliation) -> TeamUpdateResult:
    return TeamUpdateResult(
        project_id=result.project.id,
        version=result.project.version,
        team_member_ids=result.project.team_member_ids,
        added=result.added,
        removed=result.removed,
        skipped=result.skipped,
    )


# ==================================================================
#  ✅ Create New Project
# ==================================================================
@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    session: Session = Depends(get_session),
):
    # Resolve the requested team before anything is written
    member_ids, skipped = team_service.parse_member_ids(data.team_member_ids)
    if skipped:
        logger.warning("New project '%s': skipping malformed team member ids %s", data.title, skipped)
    members = team_service.resolve_members(session, member_ids)

    project = project_service.create_project(session, data, team_members=members)
    return ProjectRead.model_validate(project)


# ==================================================================
#  ✅ Batch status change / delete
# ==================================================================
@router.post("/batch", response_model=BatchResult)
def batch_update_projects(
    data: BatchRequest,
    session: Session = Depends(get_session),
):
    return project_service.batch_update(session, data.action, data.ids)


# ==================================================================
#  ✅ List Projects (filtered + paginated)
# ==================================================================
@router.get("/", response_model=ProjectPage)
def list_projects(
    page: int = Query(0),
    size: int = Depends(page_size_param),
    project_filter: ProjectFilter = Depends(project_filter_params),
    session: Session = Depends(get_session),
):
    result = project_service.list_projects(session, project_filter, page, size)
    return to_project_page(result)


# ==================================================================
#  ✅ Lookups for filter forms
# ==================================================================
@router.get("/categories", response_model=List[str])
def get_categories_in_use(session: Session = Depends(get_session)):
    return project_service.distinct_categories(session)


@router.get("/years", response_model=List[int])
def get_event_years(session: Session = Depends(get_session)):
    return project_service.event_years(session)


@router.get("/stats", response_model=ProjectStats)
def get_project_stats(session: Session = Depends(get_session)):
    return ProjectStats(**project_service.project_stats(session))


@router.get("/slug/{slug}", response_model=ProjectRead)
def get_project_by_slug(slug: str, session: Session = Depends(get_session)):
    return ProjectRead.model_validate(project_service.get_project_by_slug(session, slug))


# ==================================================================
#  ✅ Get / Update / Delete Single Project
# ==================================================================
@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: int, session: Session = Depends(get_session)):
    return ProjectRead.model_validate(project_service.get_project(session, project_id))


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    session: Session = Depends(get_session),
):
    project = project_service.update_project(session, project_id, data)
    return ProjectRead.model_validate(project)


@router.patch("/{project_id}/status", response_model=ProjectRead)
def change_project_status(
    project_id: int,
    data: ProjectStatusUpdate,
    session: Session = Depends(get_session),
):
    project = project_service.change_status(session, project_id, data.status)
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}")
def delete_project(project_id: int, session: Session = Depends(get_session)):
    project_service.delete_project(session, project_id)
    return {"message": "Project deleted successfully"}


# ==================================================================
#  ✅ Project Team
# ==================================================================
@router.get("/{project_id}/team", response_model=List[ProjectTeamMemberRead])
def get_project_team(project_id: int, session: Session = Depends(get_session)):
    project = project_service.get_project(session, project_id)
    return [
        ProjectTeamMemberRead(
            **TeamMemberBrief.model_validate(member).model_dump(),
            role=role,
            display_role=team_service.display_role(member, role),
        )
        for member, role in team_service.team_with_roles(session, project)
    ]


@router.get("/{project_id}/team/available", response_model=List[TeamMemberBrief])
def get_available_members(project_id: int, session: Session = Depends(get_session)):
    project = project_service.get_project(session, project_id)
    return [TeamMemberBrief.model_validate(m) for m in team_service.available_members(session, project)]


@router.put("/{project_id}/team", response_model=TeamUpdateResult)
def update_project_team(
    project_id: int,
    data: TeamUpdate,
    session: Session = Depends(get_session),
):
    project = project_service.get_project(session, project_id)
    result = team_service.reconcile_team(session, project, data.member_ids, data.expected_version)
    return to_team_result(result)
