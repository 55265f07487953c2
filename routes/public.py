# routes/public.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import List, Optional

from core.config import settings
from core.database import get_session
from models.models import PUBLIC_STATUSES
from schemas.article_schema import ArticleRead, ArticleSummary
from schemas.project_schema import ProjectPage, ProjectRead, ProjectSummary
from schemas.team_member_schema import TeamMemberRead
from services import article_service, project_service, team_member_service
from services.project_filter import ProjectFilter
from routes.projects import to_project_page

router = APIRouter(prefix="/public", tags=["Public"])


# ==================================================================
#  ✅ Public project list (active + annual only)
# ==================================================================
@router.get("/projects", response_model=ProjectPage)
def list_public_projects(
    page: int = Query(0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, le=settings.MAX_PAGE_SIZE),
    category: Optional[str] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
):
    project_filter = ProjectFilter(category=category, search=search, sort_by="created", sort_direction="DESC")
    result = project_service.list_projects(session, project_filter, page, size, statuses=PUBLIC_STATUSES)
    return to_project_page(result)


@router.get("/projects/upcoming", response_model=List[ProjectSummary])
def list_upcoming_events(
    limit: int = Query(6, ge=1, le=50),
    session: Session = Depends(get_session),
):
    return [ProjectSummary.model_validate(p) for p in project_service.upcoming_events(session, limit=limit)]


@router.get("/projects/{slug}", response_model=ProjectRead)
def get_public_project(slug: str, session: Session = Depends(get_session)):
    project = project_service.get_project_by_slug(session, slug, public_only=True)
    data = ProjectRead.model_validate(project)
    if not project.show_team:
        data.team_members = []
        data.team_member_ids = []
    return data


# ==================================================================
#  ✅ Public team page
# ==================================================================
@router.get("/team", response_model=List[TeamMemberRead])
def list_public_team(session: Session = Depends(get_session)):
    return [TeamMemberRead.model_validate(m) for m in team_member_service.active_members(session)]


# ==================================================================
#  ✅ Public articles
# ==================================================================
@router.get("/articles/recent", response_model=List[ArticleSummary])
def list_recent_articles(
    limit: int = Query(5, ge=1, le=50),
    session: Session = Depends(get_session),
):
    return [ArticleSummary.model_validate(a) for a in article_service.recent_articles(session, limit=limit)]


@router.get("/articles/{slug}", response_model=ArticleRead)
def get_public_article(slug: str, session: Session = Depends(get_session)):
    return ArticleRead.model_validate(article_service.get_published_by_slug(session, slug))


@router.get("/projects/{slug}/articles", response_model=List[ArticleSummary])
def list_public_project_articles(slug: str, session: Session = Depends(get_session)):
    project = project_service.get_project_by_slug(session, slug, public_only=True)
    articles = article_service.list_project_articles(session, project.id, published_only=True)
    return [ArticleSummary.model_validate(a) for a in articles]
