# routes/articles.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Dict, List, Optional

from core.database import get_session
from models.models import ArticleStatus
from routes.projects import page_size_param
from schemas.article_schema import ArticleCreate, ArticlePage, ArticleRead, ArticleSummary, ArticleUpdate
from services import article_service

router = APIRouter(tags=["Articles"])


def to_article_page(result) -> ArticlePage:
    return ArticlePage(
        items=[ArticleSummary.model_validate(article) for article in result.items],
        total_count=result.total_count,
        total_pages=result.total_pages,
        page=result.page,
        size=result.size,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


# ==================================================================
#  ✅ Articles of one project
# ==================================================================
@router.post("/projects/{project_id}/articles", response_model=ArticleRead, status_code=status.HTTP_201_CREATED)
def create_article(
    project_id: int,
    data: ArticleCreate,
    session: Session = Depends(get_session),
):
    return ArticleRead.model_validate(article_service.create_article(session, project_id, data))


@router.get("/projects/{project_id}/articles", response_model=List[ArticleSummary])
def list_project_articles(
    project_id: int,
    published_only: bool = False,
    session: Session = Depends(get_session),
):
    articles = article_service.list_project_articles(session, project_id, published_only=published_only)
    return [ArticleSummary.model_validate(a) for a in articles]


# ==================================================================
#  ✅ All articles (filtered + paginated)
# ==================================================================
@router.get("/articles", response_model=ArticlePage)
def list_articles(
    page: int = Query(0),
    size: int = Depends(page_size_param),
    status_filter: Optional[ArticleStatus] = Query(None, alias="status"),
    project_id: Optional[int] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
):
    result = article_service.list_articles(session, page, size, status_filter, project_id, search)
    return to_article_page(result)


@router.get("/articles/stats", response_model=Dict[str, int])
def get_article_stats(session: Session = Depends(get_session)):
    return article_service.article_counts(session)


# ==================================================================
#  ✅ Get / Update / Delete Single Article
# ==================================================================
@router.get("/articles/{article_id}", response_model=ArticleRead)
def get_article(article_id: int, session: Session = Depends(get_session)):
    return ArticleRead.model_validate(article_service.get_article(session, article_id))


@router.put("/articles/{article_id}", response_model=ArticleRead)
def update_article(
    article_id: int,
    data: ArticleUpdate,
    session: Session = Depends(get_session),
):
    return ArticleRead.model_validate(article_service.update_article(session, article_id, data))


@router.delete("/articles/{article_id}")
def delete_article(article_id: int, session: Session = Depends(get_session)):
    article_service.delete_article(session, article_id)
    return {"message": "Article deleted successfully"}


# ==================================================================
#  ✅ Publishing
# ==================================================================
@router.post("/articles/{article_id}/publish", response_model=ArticleRead)
def publish_article(article_id: int, session: Session = Depends(get_session)):
    article = article_service.set_article_status(session, article_id, ArticleStatus.PUBLISHED)
    return ArticleRead.model_validate(article)


@router.post("/articles/{article_id}/unpublish", response_model=ArticleRead)
def unpublish_article(article_id: int, session: Session = Depends(get_session)):
    article = article_service.set_article_status(session, article_id, ArticleStatus.DRAFT)
    return ArticleRead.model_validate(article)


@router.post("/articles/{article_id}/archive", response_model=ArticleRead)
def archive_article(article_id: int, session: Session = Depends(get_session)):
    article = article_service.set_article_status(session, article_id, ArticleStatus.ARCHIVED)
    return ArticleRead.model_validate(article)
