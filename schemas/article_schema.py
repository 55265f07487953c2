# article_schema.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime

from models.models import ArticleStatus


class ArticleBase(BaseModel):
    short_description: Optional[str] = Field(default=None, max_length=500)
    featured_image_path: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=100)
    sort_order: int = 0
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)


class ArticleCreate(ArticleBase):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    slug: Optional[str] = Field(default=None, max_length=200)  # generated from title when omitted
    publish: bool = False


class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, max_length=200)
    short_description: Optional[str] = Field(default=None, max_length=500)
    featured_image_path: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=100)
    sort_order: Optional[int] = None
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)


class ArticleSummary(BaseModel):
    id: int
    project_id: int
    title: str
    slug: str
    status: ArticleStatus
    short_description: Optional[str] = None
    featured_image_path: Optional[str] = None
    display_author: str
    content_preview: str
    published_at: Optional[datetime] = None
    display_date: datetime
    view_count: int
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ArticleRead(ArticleSummary):
    content: str
    author: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    effective_meta_title: str
    effective_meta_description: str
    created_at: datetime
    updated_at: datetime


class ArticlePage(BaseModel):
    items: List[ArticleSummary]
    total_count: int
    total_pages: int
    page: int
    size: int
    has_next: bool
    has_previous: bool
