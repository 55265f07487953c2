# project_schema.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Union, Dict
from datetime import datetime, date
from enum import Enum

from models.models import ProjectStatus


class ProjectBase(BaseModel):
    short_description: Optional[str] = Field(default=None, max_length=500)
    full_description: Optional[str] = None
    goals: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    event_date: Optional[date] = None
    curator_contacts: Optional[str] = Field(default=None, max_length=500)
    participation_info: Optional[str] = None
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)


class ProjectCreate(ProjectBase):
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)  # generated from title when omitted
    category: str = Field(..., min_length=1, max_length=50)
    status: ProjectStatus = ProjectStatus.ACTIVE
    show_description: bool = True
    show_photos: bool = True
    show_videos: bool = True
    show_team: bool = True
    show_participation: bool = True
    show_partners: bool = True
    show_related: bool = True
    team_member_ids: Optional[List[Union[int, str]]] = None


class ProjectUpdate(ProjectBase):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    status: Optional[ProjectStatus] = None
    show_description: Optional[bool] = None
    show_photos: Optional[bool] = None
    show_videos: Optional[bool] = None
    show_team: Optional[bool] = None
    show_participation: Optional[bool] = None
    show_partners: Optional[bool] = None
    show_related: Optional[bool] = None
    expected_version: Optional[int] = None


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus


class TeamMemberBrief(BaseModel):
    id: int
    full_name: str
    position: Optional[str] = None
    avatar_path: Optional[str] = None
    initials: str

    model_config = ConfigDict(from_attributes=True)


class ProjectSummary(BaseModel):
    id: int
    title: str
    slug: str
    category: str
    status: ProjectStatus
    short_description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    event_date: Optional[date] = None
    photo_count: int = 0
    video_count: int = 0
    partner_count: int = 0
    team_member_count: int = 0
    created_at: datetime
    updated_at: datetime
    version: int

    model_config = ConfigDict(from_attributes=True)


class ProjectRead(ProjectSummary):
    full_description: Optional[str] = None
    goals: Optional[str] = None
    curator_contacts: Optional[str] = None
    participation_info: Optional[str] = None
    show_description: bool
    show_photos: bool
    show_videos: bool
    show_team: bool
    show_participation: bool
    show_partners: bool
    show_related: bool
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    team_member_ids: List[int] = Field(default_factory=list)
    team_members: List[TeamMemberBrief] = Field(default_factory=list)


class ProjectPage(BaseModel):
    items: List[ProjectSummary]
    total_count: int
    total_pages: int
    page: int
    size: int
    has_next: bool
    has_previous: bool


class ProjectStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    non_archived: int


# ------------------------------------------------------------
# Team assignment
# ------------------------------------------------------------
class TeamUpdate(BaseModel):
    # "1,2,3" or [1, 2, "3"]; None or empty clears the team
    member_ids: Optional[Union[str, List[Union[int, str]]]] = None
    expected_version: Optional[int] = None


class TeamUpdateResult(BaseModel):
    project_id: int
    version: int
    team_member_ids: List[int]
    added: List[int]
    removed: List[int]
    skipped: List[str]


class ProjectTeamMemberRead(TeamMemberBrief):
    role: Optional[str] = None
    display_role: Optional[str] = None


# ------------------------------------------------------------
# Batch status changes
# ------------------------------------------------------------
class BatchAction(str, Enum):
    ACTIVATE = "activate"
    ARCHIVE = "archive"
    DELETE = "delete"


class BatchRequest(BaseModel):
    action: BatchAction
    ids: List[int] = Field(..., min_length=1)


class BatchFailure(BaseModel):
    id: int
    message: str


class BatchResult(BaseModel):
    action: BatchAction
    succeeded: List[int] = []
    failed: List[BatchFailure] = []
