# team_member_schema.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import Optional, List
from datetime import datetime


class TeamMemberCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = None
    avatar_path: Optional[str] = Field(default=None, max_length=500)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    social_links: Optional[str] = Field(default=None, max_length=1000)
    sort_order: int = 0
    is_active: bool = True


class TeamMemberUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = None
    avatar_path: Optional[str] = Field(default=None, max_length=500)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    social_links: Optional[str] = Field(default=None, max_length=1000)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class TeamMemberRead(BaseModel):
    id: int
    full_name: str
    position: Optional[str] = None
    bio: Optional[str] = None
    avatar_path: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    social_links: Optional[str] = None
    sort_order: int
    is_active: bool
    initials: str
    projects_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TeamMemberPage(BaseModel):
    items: List[TeamMemberRead]
    total_count: int
    total_pages: int
    page: int
    size: int
    has_next: bool
    has_previous: bool


class TeamMemberReorder(BaseModel):
    member_ids: List[int] = Field(..., min_length=1)


class ProjectRoleUpdate(BaseModel):
    # None clears the role; the member's position is shown instead
    role: Optional[str] = Field(default=None, max_length=100)


class ProjectRoleRead(BaseModel):
    project_id: int
    team_member_id: int
    role: Optional[str] = None
    display_role: Optional[str] = None
