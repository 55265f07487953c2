import re
from typing import Optional, List
from datetime import datetime, date, timezone
from enum import Enum
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.types import TypeDecorator


# ============================================================
# TIMESTAMPS
# ============================================================
def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware DATETIME stored in UTC. Naive values are taken as UTC both ways (SQLite drops the offset)."""

    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


# ============================================================
# ENUMS
# ============================================================
class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ANNUAL = "annual"
    PLANNED = "planned"
    ARCHIVED = "archived"
    PAUSED = "paused"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        # Accepts member names ("ACTIVE") and the legacy "archive" spelling
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "archive":
                return cls.ARCHIVED
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def display_name(self) -> str:
        return STATUS_DISPLAY_NAMES[self]

    @property
    def is_public(self) -> bool:
        return self in (ProjectStatus.ACTIVE, ProjectStatus.ANNUAL)


STATUS_DISPLAY_NAMES = {
    ProjectStatus.ACTIVE: "Active",
    ProjectStatus.ANNUAL: "Annual",
    ProjectStatus.PLANNED: "Planned",
    ProjectStatus.ARCHIVED: "Archived",
    ProjectStatus.PAUSED: "Paused",
    ProjectStatus.CANCELLED: "Cancelled",
}

PUBLIC_STATUSES = [ProjectStatus.ACTIVE.value, ProjectStatus.ANNUAL.value]


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# ============================================================
# LINK MODEL
# ============================================================
class ProjectTeamMemberLink(SQLModel, table=True):
    """Single join table for the project <-> team member relation; also holds the per-project role."""

    __tablename__ = "project_team_member"
    project_id: int = Field(foreign_key="project.id", primary_key=True)
    team_member_id: int = Field(foreign_key="team_member.id", primary_key=True)
    role: Optional[str] = Field(default=None, max_length=100)


# ============================================================
# CATEGORY
# ============================================================
class ProjectCategory(SQLModel, table=True):
    __tablename__ = "project_category"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    normalized_name: str = Field(max_length=50, unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)


# ============================================================
# TEAM MEMBER
# ============================================================
class TeamMember(SQLModel, table=True):
    __tablename__ = "team_member"
    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=100, index=True)
    position: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = Field(default=None, sa_column=Column(Text))
    avatar_path: Optional[str] = Field(default=None, max_length=500)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    social_links: Optional[str] = Field(default=None, max_length=1000)
    sort_order: int = Field(default=0)
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    projects: List["Project"] = Relationship(back_populates="team_members", link_model=ProjectTeamMemberLink)

    @property
    def initials(self) -> str:
        names = (self.full_name or "").split()
        if len(names) >= 2:
            return (names[0][0] + names[-1][0]).upper()
        if len(names) == 1:
            return names[0][:2].upper()
        return "TM"

    @property
    def projects_count(self) -> int:
        return len(self.projects or [])

    def participates_in(self, project_id: int) -> bool:
        return any(project.id == project_id for project in self.projects)


# ============================================================
# PROJECT
# ============================================================
PROJECT_VERSION_COLUMN = Column("version", Integer, nullable=False, default=1)


class Project(SQLModel, table=True):
    __tablename__ = "project"
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    slug: str = Field(max_length=200, unique=True, index=True)
    category: str = Field(max_length=50, index=True)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20, index=True)
    short_description: Optional[str] = Field(default=None, max_length=500)
    full_description: Optional[str] = Field(default=None, sa_column=Column(Text))
    goals: Optional[str] = Field(default=None, sa_column=Column(Text))
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: Optional[date] = Field(default=None, index=True)
    end_date: Optional[date] = None
    event_date: Optional[date] = None
    curator_contacts: Optional[str] = Field(default=None, max_length=500)
    participation_info: Optional[str] = Field(default=None, sa_column=Column(Text))

    # Public page sections
    show_description: bool = Field(default=True)
    show_photos: bool = Field(default=True)
    show_videos: bool = Field(default=True)
    show_team: bool = Field(default=True)
    show_participation: bool = Field(default=True)
    show_partners: bool = Field(default=True)
    show_related: bool = Field(default=True)

    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    # Bumped by touch() on every write. The UPDATE/DELETE also matches the
    # previously loaded value, so a concurrent writer raises StaleDataError.
    version: int = Field(default=1, sa_column=PROJECT_VERSION_COLUMN)

    __mapper_args__ = {
        "version_id_col": PROJECT_VERSION_COLUMN,
        "version_id_generator": False,
    }

    team_members: List["TeamMember"] = Relationship(back_populates="projects", link_model=ProjectTeamMemberLink)
    images: List["ProjectImage"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectImage.sort_order"},
    )
    videos: List["ProjectVideo"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectVideo.sort_order"},
    )
    partners: List["ProjectPartner"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectPartner.sort_order"},
    )
    articles: List["ProjectArticle"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "ProjectArticle.sort_order"},
    )

    @property
    def status_enum(self) -> ProjectStatus:
        return ProjectStatus(self.status)

    @property
    def photo_count(self) -> int:
        return len(self.images or [])

    @property
    def video_count(self) -> int:
        return len(self.videos or [])

    @property
    def partner_count(self) -> int:
        return len(self.partners or [])

    @property
    def team_member_count(self) -> int:
        return len(self.team_members or [])

    @property
    def team_member_ids(self) -> List[int]:
        return sorted(member.id for member in self.team_members or [])

    def is_completed(self, today: Optional[date] = None) -> bool:
        if self.end_date is None:
            return False
        return self.end_date < (today or date.today())

    def is_currently_active(self, today: Optional[date] = None) -> bool:
        if self.status != ProjectStatus.ACTIVE.value:
            return False
        if self.start_date is None or self.end_date is None:
            return False
        today = today or date.today()
        return self.start_date <= today <= self.end_date

    def touch(self) -> None:
        self.updated_at = utcnow()
        self.version = (self.version or 0) + 1

    # --- association mutators (both sides go through these) ---
    def link_team_member(self, member: "TeamMember") -> bool:
        """Add ``member`` to the team; back_populates keeps ``member.projects`` in step."""
        if any(existing is member for existing in self.team_members):
            return False
        self.team_members.append(member)
        return True

    def unlink_team_member(self, member: "TeamMember") -> bool:
        for index, existing in enumerate(self.team_members):
            if existing is member:
                del self.team_members[index]
                return True
        return False


# ============================================================
# PROJECT CONTENT
# ============================================================
class ProjectImage(SQLModel, table=True):
    __tablename__ = "project_image"
    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", index=True)
    file_path: str = Field(max_length=500)
    caption: Optional[str] = Field(default=None, max_length=300)
    is_key_photo: bool = Field(default=False)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    project: Optional[Project] = Relationship(back_populates="images")


class ProjectVideo(SQLModel, table=True):
    __tablename__ = "project_video"
    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", index=True)
    title: str = Field(max_length=200)
    video_url: str = Field(max_length=500)
    description: Optional[str] = Field(default=None, max_length=1000)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    project: Optional[Project] = Relationship(back_populates="videos")


class ProjectPartner(SQLModel, table=True):
    __tablename__ = "project_partner"
    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", index=True)
    name: str = Field(max_length=200)
    website_url: Optional[str] = Field(default=None, max_length=500)
    logo_path: Optional[str] = Field(default=None, max_length=500)
    contribution: Optional[str] = Field(default=None, max_length=500)
    sort_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    project: Optional[Project] = Relationship(back_populates="partners")


# ============================================================
# ARTICLES
# ============================================================
ARTICLE_DEFAULT_AUTHOR = "Project team"
_HTML_TAG = re.compile(r"<[^>]*>")


def _plain_excerpt(html: Optional[str], limit: int) -> str:
    text = _HTML_TAG.sub("", html or "").strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


class ProjectArticle(SQLModel, table=True):
    __tablename__ = "project_article"
    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", index=True)
    title: str = Field(max_length=200)
    slug: str = Field(max_length=200, unique=True, index=True)
    content: str = Field(sa_column=Column(Text, nullable=False))
    short_description: Optional[str] = Field(default=None, max_length=500)
    featured_image_path: Optional[str] = Field(default=None, max_length=500)
    author: Optional[str] = Field(default=None, max_length=100)
    status: str = Field(default=ArticleStatus.DRAFT.value, max_length=20, index=True)
    published_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime, index=True)
    view_count: int = Field(default=0)
    sort_order: int = Field(default=0)
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime)

    project: Optional[Project] = Relationship(back_populates="articles")

    def is_published(self, now: Optional[datetime] = None) -> bool:
        """Published and not scheduled for later."""
        if self.status != ArticleStatus.PUBLISHED.value:
            return False
        return self.published_at is None or self.published_at <= (now or utcnow())

    def publish(self, when: Optional[datetime] = None) -> None:
        self.status = ArticleStatus.PUBLISHED.value
        self.published_at = when or utcnow()

    def unpublish(self) -> None:
        self.status = ArticleStatus.DRAFT.value
        self.published_at = None

    def archive(self) -> None:
        self.status = ArticleStatus.ARCHIVED.value

    @property
    def display_author(self) -> str:
        return self.author.strip() if self.author and self.author.strip() else ARTICLE_DEFAULT_AUTHOR

    @property
    def display_date(self) -> datetime:
        return self.published_at or self.created_at

    @property
    def effective_meta_title(self) -> str:
        return self.meta_title.strip() if self.meta_title and self.meta_title.strip() else self.title

    @property
    def effective_meta_description(self) -> str:
        if self.meta_description and self.meta_description.strip():
            return self.meta_description
        if self.short_description and self.short_description.strip():
            return self.short_description
        return _plain_excerpt(self.content, 150)

    @property
    def content_preview(self) -> str:
        return _plain_excerpt(self.content, 200)


# ============================================================
# EXPORTS
# ============================================================
__all__ = [
    "ProjectStatus",
    "ArticleStatus",
    "PUBLIC_STATUSES",
    "ProjectTeamMemberLink",
    "ProjectCategory",
    "TeamMember",
    "Project",
    "ProjectImage",
    "ProjectVideo",
    "ProjectPartner",
    "ProjectArticle",
    "UTCDateTime",
    "utcnow",
]
