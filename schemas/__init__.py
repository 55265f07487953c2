from .article_schema import ArticleCreate, ArticleUpdate, ArticleRead, ArticleSummary, ArticlePage
from .category_schema import CategoryCreate, CategoryRead, CategoryUpdate
from .content_schema import ImageCreate, ImageRead, VideoCreate, VideoRead, PartnerCreate, PartnerRead
from .project_schema import (
    ProjectCreate, ProjectRead, ProjectUpdate, ProjectSummary, ProjectPage,
    ProjectStats, ProjectStatusUpdate,
    TeamMemberBrief, TeamUpdate, TeamUpdateResult, ProjectTeamMemberRead,
    BatchAction, BatchRequest, BatchResult,
)
from .team_member_schema import (
    TeamMemberCreate, TeamMemberRead, TeamMemberUpdate, TeamMemberPage,
    TeamMemberReorder, ProjectRoleUpdate, ProjectRoleRead
)

__all__ = [
    # Article
    "ArticleCreate", "ArticleUpdate", "ArticleRead", "ArticleSummary", "ArticlePage",

    # Category
    "CategoryCreate", "CategoryRead", "CategoryUpdate",

    # Content
    "ImageCreate", "ImageRead", "VideoCreate", "VideoRead", "PartnerCreate", "PartnerRead",

    # Project
    "ProjectCreate", "ProjectRead", "ProjectUpdate", "ProjectSummary", "ProjectPage",
    "ProjectStats", "ProjectStatusUpdate",
    "TeamMemberBrief", "TeamUpdate", "TeamUpdateResult", "ProjectTeamMemberRead",
    "BatchAction", "BatchRequest", "BatchResult",

    # Team member
    "TeamMemberCreate", "TeamMemberRead", "TeamMemberUpdate", "TeamMemberPage",
    "TeamMemberReorder", "ProjectRoleUpdate", "ProjectRoleRead",
]
