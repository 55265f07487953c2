# services/project_filter.py
from datetime import date
from enum import Enum
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, field_validator
from sqlmodel import col

from models.models import Project, ProjectStatus


class DateField(str, Enum):
    START_DATE = "start_date"
    END_DATE = "end_date"
    EVENT_DATE = "event_date"
    PERIOD = "period"  # [start_date, end_date] overlaps the range


# user-facing sort names -> Project attribute
SORT_FIELDS = {
    "title": "title",
    "category": "category",
    "status": "status",
    "location": "location",
    "created": "created_at",
    "createdat": "created_at",
    "created_at": "created_at",
    "updated": "updated_at",
    "updatedat": "updated_at",
    "updated_at": "updated_at",
    "start": "start_date",
    "startdate": "start_date",
    "start_date": "start_date",
    "end": "end_date",
    "enddate": "end_date",
    "end_date": "end_date",
    "event": "event_date",
    "eventdate": "event_date",
    "event_date": "event_date",
}
DEFAULT_SORT_FIELD = "start_date"


class ProjectFilter(BaseModel):
    """
    Optional criteria for narrowing a project list.

    Every field may be left out; only the criteria that are present take part
    in matching and they are combined with AND.
    """

    category: Optional[str] = None
    status: Optional[ProjectStatus] = None
    search: Optional[str] = None

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    date_field: DateField = DateField.START_DATE
    year: Optional[int] = None

    has_photos: Optional[bool] = None
    has_videos: Optional[bool] = None
    has_partners: Optional[bool] = None
    has_team: Optional[bool] = None

    is_active: Optional[bool] = None
    is_upcoming: Optional[bool] = None
    is_completed: Optional[bool] = None
    is_annual: Optional[bool] = None

    location: Optional[str] = None
    show_only_with_location: Optional[bool] = None

    min_photo_count: Optional[int] = None
    min_video_count: Optional[int] = None
    min_partner_count: Optional[int] = None
    min_team_count: Optional[int] = None

    sort_by: str = DEFAULT_SORT_FIELD
    sort_direction: str = "DESC"

    @field_validator("category", "search", "location", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # === criterion groups ===

    def has_category_filter(self) -> bool:
        return self.category is not None

    def has_status_filter(self) -> bool:
        return self.status is not None

    def has_search_filter(self) -> bool:
        return self.search is not None and bool(self.search.strip())

    def has_date_filter(self) -> bool:
        return self.date_from is not None or self.date_to is not None or self.year is not None

    def has_content_filter(self) -> bool:
        return any(flag is not None for flag in (self.has_photos, self.has_videos, self.has_partners, self.has_team))

    def has_activity_filter(self) -> bool:
        return any(flag is not None for flag in (self.is_active, self.is_upcoming, self.is_completed, self.is_annual))

    def has_location_filter(self) -> bool:
        return self.location is not None or self.show_only_with_location is not None

    def has_min_count_filter(self) -> bool:
        return any(
            count is not None
            for count in (self.min_photo_count, self.min_video_count, self.min_partner_count, self.min_team_count)
        )

    def _active_groups(self) -> int:
        return sum(
            [
                self.has_category_filter(),
                self.has_status_filter(),
                self.has_search_filter(),
                self.has_date_filter(),
                self.has_content_filter(),
                self.has_activity_filter(),
                self.has_location_filter(),
                self.has_min_count_filter(),
            ]
        )

    def is_empty(self) -> bool:
        return self._active_groups() == 0

    def is_complex(self) -> bool:
        return self._active_groups() > 1

    @property
    def formatted_search(self) -> Optional[str]:
        if not self.has_search_filter():
            return None
        return self.search.strip()

    def status_from_activity_flags(self) -> Optional[ProjectStatus]:
        if self.is_active:
            return ProjectStatus.ACTIVE
        if self.is_upcoming:
            return ProjectStatus.PLANNED
        if self.is_completed:
            return ProjectStatus.ARCHIVED
        if self.is_annual:
            return ProjectStatus.ANNUAL
        return None

    @property
    def effective_status(self) -> Optional[ProjectStatus]:
        return self.status or self.status_from_activity_flags()

    def is_date_range_valid(self) -> bool:
        if self.date_from is None or self.date_to is None:
            return True
        return self.date_from <= self.date_to

    # === sorting ===

    @property
    def sort_field(self) -> str:
        if not self.sort_by or not self.sort_by.strip():
            return DEFAULT_SORT_FIELD
        return SORT_FIELDS.get(self.sort_by.strip().lower(), DEFAULT_SORT_FIELD)

    @property
    def sort_descending(self) -> bool:
        return (self.sort_direction or "").strip().upper() != "ASC"

    def sort(self, projects: Sequence[Project]) -> List[Project]:
        """Order projects by the sort field; projects without a value go last either way."""
        field_name = self.sort_field
        present = [p for p in projects if getattr(p, field_name) is not None]
        missing = [p for p in projects if getattr(p, field_name) is None]

        def key(project: Project):
            value = getattr(project, field_name)
            return value.casefold() if isinstance(value, str) else value

        present.sort(key=key, reverse=self.sort_descending)
        return present + missing

    # === matching ===

    def matches(self, project: Project) -> bool:
        return evaluate(project, self)

    def apply(self, statement):
        """Push the exact-match criteria down to the SQL statement."""
        if self.has_category_filter():
            statement = statement.where(col(Project.category) == self.category)
        status = self.effective_status
        if status is not None:
            statement = statement.where(col(Project.status) == status.value)
        return statement

    def __str__(self) -> str:
        return (
            f"ProjectFilter(category={self.category!r}, status={self.status}, search={self.search!r}, "
            f"date_from={self.date_from}, date_to={self.date_to}, complex={self.is_complex()})"
        )


# ============================================================
# Evaluation
# ============================================================
def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle.casefold() in haystack.casefold()


def _in_range(value: Optional[date], date_from: Optional[date], date_to: Optional[date]) -> bool:
    if value is None:
        return False
    if date_from is not None and value < date_from:
        return False
    if date_to is not None and value > date_to:
        return False
    return True


def _matches_dates(project: Project, project_filter: ProjectFilter) -> bool:
    date_from, date_to = project_filter.date_from, project_filter.date_to
    if date_from is None and date_to is None:
        return True

    if project_filter.date_field == DateField.PERIOD:
        start = project.start_date or project.end_date
        end = project.end_date or project.start_date
        if start is None:
            return False
        if date_from is not None and end < date_from:
            return False
        if date_to is not None and start > date_to:
            return False
        return True

    return _in_range(getattr(project, project_filter.date_field.value), date_from, date_to)


def _matches_presence(count: int, flag: Optional[bool]) -> bool:
    if flag is None:
        return True
    return (count > 0) == flag


def _meets_minimum(count: int, minimum: Optional[int]) -> bool:
    return minimum is None or count >= minimum


def evaluate(project: Project, project_filter: ProjectFilter) -> bool:
    """Return True when ``project`` satisfies every criterion present in ``project_filter``."""
    if project_filter.has_category_filter() and project.category != project_filter.category:
        return False

    status = project_filter.effective_status
    if status is not None and project.status != status.value:
        return False

    if project_filter.has_search_filter():
        term = project_filter.formatted_search
        if not (
            _contains(project.title, term)
            or _contains(project.short_description, term)
            or _contains(project.full_description, term)
        ):
            return False

    if not _matches_dates(project, project_filter):
        return False

    if project_filter.year is not None:
        if project.event_date is None or project.event_date.year != project_filter.year:
            return False

    if project_filter.location is not None and not _contains(project.location, project_filter.location.strip()):
        return False

    if project_filter.show_only_with_location and not (project.location and project.location.strip()):
        return False

    if not (
        _matches_presence(project.photo_count, project_filter.has_photos)
        and _matches_presence(project.video_count, project_filter.has_videos)
        and _matches_presence(project.partner_count, project_filter.has_partners)
        and _matches_presence(project.team_member_count, project_filter.has_team)
    ):
        return False

    return (
        _meets_minimum(project.photo_count, project_filter.min_photo_count)
        and _meets_minimum(project.video_count, project_filter.min_video_count)
        and _meets_minimum(project.partner_count, project_filter.min_partner_count)
        and _meets_minimum(project.team_member_count, project_filter.min_team_count)
    )
