"""
Tests for services/project_filter.py - criterion evaluation and ordering.
"""

from datetime import date, datetime, timezone

import pytest

from models.models import Project, ProjectImage, ProjectPartner, ProjectStatus, ProjectVideo, TeamMember
from services.project_filter import DateField, ProjectFilter, evaluate


def make(title="Untitled", **fields) -> Project:
    fields.setdefault("slug", title.lower().replace(" ", "-"))
    fields.setdefault("category", "festival")
    return Project(title=title, **fields)


class TestEmptyFilter:
    def test_empty_filter_matches_everything(self, snow_maiden):
        project_filter = ProjectFilter()

        assert project_filter.is_empty()
        assert evaluate(snow_maiden, project_filter)
        assert evaluate(make("Bare"), project_filter)

    def test_blank_strings_are_treated_as_absent(self, snow_maiden):
        project_filter = ProjectFilter(category="  ", search="", location=" ")

        assert project_filter.is_empty()
        assert evaluate(snow_maiden, project_filter)


class TestSnowMaiden:
    """A winter festival matched from several angles at once."""

    def test_all_matching_criteria_accept(self, snow_maiden):
        project_filter = ProjectFilter(
            category="festival",
            search="snow",
            date_from=date(2025, 11, 1),
            date_to=date(2025, 12, 15),
        )

        assert project_filter.is_complex()
        assert evaluate(snow_maiden, project_filter)

    def test_one_failing_criterion_rejects(self, snow_maiden):
        project_filter = ProjectFilter(category="workshop", search="snow")

        assert not evaluate(snow_maiden, project_filter)

    def test_start_date_outside_range_rejects(self, snow_maiden):
        project_filter = ProjectFilter(date_from=date(2025, 12, 2))

        assert not evaluate(snow_maiden, project_filter)


class TestSingleCriteria:
    @pytest.mark.parametrize(
        "criteria, expected",
        [
            ({"category": "festival"}, True),
            ({"category": "Festival"}, False),
            ({"status": ProjectStatus.ANNUAL}, True),
            ({"status": ProjectStatus.ACTIVE}, False),
            ({"search": "SNOW"}, True),
            ({"search": "costume"}, True),
            ({"search": "crown of the winter"}, True),
            ({"search": "summer"}, False),
            ({"location": "tver"}, True),
            ({"location": "Moscow"}, False),
            ({"show_only_with_location": True}, True),
            ({"year": 2025}, True),
            ({"year": 2024}, False),
            ({"date_to": date(2025, 11, 30)}, False),
            ({"date_from": date(2025, 12, 1), "date_to": date(2025, 12, 1)}, True),
            ({"date_field": DateField.EVENT_DATE, "date_from": date(2025, 12, 20)}, True),
            ({"date_field": DateField.EVENT_DATE, "date_from": date(2025, 12, 21)}, False),
            ({"date_field": DateField.END_DATE, "date_to": date(2025, 12, 30)}, False),
        ],
    )
    def test_criterion_alone(self, snow_maiden, criteria, expected):
        assert evaluate(snow_maiden, ProjectFilter(**criteria)) is expected

    def test_search_is_case_insensitive_beyond_ascii(self):
        project = make("Снегурочка года", slug="snegurochka")

        assert evaluate(project, ProjectFilter(search="СНЕГУРОЧКА"))
        assert evaluate(project, ProjectFilter(search="года"))

    def test_missing_date_never_matches_a_date_range(self):
        undated = make("Undated")

        assert not evaluate(undated, ProjectFilter(date_from=date(2020, 1, 1)))
        assert not evaluate(undated, ProjectFilter(year=2025))

    def test_show_only_with_location_rejects_blank_location(self):
        assert not evaluate(make("Nowhere", location="   "), ProjectFilter(show_only_with_location=True))


class TestPeriodOverlap:
    @pytest.mark.parametrize(
        "date_from, date_to, expected",
        [
            (date(2025, 11, 1), date(2025, 12, 5), True),
            (date(2025, 12, 25), date(2026, 1, 10), True),
            (date(2025, 12, 10), date(2025, 12, 11), True),
            (date(2026, 1, 1), None, False),
            (None, date(2025, 11, 30), False),
        ],
    )
    def test_period_overlaps_range(self, snow_maiden, date_from, date_to, expected):
        project_filter = ProjectFilter(date_field=DateField.PERIOD, date_from=date_from, date_to=date_to)

        assert evaluate(snow_maiden, project_filter) is expected


class TestDateRange:
    def test_inverted_range_is_reported_invalid(self):
        assert not ProjectFilter(date_from=date(2025, 2, 1), date_to=date(2025, 1, 1)).is_date_range_valid()
        assert ProjectFilter(date_from=date(2025, 1, 1)).is_date_range_valid()

    def test_inverted_range_matches_nothing(self, snow_maiden):
        project_filter = ProjectFilter(date_from=date(2025, 12, 31), date_to=date(2025, 12, 1))

        assert not evaluate(snow_maiden, project_filter)


class TestActivityFlags:
    @pytest.mark.parametrize(
        "flag, status",
        [
            ("is_active", ProjectStatus.ACTIVE),
            ("is_upcoming", ProjectStatus.PLANNED),
            ("is_completed", ProjectStatus.ARCHIVED),
            ("is_annual", ProjectStatus.ANNUAL),
        ],
    )
    def test_flag_maps_to_status(self, flag, status):
        project_filter = ProjectFilter(**{flag: True})

        assert project_filter.effective_status == status
        assert evaluate(make("Match", status=status.value), project_filter)
        assert not evaluate(make("Other", status=ProjectStatus.CANCELLED.value), project_filter)

    def test_explicit_status_wins_over_flags(self):
        project_filter = ProjectFilter(status=ProjectStatus.PAUSED, is_active=True)

        assert project_filter.effective_status == ProjectStatus.PAUSED

    def test_false_flags_do_not_narrow(self):
        project_filter = ProjectFilter(is_active=False)

        assert project_filter.effective_status is None
        assert evaluate(make("Any", status=ProjectStatus.CANCELLED.value), project_filter)

    def test_legacy_archive_spelling(self):
        assert ProjectStatus("archive") is ProjectStatus.ARCHIVED
        assert ProjectStatus("ANNUAL") is ProjectStatus.ANNUAL


class TestContentCriteria:
    @pytest.fixture
    def rich(self) -> Project:
        project = make("Rich")
        project.images.append(ProjectImage(file_path="a.jpg"))
        project.images.append(ProjectImage(file_path="b.jpg"))
        project.videos.append(ProjectVideo(title="Clip", video_url="https://video.example/1"))
        project.team_members.append(TeamMember(full_name="Anna Petrova"))
        return project

    def test_presence_flags(self, rich):
        assert evaluate(rich, ProjectFilter(has_photos=True, has_videos=True, has_team=True))
        assert evaluate(rich, ProjectFilter(has_partners=False))
        assert not evaluate(rich, ProjectFilter(has_partners=True))
        assert not evaluate(rich, ProjectFilter(has_photos=False))

    def test_minimum_counts(self, rich):
        assert evaluate(rich, ProjectFilter(min_photo_count=2, min_video_count=1, min_team_count=1))
        assert not evaluate(rich, ProjectFilter(min_photo_count=3))
        assert evaluate(rich, ProjectFilter(min_partner_count=0))

        rich.partners.append(ProjectPartner(name="City Library"))
        assert evaluate(rich, ProjectFilter(min_partner_count=1))


class TestSorting:
    def test_unknown_sort_field_falls_back_to_start_date(self):
        assert ProjectFilter(sort_by="popularity").sort_field == "start_date"
        assert ProjectFilter(sort_by=" ").sort_field == "start_date"
        assert ProjectFilter(sort_by="createdAt").sort_field == "created_at"

    def test_direction_defaults_to_descending(self):
        assert ProjectFilter().sort_descending
        assert ProjectFilter(sort_direction="sideways").sort_descending
        assert not ProjectFilter(sort_direction="asc").sort_descending

    def test_missing_values_go_last_in_both_directions(self):
        early = make("Early", start_date=date(2024, 1, 1))
        late = make("Late", start_date=date(2025, 1, 1))
        undated = make("Undated")

        descending = ProjectFilter().sort([undated, early, late])
        ascending = ProjectFilter(sort_direction="ASC").sort([undated, late, early])

        assert [p.title for p in descending] == ["Late", "Early", "Undated"]
        assert [p.title for p in ascending] == ["Early", "Late", "Undated"]

    def test_title_sort_ignores_case(self):
        projects = [make("beta"), make("Alpha"), make("gamma")]

        ordered = ProjectFilter(sort_by="title", sort_direction="ASC").sort(projects)

        assert [p.title for p in ordered] == ["Alpha", "beta", "gamma"]

    def test_created_sort(self):
        older = make("Older", created_at=datetime(2024, 5, 1, tzinfo=timezone.utc))
        newer = make("Newer", created_at=datetime(2025, 5, 1, tzinfo=timezone.utc))

        assert [p.title for p in ProjectFilter(sort_by="created").sort([older, newer])] == ["Newer", "Older"]
