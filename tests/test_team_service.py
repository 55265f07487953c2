"""
Tests for services/team_service.py - reconciling a project's team.
"""

import pytest
from sqlmodel import select

from core.exceptions import Conflict, NotFound
from models.models import ProjectTeamMemberLink
from services.team_service import (
    available_members,
    display_role,
    parse_member_ids,
    reconcile_team,
    set_project_role,
    team_with_roles,
)


class TestParseMemberIds:
    def test_none_and_empty(self):
        assert parse_member_ids(None) == ([], [])
        assert parse_member_ids("") == ([], [])
        assert parse_member_ids([]) == ([], [])

    def test_comma_separated_string(self):
        assert parse_member_ids("3, 1,3 ,2") == ([3, 1, 2], [])

    def test_malformed_entries_are_reported(self):
        ids, skipped = parse_member_ids(["4", "abc", 0, -2, "", True, 5])

        assert ids == [4, 5]
        assert skipped == ["abc", "0", "-2", "True"]


class TestReconcileTeam:
    def test_team_is_replaced_and_both_sides_agree(self, session, make_project, make_member):
        anna, ivan, maria = make_member("Anna Petrova"), make_member("Ivan Sokolov"), make_member("Maria Orlova")
        project = make_project()

        reconcile_team(session, project, [anna.id, ivan.id])
        result = reconcile_team(session, project, [ivan.id, maria.id])

        assert result.added == [maria.id]
        assert result.removed == [anna.id]
        assert project.team_member_ids == sorted([ivan.id, maria.id])
        session.refresh(anna)
        session.refresh(maria)
        assert anna.projects == []
        assert [p.id for p in maria.projects] == [project.id]

        links = session.exec(select(ProjectTeamMemberLink)).all()
        assert sorted(link.team_member_id for link in links) == sorted([ivan.id, maria.id])

    def test_reconcile_is_idempotent(self, session, make_project, make_member):
        anna, ivan = make_member("Anna Petrova"), make_member("Ivan Sokolov")
        project = make_project()

        first = reconcile_team(session, project, [anna.id, ivan.id])
        version_after_first = project.version
        second = reconcile_team(session, project, f"{ivan.id},{anna.id}")

        assert first.changed
        assert not second.changed
        assert project.version == version_after_first
        assert project.team_member_ids == sorted([anna.id, ivan.id])

    def test_change_bumps_version(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()

        reconcile_team(session, project, [anna.id])

        assert project.version == 2

    def test_empty_target_clears_team(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()
        reconcile_team(session, project, [anna.id])

        result = reconcile_team(session, project, None)

        assert result.removed == [anna.id]
        assert project.team_member_ids == []

    def test_unknown_member_changes_nothing(self, session, make_project, make_member):
        anna, ivan = make_member("Anna Petrova"), make_member("Ivan Sokolov")
        project = make_project()
        reconcile_team(session, project, [anna.id])
        version = project.version

        with pytest.raises(NotFound):
            reconcile_team(session, project, [ivan.id, 999])

        session.refresh(project)
        assert project.team_member_ids == [anna.id]
        assert project.version == version

    def test_malformed_ids_are_skipped_not_fatal(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()

        result = reconcile_team(session, project, f"{anna.id}, abc")

        assert result.skipped == ["abc"]
        assert project.team_member_ids == [anna.id]

    def test_stale_version_is_a_conflict(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()

        with pytest.raises(Conflict):
            reconcile_team(session, project, [anna.id], expected_version=project.version + 1)

        assert project.team_member_ids == []

    def test_matching_version_is_accepted(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()

        result = reconcile_team(session, project, [anna.id], expected_version=1)

        assert result.changed


class TestRoles:
    def test_role_overrides_position(self, session, make_project, make_member):
        anna = make_member("Anna Petrova", position="Festival director", sort_order=1)
        ivan = make_member("Ivan Sokolov", position="Workshop lead", sort_order=0)
        project = make_project()
        reconcile_team(session, project, [anna.id, ivan.id])

        set_project_role(session, project.id, anna.id, "  Host  ")
        rows = team_with_roles(session, project)

        assert [(member.full_name, role) for member, role in rows] == [
            ("Ivan Sokolov", None),
            ("Anna Petrova", "Host"),
        ]
        assert [display_role(member, role) for member, role in rows] == ["Workshop lead", "Host"]

    def test_blank_role_clears_it(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()
        reconcile_team(session, project, [anna.id])

        link = set_project_role(session, project.id, anna.id, "   ")

        assert link.role is None

    def test_role_for_non_member_is_not_found(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        project = make_project()

        with pytest.raises(NotFound):
            set_project_role(session, project.id, anna.id, "Host")

    def test_available_members_excludes_team_and_inactive(self, session, make_project, make_member):
        anna = make_member("Anna Petrova")
        ivan = make_member("Ivan Sokolov")
        make_member("Retired Person", is_active=False)
        project = make_project()
        reconcile_team(session, project, [anna.id])

        assert [m.id for m in available_members(session, project)] == [ivan.id]
