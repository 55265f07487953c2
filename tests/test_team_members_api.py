"""
API tests for /team-members and the public team page.
"""


def create(client, full_name, **payload):
    return client.post("/team-members/", json={"full_name": full_name, **payload})


class TestTeamMembers:
    def test_create_and_read(self, client):
        response = create(client, "  Anna Petrova ", position="Director", email="anna@example.org")

        assert response.status_code == 201
        body = response.json()
        assert body["full_name"] == "Anna Petrova"
        assert body["initials"] == "AP"
        assert body["projects_count"] == 0
        assert client.get(f"/team-members/{body['id']}").json()["email"] == "anna@example.org"

    def test_invalid_email_is_rejected(self, client):
        assert create(client, "Ivan", email="not-an-email").status_code == 422

    def test_unknown_member(self, client):
        response = client.get("/team-members/42")

        assert response.status_code == 404
        assert response.json()["status"] == 404

    def test_search_ignores_case(self, client):
        create(client, "Мария Орлова", position="Photographer")
        create(client, "Ivan Sokolov", position="Workshop lead")

        by_name = client.get("/team-members/", params={"search": "МАРИЯ"}).json()
        by_position = client.get("/team-members/", params={"search": "workshop"}).json()

        assert [m["full_name"] for m in by_name["items"]] == ["Мария Орлова"]
        assert [m["full_name"] for m in by_position["items"]] == ["Ivan Sokolov"]

    def test_partial_update(self, client):
        member = create(client, "Anna Petrova", position="Director").json()

        body = client.put(f"/team-members/{member['id']}", json={"position": "Curator"}).json()

        assert body["position"] == "Curator"
        assert body["full_name"] == "Anna Petrova"

    def test_deactivated_members_leave_the_public_page(self, client):
        anna = create(client, "Anna Petrova").json()
        create(client, "Ivan Sokolov")

        client.post(f"/team-members/{anna['id']}/deactivate")

        assert [m["full_name"] for m in client.get("/public/team").json()] == ["Ivan Sokolov"]
        assert client.get("/team-members/", params={"active": "false"}).json()["total_count"] == 1

        client.post(f"/team-members/{anna['id']}/activate")
        assert len(client.get("/public/team").json()) == 2

    def test_reorder(self, client):
        a = create(client, "Anna Petrova").json()["id"]
        b = create(client, "Ivan Sokolov").json()["id"]

        response = client.put("/team-members/order", json={"member_ids": [b, a]})

        assert [(m["id"], m["sort_order"]) for m in response.json()] == [(b, 0), (a, 1)]
        assert [m["id"] for m in client.get("/team-members/").json()["items"]] == [b, a]

    def test_reorder_with_duplicates_is_invalid(self, client):
        a = create(client, "Anna Petrova").json()["id"]

        assert client.put("/team-members/order", json={"member_ids": [a, a]}).status_code == 400

    def test_delete_member_leaves_project_teams(self, client, make_project):
        anna = create(client, "Anna Petrova").json()
        project = make_project()
        client.put(f"/projects/{project.id}/team", json={"member_ids": [anna["id"]]})

        assert client.delete(f"/team-members/{anna['id']}").status_code == 200

        assert client.get(f"/projects/{project.id}").json()["team_member_ids"] == []

    def test_role_for_member_outside_project(self, client, make_project):
        anna = create(client, "Anna Petrova").json()
        project = make_project()

        response = client.put(f"/team-members/{anna['id']}/projects/{project.id}/role", json={"role": "Host"})

        assert response.status_code == 404
