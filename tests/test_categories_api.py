"""
API tests for /categories.
"""


class TestCategories:
    def test_create_normalises_and_rejects_duplicates(self, client):
        created = client.post("/categories/", json={"name": "  Open   Air "})
        duplicate = client.post("/categories/", json={"name": "open air"})

        assert created.status_code == 201
        assert created.json()["name"] == "Open Air"
        assert created.json()["normalized_name"] == "open air"
        assert duplicate.status_code == 409

    def test_blank_name(self, client):
        assert client.post("/categories/", json={"name": "   "}).status_code == 422

    def test_list_with_project_counts(self, client, make_project):
        client.post("/categories/", json={"name": "festival"})
        client.post("/categories/", json={"name": "workshop"})
        make_project(category="festival")
        make_project(category="festival")

        body = client.get("/categories/").json()

        assert [(c["name"], c["project_count"]) for c in body] == [("festival", 2), ("workshop", 0)]

    def test_rename_relabels_projects(self, client, make_project):
        category = client.post("/categories/", json={"name": "festival"}).json()
        project = make_project(category="festival")

        response = client.put(f"/categories/{category['id']}", json={"name": "Festivals"})

        assert response.status_code == 200
        assert response.json()["project_count"] == 1
        assert client.get(f"/projects/{project.id}").json()["category"] == "Festivals"

    def test_rename_onto_existing_name_is_a_conflict(self, client):
        festival = client.post("/categories/", json={"name": "festival"}).json()
        client.post("/categories/", json={"name": "workshop"})

        response = client.put(f"/categories/{festival['id']}", json={"name": "Workshop"})

        assert response.status_code == 409

    def test_rename_changing_only_case(self, client):
        festival = client.post("/categories/", json={"name": "festival"}).json()

        response = client.put(f"/categories/{festival['id']}", json={"name": "Festival"})

        assert response.status_code == 200
        assert response.json()["name"] == "Festival"

    def test_delete(self, client):
        category = client.post("/categories/", json={"name": "festival"}).json()

        assert client.delete(f"/categories/{category['id']}").status_code == 200
        assert client.get("/categories/").json() == []
        assert client.delete(f"/categories/{category['id']}").status_code == 404
