"""Tests for the public and admin category endpoints."""

from design_gallery.extensions import db
from design_gallery.models import Category, Design


class TestPublicCategories:
    """Tests for /api/categories."""

    def test_tree_with_counts(self, client, make_category, make_design):
        animals = make_category("Animals")
        cats = make_category("Cats", parent=animals)
        make_category("Abstract")
        make_design("Tabby", categories=[animals, cats])

        resp = client.get("/api/categories/")
        assert resp.status_code == 200
        tree = resp.get_json()

        assert [n["name"] for n in tree] == ["Abstract", "Animals"]
        animals_node = tree[1]
        assert animals_node["design_count"] == 1
        assert animals_node["subcategories"][0]["id"] == cats.id
        assert animals_node["subcategories"][0]["design_count"] == 1

    def test_flat_listing(self, client, make_category):
        animals = make_category("Animals")
        make_category("Cats", parent=animals)

        resp = client.get("/api/categories/?flat=1")
        data = resp.get_json()

        assert [c["name"] for c in data] == ["Animals", "Cats"]
        assert "subcategories" not in data[0]

    def test_get_category(self, client, make_category):
        animals = make_category("Animals")
        make_category("Cats", parent=animals)

        data = client.get(f"/api/categories/{animals.id}").get_json()
        assert data["name"] == "Animals"
        assert [s["name"] for s in data["subcategories"]] == ["Cats"]
        assert data["parent"] is None

    def test_get_unknown_category(self, client):
        resp = client.get("/api/categories/999")
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Category not found"


class TestAdminCategories:
    """Tests for /api/admin/categories."""

    def test_requires_login(self, client):
        resp = client.post("/api/admin/categories", json={"name": "Animals"})
        assert resp.status_code == 401
        assert resp.get_json()["error"] == "Authentication required"

    def test_requires_admin(self, client, user_headers):
        resp = client.post("/api/admin/categories", json={"name": "Animals"}, headers=user_headers)
        assert resp.status_code == 403

    def test_create_nested_category(self, client, auth_headers):
        parent = client.post("/api/admin/categories", json={"name": "  Animals "}, headers=auth_headers)
        assert parent.status_code == 201
        parent_id = parent.get_json()["id"]
        assert parent.get_json()["name"] == "Animals"

        child = client.post(
            "/api/admin/categories",
            json={"name": "Cats", "parent_id": parent_id},
            headers=auth_headers,
        )
        assert child.status_code == 201
        assert child.get_json()["parent_id"] == parent_id

        tree = client.get("/api/categories/").get_json()
        assert tree[0]["name"] == "Animals"
        assert [s["name"] for s in tree[0]["subcategories"]] == ["Cats"]

    def test_blank_name_rejected(self, client, auth_headers):
        resp = client.post("/api/admin/categories", json={"name": "   "}, headers=auth_headers)
        assert resp.status_code == 400

    def test_non_object_body_rejected(self, client, auth_headers):
        resp = client.post("/api/admin/categories", json=[1, 2], headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Request body must be a JSON object"

    def test_unknown_parent_rejected(self, client, auth_headers):
        resp = client.post(
            "/api/admin/categories", json={"name": "Cats", "parent_id": 42}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Parent category not found"

    def test_grandchild_rejected(self, client, auth_headers, make_category):
        animals = make_category("Animals")
        cats = make_category("Cats", parent=animals)

        resp = client.post(
            "/api/admin/categories", json={"name": "Kittens", "parent_id": cats.id}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert Category.query.filter_by(name="Kittens").first() is None

    def test_category_cannot_be_its_own_parent(self, client, auth_headers, make_category):
        animals = make_category("Animals")
        resp = client.put(
            f"/api/admin/categories/{animals.id}", json={"parent_id": animals.id}, headers=auth_headers
        )
        assert resp.status_code == 400

    def test_parent_with_children_cannot_become_child(self, client, auth_headers, make_category):
        animals = make_category("Animals")
        make_category("Cats", parent=animals)
        nature = make_category("Nature")

        resp = client.put(
            f"/api/admin/categories/{animals.id}", json={"parent_id": nature.id}, headers=auth_headers
        )
        assert resp.status_code == 400

    def test_rename_and_detach(self, client, auth_headers, make_category):
        animals = make_category("Animals")
        cats = make_category("Cats", parent=animals)

        resp = client.put(
            f"/api/admin/categories/{cats.id}",
            json={"name": "Felines", "parent_id": None},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json() == {"id": cats.id, "name": "Felines", "parent_id": None}

        names = [n["name"] for n in client.get("/api/categories/").get_json()]
        assert names == ["Animals", "Felines"]

    def test_delete_cascades_to_subcategories_and_links(
        self, client, auth_headers, make_category, make_design
    ):
        animals = make_category("Animals")
        cats = make_category("Cats", parent=animals)
        abstract = make_category("Abstract")
        design = make_design("Tabby", categories=[animals, cats, abstract])
        animals_id, cats_id, design_id = animals.id, cats.id, design.id

        resp = client.delete(f"/api/admin/categories/{animals_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert sorted(resp.get_json()["deleted"]) == sorted([animals_id, cats_id])

        tree = client.get("/api/categories/").get_json()
        assert [n["name"] for n in tree] == ["Abstract"]

        db.session.expire_all()
        assert db.session.get(Category, cats_id) is None
        assert db.session.get(Design, design_id).category_ids == [abstract.id]

    def test_delete_unknown_category(self, client, auth_headers):
        resp = client.delete("/api/admin/categories/999", headers=auth_headers)
        assert resp.status_code == 404
