"""Tests for category API endpoints."""

import logging
import pytest
from unittest.mock import Mock

from app.core.dependencies import get_category_service
from app.core.exceptions import CategoryNotFoundError, RetryExhaustedError
from app.models.category import Category
from app.services.category_service import CategoryService


def override_service(test_app, **methods) -> Mock:
    """Replace the category service with a mock whose methods behave as given."""
    service = Mock(spec=CategoryService)
    for name, behaviour in methods.items():
        getattr(service, name).side_effect = behaviour
    test_app.dependency_overrides[get_category_service] = lambda: service
    return service


@pytest.mark.unit
class TestCategoryListingAPI:
    """Test the listing endpoint in both response modes."""

    def test_interactive_listing(self, client, multiple_categories):
        response = client.get("/categories/")

        assert response.status_code == 200
        data = response.json()
        assert data["component"] == "Category/Index"
        page = data["props"]["categories"]
        assert page["total"] == 5
        assert page["current_page"] == 1
        assert [c["id"] for c in page["data"]] == sorted(c.id for c in multiple_categories)
        assert data["props"]["flash"] is None

    def test_interactive_listing_describes_filters(self, client, multiple_categories):
        response = client.get(
            "/categories/", params={"name": "Tech", "sort_by": "name", "sort_order": "desc"}
        )

        filters = response.json()["props"]["filters"]
        assert set(filters) == {"name", "sort_by", "sort_order"}
        assert filters["name"] == {
            "label": "Name",
            "placeholder": "Enter name.",
            "type": "string",
            "value": "Tech",
        }
        assert filters["sort_by"]["type"] == "select_static"
        assert filters["sort_by"]["value"] == "name"
        assert {"label": "Name", "value": "name"} in filters["sort_by"]["options"]
        assert filters["sort_order"]["options"] == [
            {"label": "Ascending", "value": "asc"},
            {"label": "Descending", "value": "desc"},
        ]

    def test_filter_values_default_to_empty(self, client):
        filters = client.get("/categories/").json()["props"]["filters"]

        assert filters["name"]["value"] == ""
        assert filters["sort_by"]["value"] == ""
        assert filters["sort_order"]["value"] == ""

    def test_raw_listing_always_sorts_by_name(self, client, multiple_categories):
        response = client.get(
            "/categories/", params={"inertia": "disabled", "sort_by": "created_at"}
        )

        assert response.status_code == 200
        data = response.json()
        assert "component" not in data
        names = [c["name"] for c in data["data"]]
        assert names == sorted(names)

    def test_raw_listing_sort_order_still_applies(self, client, multiple_categories):
        response = client.get(
            "/categories/", params={"inertia": "disabled", "sort_order": "desc"}
        )

        names = [c["name"] for c in response.json()["data"]]
        assert names == sorted(names, reverse=True)

    def test_name_filter(self, client, multiple_categories):
        response = client.get(
            "/categories/", params={"inertia": "disabled", "name": "Tech"}
        )

        names = [c["name"] for c in response.json()["data"]]
        assert sorted(names) == ["Tech Policy", "Technology"]

    def test_created_at_range(self, client, multiple_categories):
        response = client.get(
            "/categories/",
            params=[
                ("inertia", "disabled"),
                ("created_at", "2024-01-01T00:00:00"),
                ("created_at", "2024-01-06T00:00:00"),
            ],
        )

        assert response.status_code == 200
        names = {c["name"] for c in response.json()["data"]}
        assert names == {"Science", "Technology"}

    def test_created_at_needs_two_bounds(self, client):
        response = client.get(
            "/categories/", params={"created_at": "2024-01-01T00:00:00"}
        )

        assert response.status_code == 422

    def test_pagination_links_keep_query_string(self, client, multiple_categories):
        response = client.get(
            "/categories/",
            params={"inertia": "disabled", "per_page": 2, "page": 2, "name": "e"},
        )

        data = response.json()
        assert data["per_page"] == 2
        assert data["current_page"] == 2
        assert data["last_page"] == 2
        assert data["total"] == 3
        assert data["from"] == 3
        assert data["to"] == 3
        assert data["next_page_url"] is None
        assert "page=1" in data["prev_page_url"]
        assert "name=e" in data["prev_page_url"]
        assert "per_page=2" in data["first_page_url"]
        assert data["query"]["name"] == "e"

    def test_total_is_stable_across_pages(self, client, multiple_categories):
        totals = {
            client.get(
                "/categories/", params={"inertia": "disabled", "per_page": 2, "page": p}
            ).json()["total"]
            for p in (1, 2, 3)
        }

        assert totals == {5}

    def test_per_page_upper_bound(self, client):
        response = client.get("/categories/", params={"per_page": 1000})

        assert response.status_code == 422

    def test_invalid_sort_field_rejected(self, client):
        response = client.get("/categories/", params={"sort_by": "password"})

        assert response.status_code == 422

    def test_fields_projection(self, client, multiple_categories):
        response = client.get(
            "/categories/",
            params=[("inertia", "disabled"), ("fields", "id"), ("fields", "name")],
        )

        rows = response.json()["data"]
        assert all(set(row) == {"id", "name"} for row in rows)

    def test_unknown_expand_rejected(self, client):
        response = client.get("/categories/", params={"expand": "articles"})

        assert response.status_code == 422


@pytest.mark.unit
class TestCategoryShowAPI:
    """Test the single category endpoint."""

    def test_get_category(self, client, test_category):
        response = client.get(f"/categories/{test_category.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Technology"

    def test_get_missing_category(self, client):
        response = client.get("/categories/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Category not found: 999"


@pytest.mark.unit
class TestCategoryMutationAPI:
    """Test create, update and delete redirects with flash messages."""

    def test_create_category(self, client, db_session):
        response = client.post(
            "/categories/", json={"name": "Science"}, follow_redirects=False
        )

        assert response.status_code == 303
        assert response.headers["location"].endswith("/categories/")
        assert db_session.query(Category).filter(Category.name == "Science").count() == 1

        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"message": "Category created successfully."}

    def test_flash_is_read_once(self, client):
        client.post("/categories/", json={"name": "Science"}, follow_redirects=False)

        first = client.get("/categories/").json()["props"]["flash"]
        second = client.get("/categories/").json()["props"]["flash"]

        assert first is not None
        assert second is None

    def test_create_follows_redirect_to_listing(self, client):
        response = client.post("/categories/", json={"name": "Science"})

        assert response.status_code == 200
        props = response.json()["props"]
        assert props["flash"]["message"] == "Category created successfully."
        assert [c["name"] for c in props["categories"]["data"]] == ["Science"]

    def test_create_invalid_payload(self, client):
        response = client.post("/categories/", json={"name": ""})

        assert response.status_code == 422

    def test_create_failure_is_logged(self, client, test_app, caplog):
        override_service(test_app, create=RuntimeError("disk full"))

        with caplog.at_level(logging.ERROR):
            response = client.post(
                "/categories/", json={"name": "Science"}, follow_redirects=False
            )

        assert response.status_code == 303
        records = [r for r in caplog.records if r.getMessage() == "Category creation failed!"]
        assert len(records) == 1
        assert records[0].error == "disk full"
        assert records[0].exc_info is not None

    def test_create_failure_flash(self, client, test_app):
        override_service(test_app, create=RuntimeError("disk full"))
        client.post("/categories/", json={"name": "Science"}, follow_redirects=False)
        test_app.dependency_overrides.pop(get_category_service)

        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"isSuccess": False, "message": "Category creation failed!"}

    def test_update_category(self, client, test_category, db_session):
        response = client.put(
            f"/categories/{test_category.id}",
            json={"name": "Updated Technology"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        db_session.refresh(test_category)
        assert test_category.name == "Updated Technology"
        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"message": "Category updated successfully."}

    def test_patch_category(self, client, test_category, db_session):
        response = client.patch(
            f"/categories/{test_category.id}",
            json={"name": "Patched"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        db_session.refresh(test_category)
        assert test_category.name == "Patched"

    def test_update_missing_category_not_logged(self, client, caplog):
        with caplog.at_level(logging.ERROR):
            response = client.put(
                "/categories/999", json={"name": "Ghost"}, follow_redirects=False
            )

        assert response.status_code == 303
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"isSuccess": False, "message": "Category not found: 999"}

    def test_update_retry_exhausted_is_logged(self, client, test_app, caplog):
        override_service(test_app, update=RetryExhaustedError(1, 5))

        with caplog.at_level(logging.ERROR):
            client.put("/categories/1", json={"name": "X"}, follow_redirects=False)

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert messages == ["Category update failed!"]

    def test_update_rejects_null_name(self, client, test_category):
        response = client.put(f"/categories/{test_category.id}", json={"name": None})

        assert response.status_code == 422

    def test_delete_category(self, client, test_category):
        response = client.delete(
            f"/categories/{test_category.id}", follow_redirects=False
        )

        assert response.status_code == 303
        assert client.get(f"/categories/{test_category.id}").status_code == 404
        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"message": "Category deleted successfully."}

    def test_delete_missing_category(self, client, caplog):
        with caplog.at_level(logging.ERROR):
            response = client.delete("/categories/999", follow_redirects=False)

        assert response.status_code == 303
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash["isSuccess"] is False
        assert flash["message"] == "Category not found: 999"

    def test_delete_unexpected_failure(self, client, test_app, caplog):
        override_service(test_app, delete=RuntimeError("boom"))

        with caplog.at_level(logging.ERROR):
            client.delete("/categories/1", follow_redirects=False)

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert messages == ["Category deletion failed!"]

    def test_not_found_from_service_is_passed_through(self, client, test_app):
        override_service(test_app, delete=CategoryNotFoundError(42))
        client.delete("/categories/42", follow_redirects=False)
        test_app.dependency_overrides.pop(get_category_service)

        flash = client.get("/categories/").json()["props"]["flash"]
        assert flash == {"isSuccess": False, "message": "Category not found: 42"}
