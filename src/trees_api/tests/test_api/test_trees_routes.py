import pytest
from sqlalchemy import select, func

from trees_api.exceptions import RepositoryError
from trees_api.models import InsectTree
from trees_api.repositories import TreeRepository


SEEDED_NAMES = {"General Sherman", "General Grant", "President", "Lincoln", "Stagg"}


@pytest.mark.asyncio
class TestListAndSearch:

    async def test_list_returns_summaries_tallest_first(self, client, seeded):
        res = await client.get("/trees")

        assert res.status_code == 200
        body = res.json()
        assert {row["tree"] for row in body} == SEEDED_NAMES
        assert all(set(row) == {"heightFt", "tree", "id"} for row in body)

        heights = [row["heightFt"] for row in body]
        assert heights == sorted(heights, reverse=True)
        assert body[0]["tree"] == "General Sherman"

    async def test_list_empty_database(self, client):
        res = await client.get("/trees")

        assert res.status_code == 200
        assert res.json() == []

    async def test_search_is_case_insensitive_substring(self, client, seeded):
        res = await client.get("/trees/search/general")

        assert res.status_code == 200
        body = res.json()
        assert [row["tree"] for row in body] == ["General Sherman", "General Grant"]
        assert all(set(row) == {"heightFt", "tree", "id"} for row in body)

    async def test_search_without_match_returns_empty_list(self, client, seeded):
        res = await client.get("/trees/search/baobab")

        assert res.status_code == 200
        assert res.json() == []


@pytest.mark.asyncio
class TestGetTree:

    async def test_get_existing_tree_returns_full_object(self, client, seeded):
        res = await client.get("/trees/3")

        assert res.status_code == 200
        body = res.json()
        assert body["id"] == 3
        assert body["tree"] == "President"
        assert body["location"] == "Sequoia National Park"
        assert body["heightFt"] == 240.9
        assert body["groundCircumferenceFt"] == 93.0
        assert "createdAt" in body and "updatedAt" in body

    @pytest.mark.parametrize("tree_id", ["17", "abc", "0_3", "٣"])
    async def test_get_missing_tree_is_not_found(self, client, seeded, tree_id):
        res = await client.get(f"/trees/{tree_id}")

        assert res.status_code == 400
        assert res.json() == {
            "status": "not-found",
            "message": f"Could not find tree {tree_id}",
            "details": "Tree not found",
        }


@pytest.mark.asyncio
class TestCreateTree:

    async def test_create_then_get_returns_submitted_values(self, client):
        payload = {"name": "Hyperion", "location": "Redwood National Park", "height": 380.1, "size": 45.5}

        res = await client.post("/trees", json=payload)

        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "success"
        assert body["message"] == "Successfully created new tree"
        data = body["data"]
        assert isinstance(data["id"], int)
        assert data["createdAt"] and data["updatedAt"]

        fetched = (await client.get(f"/trees/{data['id']}")).json()
        assert fetched["tree"] == payload["name"]
        assert fetched["location"] == payload["location"]
        assert fetched["heightFt"] == payload["height"]
        assert fetched["groundCircumferenceFt"] == payload["size"]

    async def test_create_missing_fields_reports_each_column(self, client):
        res = await client.post("/trees", json={"name": "Half a tree"})

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not create new tree",
            "details": (
                "Tree.location cannot be null, "
                "Tree.heightFt cannot be null, "
                "Tree.groundCircumferenceFt cannot be null"
            ),
        }

    async def test_create_with_wrongly_typed_body_is_rejected(self, client):
        res = await client.post("/trees", json={"name": "x", "location": "y", "height": "tall", "size": 1})

        assert res.status_code == 400
        body = res.json()
        assert body["status"] == "error"
        assert body["message"] == "Invalid request"
        assert "height" in body["details"]


@pytest.mark.asyncio
class TestDeleteTree:

    async def test_delete_removes_row_and_join_rows(self, client, seeded, session_maker):
        # Stagg (id 5) is associated with both seeded insects
        async with session_maker() as session:
            before = await session.scalar(
                select(func.count()).select_from(InsectTree).where(InsectTree.tree_id == 5)
            )
        assert before == 2

        res = await client.delete("/trees/5")

        assert res.status_code == 200
        assert res.json() == {"status": "success", "message": "Successfully removed tree 5"}

        follow_up = await client.get("/trees/5")
        assert follow_up.json()["status"] == "not-found"

        async with session_maker() as session:
            after = await session.scalar(
                select(func.count()).select_from(InsectTree).where(InsectTree.tree_id == 5)
            )
        assert after == 0

    async def test_delete_missing_tree_is_not_found(self, client, seeded):
        res = await client.delete("/trees/17")

        assert res.status_code == 400
        assert res.json() == {
            "status": "not-found",
            "message": "Could not remove tree 17",
            "details": "Tree not found",
        }

    async def test_delete_underscored_id_leaves_row_alone(self, client, seeded, fetch_tree):
        res = await client.delete("/trees/0_3")

        assert res.json() == {
            "status": "not-found",
            "message": "Could not remove tree 0_3",
            "details": "Tree not found",
        }
        assert await fetch_tree(3) is not None


@pytest.mark.asyncio
class TestUpdateTree:

    async def test_update_president(self, client, seeded, fetch_tree):
        payload = {
            "id": 3,
            "name": "President-edit",
            "location": "Sequoia National Park-edit",
            "height": 240.91,
            "size": 93.1,
        }

        res = await client.put("/trees/3", json=payload)

        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "success"
        assert body["message"] == "Successfully updated tree"
        assert body["data"]["tree"] == "President-edit"
        assert body["data"]["heightFt"] == 240.91

        row = await fetch_tree(3)
        assert row.tree == "President-edit"
        assert row.location == "Sequoia National Park-edit"
        assert row.height_ft == 240.91
        assert row.ground_circumference_ft == 93.1

    async def test_update_missing_tree_returns_400_not_found(self, client, seeded):
        res = await client.put("/trees/17", json={"id": 17, "name": "Ghost"})

        assert res.status_code == 400
        assert res.json() == {
            "status": "not-found",
            "message": "Could not update tree 17",
            "details": "Tree not found",
        }

    async def test_update_with_mismatched_ids_changes_nothing(self, client, seeded, fetch_tree):
        before_2 = await fetch_tree(2)
        before_3 = await fetch_tree(3)

        res = await client.put("/trees/2", json={"id": 3, "name": "Renamed"})

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not update tree",
            "details": "2 does not match 3",
        }

        after_2 = await fetch_tree(2)
        after_3 = await fetch_tree(3)
        assert (after_2.tree, after_2.updated_at) == (before_2.tree, before_2.updated_at)
        assert (after_3.tree, after_3.updated_at) == (before_3.tree, before_3.updated_at)

    async def test_update_skips_falsy_values(self, client, seeded, fetch_tree):
        res = await client.put("/trees/4", json={"id": 4, "name": "", "height": 0, "size": 101.5})

        assert res.status_code == 200
        row = await fetch_tree(4)
        assert row.tree == "Lincoln"
        assert row.height_ft == 255.8
        assert row.ground_circumference_ft == 101.5

    async def test_update_without_body_id_is_a_mismatch(self, client, seeded):
        res = await client.put("/trees/3", json={"name": "No id"})

        assert res.status_code == 400
        assert res.json()["details"] == "3 does not match None"

    @pytest.mark.parametrize("body_id, shown", [("3", "3"), ("abc", "abc")])
    async def test_update_with_non_integer_body_id_is_a_mismatch(self, client, seeded, fetch_tree, body_id, shown):
        """
        Behavior:
            - The body id is compared as sent; the string "3" is not the number 3.
            - The row is left untouched.
        """
        res = await client.put("/trees/3", json={"id": body_id, "name": "Coerced"})

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not update tree",
            "details": f"3 does not match {shown}",
        }
        assert (await fetch_tree(3)).tree == "President"

    async def test_update_with_underscored_path_id_is_a_mismatch(self, client, seeded, fetch_tree):
        res = await client.put("/trees/0_3", json={"id": 3, "name": "Renamed"})

        assert res.status_code == 400
        assert res.json()["details"] == "0_3 does not match 3"
        assert (await fetch_tree(3)).tree == "President"


@pytest.mark.asyncio
async def test_responses_carry_request_id(client):
    res = await client.get("/trees", headers={"X-Request-ID": "trace-42"})

    assert res.headers["X-Request-ID"] == "trace-42"


def _failing(message):
    async def _raise(self, *args, **kwargs):
        raise RepositoryError(message)
    return _raise


@pytest.mark.asyncio
class TestStorageFailures:

    async def test_get_lookup_failure_is_reported_as_error(self, client, seeded, monkeypatch):
        monkeypatch.setattr(TreeRepository, "get_by_id", _failing("Failed to retrieve Tree"))

        res = await client.get("/trees/3")

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not find tree 3",
            "details": "Failed to retrieve Tree",
        }

    async def test_delete_failure_is_error_not_not_found(self, client, seeded, fetch_tree, monkeypatch):
        monkeypatch.setattr(TreeRepository, "delete_instance", _failing("Failed to delete Tree"))

        res = await client.delete("/trees/3")

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not remove tree 3",
            "details": "Failed to delete Tree",
        }
        assert await fetch_tree(3) is not None

    async def test_update_failure_is_reported_as_error(self, client, seeded, fetch_tree, monkeypatch):
        monkeypatch.setattr(TreeRepository, "apply_update", _failing("Failed to update Tree"))

        res = await client.put("/trees/3", json={"id": 3, "name": "Renamed"})

        assert res.status_code == 400
        assert res.json() == {
            "status": "error",
            "message": "Could not update tree",
            "details": "Failed to update Tree",
        }
        assert (await fetch_tree(3)).tree == "President"
