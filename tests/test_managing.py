"""
Integration Tests - Managing endpoints
"""
import pytest

from conftest import DB

NAME_URL = f"/managing/name?db={DB}"


@pytest.mark.integration
class TestAccountName:
    def test_name_without_property(self, client):
        response = client.get(NAME_URL)

        assert response.status_code == 404
        assert response.text == "Property not found"

    def test_get_name(self, client, store):
        store.collection(DB, "properties").insert_one({"name": "Family book"})

        response = client.get(NAME_URL)

        assert response.status_code == 200
        assert response.json() == "Family book"

    def test_rename(self, client, store):
        store.collection(DB, "properties").insert_one({"name": "Family book", "owner": "me"})

        response = client.put(NAME_URL, json={"name": "Shared book"})

        assert response.status_code == 200
        assert response.json()["modifiedCount"] == 1
        assert client.get(NAME_URL).json() == "Shared book"
        assert store.collection(DB, "properties").find_one()["owner"] == "me"

    def test_rename_does_not_create_property(self, client, store):
        response = client.put(NAME_URL, json={"name": "Shared book"})

        assert response.status_code == 404
        assert store.collection(DB, "properties").count_documents({}) == 0

    def test_rename_requires_name(self, client, store):
        store.collection(DB, "properties").insert_one({"name": "Family book"})

        response = client.put(NAME_URL, json={})

        assert response.status_code == 400
        assert response.text == "Missing name parameter"


@pytest.mark.integration
class TestDatabases:
    def test_lists_account_databases(self, client, sample_spending):
        client.post("/spendings?db=acc-1", json=sample_spending)
        client.post("/categories?db=acc-2", json={"name": "Food"})

        response = client.get("/managing/dbs")

        assert response.status_code == 200
        names = [d["name"] for d in response.json()]
        assert "acc-1" in names
        assert "acc-2" in names
