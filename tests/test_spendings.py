"""
Integration Tests - Spendings endpoints
"""
import pytest

from conftest import DB


def url(path: str = "", db: str = DB) -> str:
    return f"/spendings{path}?db={db}"


@pytest.mark.integration
class TestSpendingsCreate:
    def test_ids_are_sequential(self, client, sample_spending):
        for _ in range(3):
            response = client.post(url(), json=sample_spending)
            assert response.status_code == 200
            assert response.json()["acknowledged"] is True

        spendings = client.get(url()).json()
        assert [s["spendingId"] for s in spendings] == [1, 2, 3]

    def test_client_supplied_id_is_ignored(self, client, sample_spending):
        client.post(url(), json={**sample_spending, "spendingId": 42})

        spendings = client.get(url()).json()
        assert spendings[0]["spendingId"] == 1

    def test_next_id_follows_current_maximum(self, client, store, sample_spending):
        store.collection(DB, "spendings").insert_one({"spendingId": 7, "amount": 1, "currency": "USD"})

        client.post(url(), json=sample_spending)

        ids = sorted(s["spendingId"] for s in client.get(url()).json())
        assert ids == [7, 8]

    def test_stored_fields(self, client, sample_spending):
        client.post(url(), json=sample_spending)

        spending = client.get(url()).json()[0]
        assert spending["amount"] == -100
        assert spending["currency"] == "USD"
        assert spending["dateOfSpending"].startswith("2025-08-08")
        assert spending["categoryId"] == 1
        assert isinstance(spending["_id"], str)

    def test_string_category_id_is_kept(self, client, sample_spending):
        client.post(url(), json={**sample_spending, "categoryId": "groceries"})

        assert client.get(url()).json()[0]["categoryId"] == "groceries"

    def test_missing_required_field(self, client, sample_spending):
        del sample_spending["amount"]

        response = client.post(url(), json=sample_spending)

        assert response.status_code == 400
        assert response.text == "Missing amount parameter"
        assert client.get(url()).json() == []

    def test_malformed_json(self, client):
        response = client.post(url(), content=b"{", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.text == "Invalid JSON body"

    def test_collection_created_on_first_use(self, client, store):
        assert "spendings" not in store.database(DB).list_collection_names()

        assert client.get(url()).json() == []
        assert "spendings" in store.database(DB).list_collection_names()


@pytest.mark.integration
class TestSpendingsUpdate:
    def test_partial_update_keeps_other_fields(self, client, sample_spending):
        client.post(url(), json=sample_spending)
        original = client.get(url()).json()[0]

        response = client.put(url(), json={"spendingId": 1, "description": "Lunch"})

        assert response.status_code == 200
        assert response.json()["matchedCount"] == 1
        assert response.json()["modifiedCount"] == 1
        updated = client.get(url()).json()[0]
        assert updated["description"] == "Lunch"
        for field in ("amount", "currency", "dateOfSpending", "categoryId"):
            assert updated[field] == original[field]

    def test_update_date(self, client, sample_spending):
        client.post(url(), json=sample_spending)

        client.put(url(), json={"spendingId": 1, "dateOfSpending": "2025-09-01"})

        assert client.get(url()).json()[0]["dateOfSpending"].startswith("2025-09-01")

    def test_empty_patch_is_rejected(self, client, store, sample_spending):
        client.post(url(), json=sample_spending)
        before = store.collection(DB, "spendings").find_one({"spendingId": 1})

        response = client.put(url(), json={"spendingId": 1})

        assert response.status_code == 400
        assert response.text == "No fields provided for update"
        assert store.collection(DB, "spendings").find_one({"spendingId": 1}) == before

    def test_missing_spending_id(self, client):
        response = client.put(url(), json={"amount": 5})

        assert response.status_code == 400
        assert response.text == "Missing spendingId parameter"

    def test_unknown_spending(self, client):
        response = client.put(url(), json={"spendingId": 99, "amount": 5})

        assert response.status_code == 404
        assert response.text == "Spending not found"

    def test_unchanged_is_a_noop_success(self, client, sample_spending):
        client.post(url(), json=sample_spending)

        response = client.put(url(), json={"spendingId": 1, "currency": "USD"})

        assert response.status_code == 200
        assert response.text == "No changes made to spending"


@pytest.mark.integration
class TestSpendingsDelete:
    def test_delete_existing(self, client, sample_spending):
        client.post(url(), json=sample_spending)
        client.post(url(), json=sample_spending)

        response = client.request("DELETE", url(), json={"spendingId": 1})

        assert response.status_code == 200
        assert response.json()["deletedCount"] == 1
        assert [s["spendingId"] for s in client.get(url()).json()] == [2]

    def test_delete_unknown(self, client):
        response = client.request("DELETE", url(), json={"spendingId": 5})

        assert response.status_code == 404
        assert response.text == "Spending not found"

    def test_delete_missing_id(self, client):
        response = client.request("DELETE", url(), json={})

        assert response.status_code == 400
        assert response.text == "Missing spendingId parameter"


@pytest.mark.integration
class TestSpendingsByDate:
    @pytest.fixture(autouse=True)
    def seed(self, client, sample_spending):
        for day in ("2025-08-01", "2025-08-08", "2025-08-20"):
            client.post(url(), json={**sample_spending, "dateOfSpending": day})

    def test_bounds_are_inclusive(self, client):
        response = client.get(url("/by-date") + "&startDate=2025-08-08&endDate=2025-08-08")

        assert response.status_code == 200
        assert [s["spendingId"] for s in response.json()] == [2]

    def test_range(self, client):
        response = client.get(url("/by-date") + "&startDate=2025-08-01&endDate=2025-08-10")

        assert [s["spendingId"] for s in response.json()] == [1, 2]

    def test_empty_range(self, client):
        response = client.get(url("/by-date") + "&startDate=2024-01-01&endDate=2024-12-31")

        assert response.json() == []

    @pytest.mark.parametrize("query,missing", [
        ("&endDate=2025-08-10", "startDate"),
        ("&startDate=2025-08-01", "endDate"),
    ])
    def test_missing_bound(self, client, query, missing):
        response = client.get(url("/by-date") + query)

        assert response.status_code == 400
        assert response.text == f"Missing {missing} parameter"

    def test_invalid_date_is_a_server_error(self, client):
        response = client.get(url("/by-date") + "&startDate=yesterday&endDate=2025-08-10")

        assert response.status_code == 500
        assert response.text.startswith("Internal Server Error:")
