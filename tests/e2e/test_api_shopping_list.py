"""
E2E tests for the shopping list and its lazy purchased-item cleanup
"""
import pytest

from household_hub.models import AppSetting, ShoppingListEntry
from household_hub.services.janitor import LAST_CLEANUP_SETTING


@pytest.mark.e2e
class TestShoppingListApi:
    def test_store_projection(self, client, populated_db):
        response = client.get("/api/shopping-list/1")

        assert response.status_code == 200
        assert [(r["name"], r["zone"], r["zone_seq"]) for r in response.json()] == [
            ("Apples", "Fresh", 1),
            ("Milk", "Cold", 2),
            ("Batteries", "Uncategorized", 999),
            ("Bread", "Uncategorized", 999),
        ]

    def test_virtual_projection(self, client, populated_db):
        rows = client.get("/api/shopping-list/-1").json()
        assert [r["name"] for r in rows] == ["Apples", "Batteries", "Bread", "Milk"]
        assert {(r["zone"], r["zone_seq"]) for r in rows} == {("General", 0)}

    def test_projection_non_numeric_store(self, client, populated_db):
        response = client.get("/api/shopping-list/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid store id"

    def test_list_all_entries(self, client, populated_db):
        entries = client.get("/api/shopping-list").json()
        assert [e["name"] for e in entries] == ["Apples", "Batteries", "Bread", "Milk"]
        assert entries[-1]["item_name"] == "Milk"

    def test_add_update_mark_remove(self, client, populated_db):
        created = client.post("/api/shopping-list", json={"name": "Eggs", "department_id": 1})
        assert created.status_code == 201
        assert created.json()["quantity"] == "1"

        updated = client.put("/api/shopping-list/Eggs", json={"quantity": "12"})
        assert updated.json()["quantity"] == "12"

        marked = client.patch("/api/shopping-list/Eggs/purchased", json={"purchased": True})
        assert marked.json()["purchased"] == 1

        assert client.delete("/api/shopping-list/Eggs").status_code == 200
        assert client.delete("/api/shopping-list/Eggs").status_code == 404

    def test_update_without_fields(self, client, populated_db):
        response = client.put("/api/shopping-list/Milk", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "No fields to update"}

    def test_purchased_hidden_unless_requested(self, client, populated_db, clock):
        # First read records the cleanup time, so later purchases survive a day
        client.get("/api/shopping-list")
        client.patch("/api/shopping-list/Milk/purchased", json={"purchased": True})

        hidden = [r["name"] for r in client.get("/api/shopping-list/1").json()]
        shown = [r["name"] for r in client.get("/api/shopping-list/1?showPurchased=true").json()]

        assert "Milk" not in hidden
        assert "Milk" in shown

    def test_read_purges_purchased_once_a_day(self, client, populated_db, clock):
        populated_db.get(ShoppingListEntry, "Bread").purchased = 1
        populated_db.commit()

        client.get("/api/shopping-list/1")
        assert populated_db.get(AppSetting, LAST_CLEANUP_SETTING) is not None
        names = [e["name"] for e in client.get("/api/shopping-list").json()]
        assert "Bread" not in names

        client.patch("/api/shopping-list/Milk/purchased", json={"purchased": True})
        clock.advance(hours=12)
        client.get("/api/shopping-list/-1")
        assert "Milk" in [e["name"] for e in client.get("/api/shopping-list").json()]

        clock.advance(hours=12)
        client.get("/api/shopping-list/-1")
        assert "Milk" not in [e["name"] for e in client.get("/api/shopping-list").json()]

    def test_readding_purchased_entry_keeps_it_purchased(self, client, populated_db):
        client.get("/api/shopping-list")
        client.patch("/api/shopping-list/Milk/purchased", json={"purchased": True})

        response = client.post("/api/shopping-list", json={"name": "Milk", "quantity": "3"})

        assert response.status_code == 201
        assert response.json()["quantity"] == "3"
        assert response.json()["purchased"] == 1

    @pytest.mark.parametrize("value", ["foo", "false", "1", "True"])
    def test_show_purchased_only_for_true(self, client, populated_db, value):
        client.get("/api/shopping-list")
        client.patch("/api/shopping-list/Milk/purchased", json={"purchased": True})

        response = client.get(f"/api/shopping-list/1?showPurchased={value}")

        assert response.status_code == 200
        assert "Milk" not in [r["name"] for r in response.json()]
