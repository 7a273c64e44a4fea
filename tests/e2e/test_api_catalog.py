"""
E2E tests for departments and items
"""
import pytest

from household_hub.models import Item, ShoppingListEntry, StoreZone


@pytest.mark.e2e
class TestDepartmentsApi:
    def test_list_ordered_by_name(self, client, populated_db):
        names = [d["name"] for d in client.get("/api/departments").json()]
        assert names == ["Bakery", "Dairy", "Produce"]

    def test_create_duplicate(self, client, populated_db):
        response = client.post("/api/departments", json={"name": "Dairy"})
        assert response.status_code == 409
        assert response.json()["error"] == "Department already exists"

    def test_delete_cascades_zones_and_nulls_references(self, client, populated_db):
        assert client.delete("/api/departments/1").status_code == 200

        populated_db.expire_all()
        assert populated_db.query(StoreZone).filter(StoreZone.department_id == 1).count() == 0
        assert populated_db.get(Item, 1).department_id is None
        assert populated_db.get(ShoppingListEntry, "Milk").department_id is None

    def test_delete_missing(self, client, populated_db):
        assert client.delete("/api/departments/999").status_code == 404


@pytest.mark.e2e
class TestItemsApi:
    def test_crud(self, client, populated_db):
        created = client.post("/api/items", json={"name": "Yogurt", "department_id": 1})
        assert created.status_code == 201
        item = created.json()
        assert item["qty"] == 0
        assert item["department_name"] == "Dairy"

        updated = client.put(f"/api/items/{item['id']}", json={"name": "Greek Yogurt", "qty": 3})
        assert updated.json()["department_id"] is None
        assert updated.json()["qty"] == 3

        assert client.get(f"/api/items/{item['id']}").json()["name"] == "Greek Yogurt"
        assert client.delete(f"/api/items/{item['id']}").status_code == 200
        assert client.get(f"/api/items/{item['id']}").status_code == 404

    def test_unknown_department(self, client, populated_db):
        response = client.post("/api/items", json={"name": "Ghost", "department_id": 999})
        assert response.status_code == 400
        assert response.json()["error"] == "Department not found"
