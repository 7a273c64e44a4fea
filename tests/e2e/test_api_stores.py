"""
E2E tests for stores and store zones
"""
import pytest

from household_hub.models import Store, StoreZone


@pytest.mark.e2e
class TestStoresApi:
    def test_list_puts_virtual_store_first(self, client, populated_db):
        populated_db.add(Store(name="All"))
        populated_db.commit()

        response = client.get("/api/stores")

        assert response.status_code == 200
        data = response.json()
        assert data[0]["id"] == -1 and data[0]["name"] == "All"
        assert [s["name"] for s in data[1:]] == ["Big Mart", "Corner Grocer"]

    def test_get_virtual_and_real(self, client, populated_db):
        assert client.get("/api/stores/-1").json()["name"] == "All"
        assert client.get("/api/stores/1").json()["name"] == "Corner Grocer"

    @pytest.mark.parametrize("store_id", ["999", "abc"])
    def test_get_missing(self, client, populated_db, store_id):
        response = client.get(f"/api/stores/{store_id}")
        assert response.status_code == 404
        assert response.json() == {"error": "Store not found"}

    def test_create_and_rename(self, client, test_db):
        created = client.post("/api/stores", json={"name": " Farm Shop "})
        assert created.status_code == 201
        store_id = created.json()["id"]
        assert created.json()["name"] == "Farm Shop"

        renamed = client.put(f"/api/stores/{store_id}", json={"name": "Farmers Market"})
        assert renamed.status_code == 200
        assert renamed.json()["name"] == "Farmers Market"

    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "   "}])
    def test_create_invalid(self, client, test_db, payload):
        response = client.post("/api/stores", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_virtual_store_is_read_only(self, client, populated_db):
        renamed = client.put("/api/stores/-1", json={"name": "Everything"})
        deleted = client.delete("/api/stores/-1")

        assert renamed.status_code == 403
        assert deleted.status_code == 403
        assert "error" in deleted.json()

    def test_rename_missing(self, client, populated_db):
        assert client.put("/api/stores/999", json={"name": "X"}).status_code == 404

    def test_delete_cascades_zones(self, client, populated_db):
        response = client.delete("/api/stores/1")

        assert response.status_code == 200
        populated_db.expire_all()
        assert populated_db.get(Store, 1) is None
        assert populated_db.query(StoreZone).filter(StoreZone.store_id == 1).count() == 0


@pytest.mark.e2e
class TestZonesApi:
    def test_list_zones(self, client, populated_db):
        response = client.get("/api/stores/1/zones")

        assert response.status_code == 200
        assert [(z["zone_sequence"], z["zone_name"], z["department_name"]) for z in response.json()] == [
            (1, "Fresh", "Produce"),
            (2, "Cold", "Dairy"),
        ]

    def test_list_zones_virtual(self, client, populated_db):
        zones = client.get("/api/stores/-1/zones").json()
        assert len(zones) == 3
        assert all(z["zone_name"] == "General" for z in zones)

    def test_list_zones_non_numeric(self, client, populated_db):
        assert client.get("/api/stores/abc/zones").status_code == 400

    def test_upsert_zone(self, client, populated_db):
        response = client.post(
            "/api/stores/1/zones",
            json={"zone_sequence": 3, "zone_name": "Bakery", "department_id": 3},
        )

        assert response.status_code == 201
        body = response.json()
        assert (body["store_id"], body["zone_sequence"], body["department_id"]) == (1, 3, 3)
        assert body["department_name"] == "Bakery"

    def test_upsert_zone_virtual(self, client, populated_db):
        response = client.post(
            "/api/stores/-1/zones", json={"zone_sequence": 1, "zone_name": "X", "department_id": 1}
        )
        assert response.status_code == 403

    @pytest.mark.parametrize(
        "payload",
        [
            {"zone_sequence": 0, "zone_name": "X", "department_id": 1},
            {"zone_sequence": "first", "zone_name": "X", "department_id": 1},
            {"zone_sequence": 1, "zone_name": "X"},
        ],
    )
    def test_upsert_zone_invalid(self, client, populated_db, payload):
        assert client.post("/api/stores/1/zones", json=payload).status_code == 400

    def test_upsert_zone_unknown_department(self, client, populated_db):
        response = client.post(
            "/api/stores/1/zones", json={"zone_sequence": 4, "zone_name": "X", "department_id": 999}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Store or department not found"

    def test_swap(self, client, populated_db):
        response = client.post("/api/stores/1/zones/swap", json={"seqA": 1, "seqB": 2})

        assert response.status_code == 200
        assert response.json() == {"message": "Store zones reordered successfully"}
        zones = client.get("/api/stores/1/zones").json()
        assert [(z["zone_sequence"], z["zone_name"]) for z in zones] == [(1, "Cold"), (2, "Fresh")]

    def test_swap_missing_argument(self, client, populated_db):
        response = client.post("/api/stores/1/zones/swap", json={"seqA": 1})
        assert response.status_code == 400
        assert response.json() == {"error": "seqA and seqB are required"}

    def test_swap_virtual(self, client, populated_db):
        response = client.post("/api/stores/-1/zones/swap", json={"seqA": 1, "seqB": 2})
        assert response.status_code == 403

    def test_delete_zone(self, client, populated_db):
        assert client.delete("/api/stores/1/zones/2/1").status_code == 200
        assert client.delete("/api/stores/1/zones/2/1").status_code == 404
