import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from tailorshop.core.config import Settings
from tailorshop.core.exceptions import PersistenceError
from tailorshop.main import create_application
from tailorshop.services.order_repository import OrderRepository


def create(client, bill_number="B100", delivery_date="2025-01-10", notes=None, image=None):
    data = {}
    if bill_number is not None:
        data["bill_number"] = bill_number
    if delivery_date is not None:
        data["delivery_date"] = delivery_date
    if notes is not None:
        data["notes"] = notes
    files = {"style_image": image} if image else None
    return client.post("/api/orders", data=data, files=files)


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Tailor Shop API is running!"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "ok"


def test_create_then_complete_example(client):
    response = create(client, "B100", "2025-01-10")
    assert response.status_code == 201
    assert response.json() == {"message": "Order created successfully.", "bill_number": "B100"}

    orders = client.get("/api/orders").json()
    assert orders == [{
        "bill_number": "B100",
        "delivery_date": "2025-01-10",
        "notes": "",
        "status": "Pending",
        "image_path": None,
        "completion_date": None,
    }]

    response = client.put("/api/orders/B100/complete")
    assert response.status_code == 200
    assert response.json() == {"message": "Bill B100 marked as Complete and ready for pickup."}

    order = client.get("/api/orders").json()[0]
    assert order["status"] == "Complete"
    assert order["completion_date"] is not None


def test_create_with_image_is_served(client, stored_files):
    response = create(client, "B7", "2025-03-01", notes="add lining",
                      image=("dress.png", b"png-bytes", "image/png"))
    assert response.status_code == 201

    order = client.get("/api/orders").json()[0]
    assert order["image_path"].startswith("B7-style-")
    assert order["image_path"].endswith(".png")
    assert stored_files() == [order["image_path"]]

    served = client.get(f"/uploads/{order['image_path']}")
    assert served.status_code == 200
    assert served.content == b"png-bytes"


@pytest.mark.parametrize("bill_number,delivery_date", [(None, "2025-01-10"), ("B100", None), ("", "2025-01-10")])
def test_create_requires_fields(client, stored_files, bill_number, delivery_date):
    response = create(client, bill_number, delivery_date, image=("dress.jpg", b"jpg", "image/jpeg"))

    assert response.status_code == 400
    assert response.json()["detail"] == "Bill number and delivery date are required."
    assert stored_files() == []
    assert client.get("/api/orders").json() == []


def test_create_rejects_bad_date(client):
    response = create(client, "B100", "next tuesday")

    assert response.status_code == 400


def test_duplicate_bill_number(client, stored_files):
    assert create(client, "B100", image=("a.jpg", b"a", "image/jpeg")).status_code == 201
    first = stored_files()

    response = create(client, "B100", image=("b.jpg", b"b", "image/jpeg"))

    assert response.status_code == 409
    assert stored_files() == first
    assert len(client.get("/api/orders").json()) == 1


def test_complete_twice_and_unknown(client):
    create(client, "B100")

    assert client.put("/api/orders/B100/complete").status_code == 200
    second = client.put("/api/orders/B100/complete")
    assert second.status_code == 404
    assert second.json()["detail"] == "Order not found or status not updated."
    assert client.put("/api/orders/NOPE/complete").status_code == 404


def test_list_pending(client):
    create(client, "B1", "2025-01-20")
    create(client, "B2", "2025-01-05")
    create(client, "B3", "2025-01-10")
    create(client, "B4", "2025-03-01")
    client.put("/api/orders/B3/complete")

    response = client.get("/api/orders/pending", params={"start_date": "2025-01-01", "end_date": "2025-01-31"})

    assert response.status_code == 200
    body = response.json()
    assert [o["bill_number"] for o in body] == ["B2", "B1"]
    assert set(body[0]) == {"bill_number", "delivery_date", "notes", "status", "image_path"}


def test_list_pending_without_range(client):
    create(client, "B1", "2025-01-20")
    create(client, "B2", "2024-06-01")

    body = client.get("/api/orders/pending").json()

    assert [o["bill_number"] for o in body] == ["B2", "B1"]


def test_list_pending_empty_params_are_ignored(client):
    create(client, "B1", "2025-01-20")

    body = client.get("/api/orders/pending?start_date=&end_date=").json()

    assert [o["bill_number"] for o in body] == ["B1"]


def test_list_pending_rejects_malformed_date(client):
    response = client.get("/api/orders/pending", params={"start_date": "yesterday"})

    assert response.status_code == 422


def test_list_all_order(client):
    for bill_number in ("B100", "B102", "B101"):
        create(client, bill_number)

    body = client.get("/api/orders").json()

    assert [o["bill_number"] for o in body] == ["B102", "B101", "B100"]


def test_startup_fails_when_database_unreachable(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'missing' / 'orders.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )
    app = create_application(settings)

    with pytest.raises(PersistenceError):
        with TestClient(app):
            pass


def test_slow_store_does_not_serialize_requests(app_settings, monkeypatch):
    delay = 0.3

    def slow_list_all(self):
        time.sleep(delay)
        return []

    monkeypatch.setattr(OrderRepository, "list_all", slow_list_all)
    app = create_application(app_settings)
    app.state.database.create_tables()

    async def run_requests():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            started = time.perf_counter()
            responses = await asyncio.gather(
                http.get("/api/orders"),
                http.get("/api/orders"),
                http.get("/api/orders"),
                http.get("/health"),
            )
            return time.perf_counter() - started, responses

    elapsed, responses = asyncio.run(run_requests())

    assert [r.status_code for r in responses] == [200, 200, 200, 200]
    assert elapsed < delay * 2.5
    app.state.database.dispose()
