from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tableorder.api.main import app


def test_order_flow_is_persisted() -> None:
    with TestClient(app) as client:
        create_response = client.post("/table/3/order", json={"menu_id": 1})
        assert create_response.status_code == 201
        created = create_response.json()
        assert created["table_number"] == 3
        assert created["menu_id"] == 1
        assert 5 <= created["cook_time"] <= 15
        order_id = created["order_id"]

        list_response = client.get("/table/3/order")
        assert list_response.status_code == 200
        assert [order["order_id"] for order in list_response.json()] == [order_id]

        get_response = client.get(f"/table/3/order/{order_id}")
        assert get_response.status_code == 200
        assert get_response.json()["menu_name"] == "ちゃづけ"

        assert client.get(f"/table/4/order/{order_id}").status_code == 404

        delete_response = client.delete(f"/table/3/order/{order_id}")
        assert delete_response.status_code == 204

        assert client.get(f"/table/3/order/{order_id}").status_code == 404
        assert client.delete(f"/table/3/order/{order_id}").status_code == 404


def test_unknown_menu_leaves_no_row() -> None:
    with TestClient(app) as client:
        response = client.post("/table/7/order", json={"menu_id": 999})
        assert response.status_code == 404
        assert client.get("/table/7/order").json() == []


def test_empty_table_returns_empty_array() -> None:
    with TestClient(app) as client:
        response = client.get("/table/99/order")
        assert response.status_code == 200
        assert response.json() == []
