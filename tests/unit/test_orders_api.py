from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import tableorder.api.routes.orders as orders_route
from tableorder.api.main import app
from tableorder.domain.common.ids import MenuId, OrderId, TableNumber
from tableorder.domain.kitchen.cook_time import CookTimeGenerator
from tableorder.domain.menu.entities import MenuItem
from tableorder.domain.order.entities import Order


class FakeMenuRepository:
    def get(self, menu_id: MenuId) -> MenuItem | None:
        if 1 <= menu_id <= 10:
            return MenuItem(menu_id=menu_id, name=f"menu-{menu_id}")
        return None


class FakeOrderRepository:
    def __init__(self) -> None:
        self.orders: dict[int, Order] = {}
        self._next_id = 1

    def add(self, order: Order) -> Order:
        persisted = replace(order, order_id=OrderId(self._next_id))
        self.orders[self._next_id] = persisted
        self._next_id += 1
        return persisted

    def list_for_table(self, table_number: TableNumber) -> list[Order]:
        return [o for _, o in sorted(self.orders.items()) if o.table_number == table_number]

    def get(self, table_number: TableNumber, order_id: OrderId) -> Order | None:
        order = self.orders.get(int(order_id))
        if order is None or order.table_number != table_number:
            return None
        return order

    def delete(self, table_number: TableNumber, order_id: OrderId) -> bool:
        if self.get(table_number, order_id) is None:
            return False
        del self.orders[int(order_id)]
        return True


class FailingOrderRepository(FakeOrderRepository):
    def __init__(self, error: Exception) -> None:
        super().__init__()
        self._error = error

    def list_for_table(self, table_number: TableNumber) -> list[Order]:
        raise self._error


@pytest.fixture
def order_repository(monkeypatch) -> FakeOrderRepository:
    repository = FakeOrderRepository()
    monkeypatch.setattr(orders_route, "_menu_repository", lambda: FakeMenuRepository())
    monkeypatch.setattr(orders_route, "_order_repository", lambda: repository)
    monkeypatch.setattr(orders_route, "_cook_time_generator", lambda: CookTimeGenerator(5, 15))
    return repository


def test_order_lifecycle_for_one_table(order_repository: FakeOrderRepository) -> None:
    client = TestClient(app)

    created = client.post("/table/3/order", json={"menu_id": 1})
    assert created.status_code == 201
    body = created.json()
    assert body["table_number"] == 3
    assert body["menu_id"] == 1
    assert 5 <= body["cook_time"] <= 15
    assert set(body) >= {"order_id", "menu_id", "table_number", "cook_time", "created_at"}
    order_id = body["order_id"]

    listed = client.get("/table/3/order")
    assert listed.status_code == 200
    assert listed.json() == [body]

    detail = client.get(f"/table/3/order/{order_id}")
    assert detail.status_code == 200
    assert detail.json() == body

    deleted = client.delete(f"/table/3/order/{order_id}")
    assert deleted.status_code == 204
    assert deleted.content == b""

    missing = client.get(f"/table/3/order/{order_id}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "ORDER_NOT_FOUND"


def test_empty_table_lists_empty_array(order_repository: FakeOrderRepository) -> None:
    response = TestClient(app).get("/table/99/order")
    assert response.status_code == 200
    assert response.json() == []


def test_other_table_cannot_read_or_delete_order(order_repository: FakeOrderRepository) -> None:
    client = TestClient(app)
    order_id = client.post("/table/3/order", json={"menu_id": 2}).json()["order_id"]

    assert client.get(f"/table/4/order/{order_id}").status_code == 404
    assert client.delete(f"/table/4/order/{order_id}").status_code == 404
    assert client.get("/table/4/order").json() == []
    assert client.get(f"/table/3/order/{order_id}").status_code == 200


def test_second_delete_is_not_found(order_repository: FakeOrderRepository) -> None:
    client = TestClient(app)
    order_id = client.post("/table/3/order", json={"menu_id": 1}).json()["order_id"]

    assert client.delete(f"/table/3/order/{order_id}").status_code == 204
    assert client.delete(f"/table/3/order/{order_id}").status_code == 404


def test_unknown_menu_is_rejected_without_insert(order_repository: FakeOrderRepository) -> None:
    response = TestClient(app).post("/table/3/order", json={"menu_id": 404})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MENU_ITEM_NOT_FOUND"
    assert order_repository.orders == {}


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/table/abc/order"),
        ("get", "/table/0/order"),
        ("get", "/table/101/order"),
        ("get", "/table/-1/order"),
        ("get", "/table/3/order/xyz"),
        ("get", "/table/3/order/0"),
        ("delete", "/table/3/order/1.5"),
        ("get", "/table/3.0/order"),
        ("get", "/table/+3/order"),
        ("get", "/table/%203/order"),
        ("get", "/table/03/order"),
        ("get", "/table/3/order/+1"),
        ("get", "/table/3/order/9223372036854775808"),
        ("delete", "/table/3/order/1e3"),
    ],
)
def test_invalid_path_parameters_are_client_errors(
    order_repository: FakeOrderRepository,
    method: str,
    path: str,
) -> None:
    response = getattr(TestClient(app), method)(path)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"menu_id": "one"},
        {"menu_id": 0},
        {"menu_id": True},
        {"menu_id": "1"},
        {"menu_id": 1.0},
    ],
)
def test_invalid_body_is_client_error(order_repository: FakeOrderRepository, payload) -> None:
    response = TestClient(app).post("/table/3/order", json=payload)

    assert response.status_code == 400
    assert order_repository.orders == {}


def test_boundary_path_values_are_accepted(order_repository: FakeOrderRepository) -> None:
    client = TestClient(app)

    assert client.get("/table/1/order").status_code == 200
    assert client.get("/table/100/order").status_code == 200
    missing = client.get("/table/100/order/9223372036854775807")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "ORDER_NOT_FOUND"


def test_request_id_is_echoed(order_repository: FakeOrderRepository) -> None:
    response = TestClient(app).get("/table/1/order", headers={"X-Request-Id": "req-42"})
    assert response.headers["X-Request-Id"] == "req-42"


@pytest.mark.parametrize(
    ("error", "status_code", "code"),
    [
        (PoolTimeoutError("QueuePool limit reached"), 503, "CONNECTION_EXHAUSTED"),
        (OperationalError("SELECT 1", {}, Exception("server closed")), 503, "DATABASE_UNAVAILABLE"),
        (IntegrityError("INSERT", {}, Exception("constraint")), 500, "DATABASE_ERROR"),
    ],
)
def test_database_failures_map_to_server_errors(
    monkeypatch,
    error: Exception,
    status_code: int,
    code: str,
) -> None:
    monkeypatch.setattr(orders_route, "_order_repository", lambda: FailingOrderRepository(error))

    response = TestClient(app).get("/table/3/order")

    assert response.status_code == status_code
    payload = response.json()
    assert payload["error"]["code"] == code
    assert "server closed" not in payload["error"]["message"]


def test_unsafe_request_id_is_replaced(order_repository: FakeOrderRepository) -> None:
    response = TestClient(app).get("/table/1/order", headers={"X-Request-Id": "bad id\twith tab"})

    request_id = response.headers["X-Request-Id"]
    assert request_id != "bad id\twith tab"
    assert len(request_id) == 32
