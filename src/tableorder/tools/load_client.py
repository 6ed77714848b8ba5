"""Concurrent load client for a running table-order server.

Each worker picks a random table and menu item, then creates an order,
lists the table, fetches the order and deletes it again, logging every
status. Run with ``python -m tableorder.tools.load_client``.
"""

from __future__ import annotations

import concurrent.futures
import logging
import os
import random
from dataclasses import dataclass

import httpx

from tableorder.domain.common.ids import MAX_TABLE_NUMBER, MIN_TABLE_NUMBER
from tableorder.infrastructure.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_THREAD_COUNT = 10
MENU_ID_RANGE = (1, 10)


@dataclass(frozen=True)
class SessionResult:
    table_number: int
    order_id: int | None
    statuses: dict[str, int]


def order_url(base_url: str, table_number: int, order_id: int | None = None) -> str:
    url = f"{base_url.rstrip('/')}/table/{table_number}/order"
    if order_id is None:
        return url
    return f"{url}/{order_id}"


def run_session(
    client: httpx.Client,
    base_url: str,
    table_number: int,
    menu_id: int,
) -> SessionResult:
    statuses: dict[str, int] = {}

    created = client.post(order_url(base_url, table_number), json={"menu_id": menu_id})
    statuses["create"] = created.status_code
    logger.info(
        "create order, status %s",
        created.status_code,
        extra={"table_number": table_number, "menu_id": menu_id},
    )
    if created.status_code != 201:
        return SessionResult(table_number=table_number, order_id=None, statuses=statuses)
    order_id = int(created.json()["order_id"])

    listed = client.get(order_url(base_url, table_number))
    statuses["list"] = listed.status_code
    logger.info(
        "list orders, status %s, response %s",
        listed.status_code,
        listed.text,
        extra={"table_number": table_number},
    )

    detail = client.get(order_url(base_url, table_number, order_id))
    statuses["detail"] = detail.status_code
    logger.info(
        "get order detail, status %s, response %s",
        detail.status_code,
        detail.text,
        extra={"table_number": table_number, "order_id": order_id},
    )

    deleted = client.delete(order_url(base_url, table_number, order_id))
    statuses["delete"] = deleted.status_code
    logger.info(
        "delete order, status %s",
        deleted.status_code,
        extra={"table_number": table_number, "order_id": order_id},
    )
    return SessionResult(table_number=table_number, order_id=order_id, statuses=statuses)


def run_load(
    base_url: str,
    thread_count: int,
    transport: httpx.BaseTransport | None = None,
    rng: random.Random | None = None,
) -> list[SessionResult]:
    rng = rng or random.Random()
    plans = [
        (rng.randint(MIN_TABLE_NUMBER, MAX_TABLE_NUMBER), rng.randint(*MENU_ID_RANGE))
        for _ in range(thread_count)
    ]

    results: list[SessionResult] = []
    with httpx.Client(transport=transport, timeout=10.0) as client:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max(thread_count, 1)) as executor:
            futures = [
                executor.submit(run_session, client, base_url, table_number, menu_id)
                for table_number, menu_id in plans
            ]
            for future in concurrent.futures.as_completed(futures):
                try:
                    results.append(future.result())
                except httpx.HTTPError:
                    logger.exception("load_session_failed")
    return results


def _thread_count() -> int:
    raw_value = os.getenv("CLIENT_THREAD_COUNT")
    if not raw_value:
        return DEFAULT_THREAD_COUNT
    try:
        return int(raw_value)
    except ValueError:
        return DEFAULT_THREAD_COUNT


def main() -> None:
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    base_url = os.getenv("SERVER_BASE_URL", DEFAULT_BASE_URL)
    results = run_load(base_url=base_url, thread_count=_thread_count())
    completed = sum(1 for result in results if result.statuses.get("delete") == 204)
    logger.info("load run finished: %s of %s sessions completed", completed, len(results))


if __name__ == "__main__":
    main()
