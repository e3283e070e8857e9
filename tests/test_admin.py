"""Tests for back-office order management."""

import pytest

from gallery.api.v1.orders.state_machine import OrderStateMachine
from gallery.core.config import settings
from gallery.models import OrderStatus

ADMIN_ORDERS_URL = "/api/v1/admin/orders"


@pytest.fixture
def place_order(client, customer_data):
    async def _place(artwork, item_type="print"):
        item = {"artwork_id": artwork.id, "type": item_type, "quantity": 1, "unit_price": "0"}
        if item_type == "print":
            item["print_size"] = "8x10"
        response = await client.post("/api/v1/orders/", json={
            "customer_data": customer_data,
            "cart_items": [item],
            "payment_method": "bank_transfer",
        })
        assert response.status_code == 201
        return response.json()

    return _place


async def set_status(client, headers, order_id, status):
    return await client.patch(
        f"{ADMIN_ORDERS_URL}/{order_id}/status", json={"status": status}, headers=headers
    )


class TestStateMachine:
    def test_pending_moves_anywhere(self):
        machine = OrderStateMachine()
        assert machine.get_valid_transitions(OrderStatus.PENDING) == [
            OrderStatus.CANCELLED, OrderStatus.COMPLETED, OrderStatus.FAILED
        ]

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.FAILED])
    def test_final_states(self, status):
        machine = OrderStateMachine()
        assert machine.is_terminal_state(status)
        assert not machine.can_transition(status, OrderStatus.PENDING)


class TestAdminAccess:
    async def test_requires_token(self, client):
        assert (await client.get(ADMIN_ORDERS_URL)).status_code == 401

    async def test_requires_admin_role(self, client, customer_headers):
        assert (await client.get(ADMIN_ORDERS_URL, headers=customer_headers)).status_code == 403


class TestListOrders:
    async def test_newest_first(self, client, admin_headers, create_artwork, place_order):
        artwork = await create_artwork()
        first = await place_order(artwork)
        second = await place_order(artwork)

        response = await client.get(ADMIN_ORDERS_URL, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [order["id"] for order in body["items"]] == [second["id"], first["id"]]
        assert body["items"][0]["customer"]["email"] == "ada@example.com"
        assert len(body["items"][0]["items"]) == 1

    async def test_filter_and_paginate(self, client, admin_headers, create_artwork, place_order):
        artwork = await create_artwork()
        orders = [await place_order(artwork) for _ in range(3)]
        await set_status(client, admin_headers, orders[0]["id"], "cancelled")

        pending = (await client.get(
            ADMIN_ORDERS_URL, params={"status": "pending"}, headers=admin_headers
        )).json()
        page = (await client.get(
            ADMIN_ORDERS_URL, params={"page": 2, "size": 2}, headers=admin_headers
        )).json()

        assert pending["total"] == 2
        assert all(order["status"] == "pending" for order in pending["items"])
        assert page["total"] == 3
        assert page["pages"] == 2
        assert len(page["items"]) == 1

    async def test_page_size_follows_settings(self, client, admin_headers):
        default = (await client.get(ADMIN_ORDERS_URL, headers=admin_headers)).json()
        too_big = await client.get(
            ADMIN_ORDERS_URL, params={"size": settings.MAX_PAGE_SIZE + 1}, headers=admin_headers
        )

        assert default["size"] == settings.DEFAULT_PAGE_SIZE
        assert too_big.status_code == 422


class TestUpdateOrderStatus:
    async def test_complete_marks_original_sold(self, client, admin_headers, create_artwork, place_order):
        artwork = await create_artwork()
        order = await place_order(artwork, item_type="original")

        response = await set_status(client, admin_headers, order["id"], "completed")

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["completed_at"] is not None
        sold = (await client.get(f"/api/v1/artworks/{artwork.id}")).json()
        assert sold["original_sold"] is True

    async def test_cancel_pending(self, client, admin_headers, create_artwork, place_order):
        order = await place_order(await create_artwork())

        response = await set_status(client, admin_headers, order["id"], "cancelled")

        assert response.json()["status"] == "cancelled"

    @pytest.mark.parametrize("final, target", [
        ("completed", "cancelled"),
        ("cancelled", "completed"),
        ("failed", "pending"),
    ])
    async def test_final_states_do_not_move(
        self, client, admin_headers, create_artwork, place_order, final, target
    ):
        order = await place_order(await create_artwork())
        await set_status(client, admin_headers, order["id"], final)

        response = await set_status(client, admin_headers, order["id"], target)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    async def test_same_status_is_a_no_op(self, client, admin_headers, create_artwork, place_order):
        order = await place_order(await create_artwork())
        await set_status(client, admin_headers, order["id"], "completed")

        response = await set_status(client, admin_headers, order["id"], "completed")

        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    async def test_unknown_status_value(self, client, admin_headers, create_artwork, place_order):
        order = await place_order(await create_artwork())
        response = await set_status(client, admin_headers, order["id"], "shipped")
        assert response.status_code == 422

    async def test_unknown_order(self, client, admin_headers):
        response = await set_status(client, admin_headers, 999, "cancelled")
        assert response.status_code == 404
