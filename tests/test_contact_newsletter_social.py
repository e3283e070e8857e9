"""Tests for contact, newsletter, social links and app-level behavior."""

CONTACT_URL = "/api/v1/contact/"
SOCIAL_URL = "/api/v1/social-media/"


class TestContact:
    async def test_message_is_stored_as_plain_text(self, client, admin_headers):
        response = await client.post(CONTACT_URL, json={
            "name": "<i>Ada</i>",
            "email": "Ada@Example.com",
            "subject": "Commission",
            "message": "<b>Hello</b>\n\nI love   your work",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Ada"
        assert body["email"] == "ada@example.com"
        assert body["message"] == "Hello\n\nI love your work"

    async def test_special_characters_are_not_escaped(self, client, admin_headers):
        response = await client.post(CONTACT_URL, json={
            "name": "Tom & Jerry",
            "email": "tom@example.com",
            "subject": "Price < 100?",
            "message": "Is 5 > 3 & 2 < 4?",
        })

        assert response.status_code == 201
        stored = (await client.get(
            "/api/v1/admin/contact-messages", headers=admin_headers
        )).json()["items"][0]
        assert stored["name"] == "Tom & Jerry"
        assert stored["subject"] == "Price < 100?"
        assert stored["message"] == "Is 5 > 3 & 2 < 4?"

    async def test_markup_only_message_is_rejected(self, client):
        response = await client.post(CONTACT_URL, json={
            "name": "Ada", "email": "ada@example.com",
            "subject": "Hi", "message": "<script></script>",
        })
        assert response.status_code == 422

    async def test_invalid_email(self, client):
        response = await client.post(CONTACT_URL, json={
            "name": "Ada", "email": "not-an-email", "subject": "Hi", "message": "Hello",
        })
        assert response.status_code == 422
        assert response.json()["error"]["details"][0]["field"] == "email"

    async def test_admin_lists_and_deletes(self, client, admin_headers):
        for n in range(2):
            await client.post(CONTACT_URL, json={
                "name": "Ada", "email": "ada@example.com",
                "subject": f"Question {n}", "message": "Hello",
            })

        listing = (await client.get("/api/v1/admin/contact-messages", headers=admin_headers)).json()
        assert listing["total"] == 2
        assert listing["items"][0]["subject"] == "Question 1"

        message_id = listing["items"][0]["id"]
        deleted = await client.delete(
            f"/api/v1/admin/contact-messages/{message_id}", headers=admin_headers
        )
        missing = await client.delete(
            f"/api/v1/admin/contact-messages/{message_id}", headers=admin_headers
        )

        assert deleted.status_code == 204
        assert missing.status_code == 404

    async def test_listing_requires_admin(self, client, customer_headers):
        response = await client.get("/api/v1/admin/contact-messages", headers=customer_headers)
        assert response.status_code == 403


class TestNewsletter:
    async def test_subscribe_is_idempotent(self, client, admin_headers):
        first = await client.post("/api/v1/newsletter/subscribe", json={"email": "Fan@Example.com"})
        second = await client.post("/api/v1/newsletter/subscribe", json={"email": "fan@example.com"})

        assert first.status_code == 200
        assert second.json()["email"] == "fan@example.com"
        assert second.json()["is_active"] is True
        listing = (await client.get("/api/v1/admin/newsletter-subscriptions", headers=admin_headers)).json()
        assert listing["total"] == 1

    async def test_unsubscribe_and_resubscribe(self, client):
        await client.post("/api/v1/newsletter/subscribe", json={"email": "fan@example.com"})

        unsubscribed = (await client.post(
            "/api/v1/newsletter/unsubscribe", json={"email": "fan@example.com"}
        )).json()
        resubscribed = (await client.post(
            "/api/v1/newsletter/subscribe", json={"email": "fan@example.com"}
        )).json()

        assert unsubscribed["is_active"] is False
        assert unsubscribed["unsubscribed_at"] is not None
        assert resubscribed["is_active"] is True
        assert resubscribed["unsubscribed_at"] is None

    async def test_unsubscribe_unknown_email(self, client):
        response = await client.post("/api/v1/newsletter/unsubscribe", json={"email": "ghost@example.com"})
        assert response.status_code == 404

    async def test_admin_filter_and_delete(self, client, admin_headers):
        for email in ("a@example.com", "b@example.com"):
            await client.post("/api/v1/newsletter/subscribe", json={"email": email})
        await client.post("/api/v1/newsletter/unsubscribe", json={"email": "a@example.com"})

        active = (await client.get(
            "/api/v1/admin/newsletter-subscriptions", params={"is_active": True}, headers=admin_headers
        )).json()
        assert [item["email"] for item in active["items"]] == ["b@example.com"]

        deleted = await client.delete(
            "/api/v1/admin/newsletter-subscriptions/b@example.com", headers=admin_headers
        )
        assert deleted.status_code == 204
        remaining = (await client.get(
            "/api/v1/admin/newsletter-subscriptions", headers=admin_headers
        )).json()
        assert remaining["total"] == 1


class TestSocialMedia:
    async def test_unconfigured_platforms_are_hidden(self, client):
        response = await client.get(SOCIAL_URL)

        assert response.status_code == 200
        assert response.json() == [
            {"platform": "instagram", "url": None, "is_visible": False},
            {"platform": "facebook", "url": None, "is_visible": False},
            {"platform": "x", "url": None, "is_visible": False},
        ]

    async def test_admin_sets_link(self, client, admin_headers):
        first = await client.put(
            f"{SOCIAL_URL}instagram",
            json={"url": "https://instagram.com/studio", "is_visible": True},
            headers=admin_headers,
        )
        second = await client.put(
            f"{SOCIAL_URL}instagram",
            json={"url": "https://instagram.com/gallery", "is_visible": False},
            headers=admin_headers,
        )

        assert first.status_code == 200
        assert second.json() == {
            "platform": "instagram", "url": "https://instagram.com/gallery", "is_visible": False
        }
        fetched = (await client.get(f"{SOCIAL_URL}instagram")).json()
        assert fetched["url"] == "https://instagram.com/gallery"

    async def test_update_requires_admin(self, client):
        response = await client.put(f"{SOCIAL_URL}x", json={"url": "https://x.com/studio"})
        assert response.status_code == 401

    async def test_rejects_bad_input(self, client, admin_headers):
        unknown = await client.put(
            f"{SOCIAL_URL}myspace", json={"url": "https://myspace.com/a"}, headers=admin_headers
        )
        hidden_url = await client.put(
            f"{SOCIAL_URL}x", json={"url": "javascript:alert(1)"}, headers=admin_headers
        )
        visible_without_url = await client.put(
            f"{SOCIAL_URL}x", json={"is_visible": True}, headers=admin_headers
        )

        assert unknown.status_code == 422
        assert hidden_url.status_code == 422
        assert visible_without_url.status_code == 422


class TestApp:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_unknown_route_uses_error_envelope(self, client):
        response = await client.get("/api/v1/nowhere")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_ERROR"

    async def test_request_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    async def test_cart_quote(self, client, create_artwork):
        artwork = await create_artwork()

        response = await client.post("/api/v1/cart/quote", json={"cart_items": [
            {"artwork_id": artwork.id, "type": "print", "print_size": "8x10",
             "quantity": 2, "unit_price": "5.00"},
        ]})

        assert response.status_code == 200
        body = response.json()
        assert body["total_items"] == 2
        assert body["subtotal"] == "40.00"
        assert body["shipping_cost"] == "15.00"
        assert body["total"] == "55.00"
        assert body["free_shipping_threshold"] == "100.00"
        assert body["items"][0]["id"] == f"{artwork.id}-print-8x10"
