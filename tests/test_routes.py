import uuid


class TestOrderRoutes:
    """Test cases for the /api/orders endpoints"""

    def test_create_full_order(self, client, order_data, delivery_data, payment_data, item_data):
        response = client.post(
            "/api/orders",
            json={**order_data, "delivery": delivery_data, "payment": payment_data, "items": [item_data]},
        )

        assert response.status_code == 201
        order_uid = response.json()["order_uid"]
        assert uuid.UUID(order_uid)

        response = client.get(f"/api/orders/{order_uid}")
        assert response.status_code == 200
        data = response.json()
        assert data["order_uid"] == order_uid
        assert data["track_number"] == "WBILMTESTTRACK"
        assert data["delivery"]["email"] == "test@example.com"
        assert data["payment"]["amount"] == 1817
        assert data["payment"]["payment_dt"] == "2021-11-26T06:22:07+00:00"
        assert len(data["items"]) == 1
        assert data["items"][0]["brand"] == "Vivienne Sabo"
        assert data["date_created"].endswith("+00:00")

    def test_create_order_without_children(self, client, order_data):
        response = client.post("/api/orders", json=order_data)
        assert response.status_code == 201

        data = client.get(f"/api/orders/{response.json()['order_uid']}").json()
        assert data["delivery"] is None
        assert data["payment"] is None
        assert data["items"] == []

    def test_create_missing_required_field(self, client, order_data):
        del order_data["customer_id"]

        response = client.post("/api/orders", json=order_data)

        assert response.status_code == 422

    def test_create_oversized_integer(self, client, order_data, item_data):
        response = client.post("/api/orders", json={**order_data, "items": [{**item_data, "chrt_id": 2 ** 64}]})

        assert response.status_code == 422

    def test_attach_oversized_amount(self, client, order_data, payment_data):
        order_uid = client.post("/api/orders", json=order_data).json()["order_uid"]

        response = client.post(f"/api/orders/{order_uid}/payment", json={**payment_data, "amount": 2 ** 64})

        assert response.status_code == 422
        assert client.get(f"/api/orders/{order_uid}").json()["payment"] is None

    def test_caller_supplied_date_created_round_trips(self, client, order_data):
        order_uid = client.post(
            "/api/orders", json={**order_data, "date_created": "2021-11-26T09:22:19+03:00"}
        ).json()["order_uid"]

        data = client.get(f"/api/orders/{order_uid}").json()

        assert data["date_created"] == "2021-11-26T06:22:19+00:00"

    def test_create_duplicate_id(self, client, order_data):
        order_uid = str(uuid.uuid4())
        assert client.post("/api/orders", json={**order_data, "order_uid": order_uid}).status_code == 201

        response = client.post("/api/orders", json={**order_data, "order_uid": order_uid})

        assert response.status_code == 409
        assert response.json()["status"] == "error"

    def test_get_unknown_order(self, client):
        response = client.get(f"/api/orders/{uuid.uuid4()}")

        assert response.status_code == 404
        assert "not found" in response.json()["message"]

    def test_get_malformed_id(self, client):
        response = client.get("/api/orders/not-a-uuid")

        assert response.status_code == 422

    def test_delete_order(self, client, order_data, item_data):
        order_uid = client.post("/api/orders", json={**order_data, "items": [item_data, item_data]}).json()["order_uid"]

        response = client.delete(f"/api/orders/{order_uid}")
        assert response.status_code == 204

        assert client.get(f"/api/orders/{order_uid}").status_code == 404
        assert client.delete(f"/api/orders/{order_uid}").status_code == 404

    def test_attach_children(self, client, order_data, delivery_data, payment_data, item_data):
        order_uid = client.post("/api/orders", json=order_data).json()["order_uid"]

        response = client.post(f"/api/orders/{order_uid}/delivery", json=delivery_data)
        assert response.status_code == 201
        assert isinstance(response.json()["delivery_id"], int)

        response = client.post(f"/api/orders/{order_uid}/payment", json=payment_data)
        assert response.status_code == 201
        assert isinstance(response.json()["payment_id"], int)

        for _ in range(2):
            response = client.post(f"/api/orders/{order_uid}/items", json=item_data)
            assert response.status_code == 201

        data = client.get(f"/api/orders/{order_uid}").json()
        assert data["delivery"]["name"] == "Test Testov"
        assert data["payment"]["provider"] == "wbpay"
        assert len(data["items"]) == 2

    def test_attach_to_unknown_order(self, client, delivery_data, payment_data, item_data):
        missing = uuid.uuid4()

        assert client.post(f"/api/orders/{missing}/delivery", json=delivery_data).status_code == 404
        assert client.post(f"/api/orders/{missing}/payment", json=payment_data).status_code == 404
        assert client.post(f"/api/orders/{missing}/items", json=item_data).status_code == 404
        assert client.get(f"/api/orders/{missing}").status_code == 404

    def test_second_delivery_conflicts(self, client, order_data, delivery_data):
        order_uid = client.post("/api/orders", json={**order_data, "delivery": delivery_data}).json()["order_uid"]

        response = client.post(f"/api/orders/{order_uid}/delivery", json=delivery_data)

        assert response.status_code == 409
        assert "already has a delivery" in response.json()["message"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
