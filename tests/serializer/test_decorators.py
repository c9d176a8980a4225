"""
Some tests for the expects and returns decorators, through the vehicle routes.
"""

from aiohttp.test_utils import TestClient

from vehicle_rental.serializer import ProblemSchema


class TestExpectDecorator:

    async def test_expects_no_data(self, client: TestClient, admin_headers):
        """Assert that trying to create a vehicle with no data fails."""
        resp = await client.post('/api/vehicles', headers=admin_headers)
        data = ProblemSchema().load(await resp.json())
        assert resp.status == 400
        assert data["detail"] == "Request body cannot be empty"

    async def test_expects_not_json(self, client: TestClient, admin_headers):
        resp = await client.post(
            '/api/vehicles', data="hello", headers={**admin_headers, "Content-Type": "text/plain"}
        )
        data = ProblemSchema().load(await resp.json())
        assert resp.status == 400
        assert "only accepts JSON" in data["detail"]

    async def test_expects_malformed_json(self, client: TestClient, admin_headers):
        """Assert that trying to create a vehicle with malformed JSON fails."""
        resp = await client.post(
            '/api/vehicles', data="[", headers={**admin_headers, "Content-Type": "application/json"}
        )
        data = ProblemSchema().load(await resp.json())
        assert resp.status == 400
        assert "Could not parse" in data["detail"]

    async def test_expects_invalid_data(self, client: TestClient, admin_headers):
        """Assert that trying to create a vehicle with invalid data lists the errors."""
        resp = await client.post('/api/vehicles', json={"wrong": "data"}, headers=admin_headers)
        data = ProblemSchema().load(await resp.json())
        assert resp.status == 400
        assert data["title"] == "Validation Error"
        assert data["detail"] == "Invalid fields in request"
        fields = {error["field"] for error in data["errors"]}
        assert {"wrong", "type", "registrationNumber", "brand", "model", "isRented"} <= fields

    async def test_expects_not_an_object(self, client: TestClient, admin_headers):
        resp = await client.post('/api/vehicles', json=[1, 2], headers=admin_headers)
        assert resp.status == 400


class TestReturnsDecorator:

    async def test_returns_status(self, client: TestClient, admin_headers, random_user, random_vehicle):
        """Assert that the decorator responds with the given status code."""
        resp = await client.post(
            '/api/rentals', json={"userId": random_user.id, "vehicleId": random_vehicle.id}, headers=admin_headers
        )
        assert resp.status == 201
        assert resp.content_type == "application/json"
