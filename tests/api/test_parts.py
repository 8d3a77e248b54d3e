"""API tests for spare parts endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from reorder.api.dependencies import get_store
from reorder.api.main import app
from reorder.core.entities import SparePart
from reorder.core.exceptions import DatabaseError


@pytest.fixture
def mock_part_store(sample_parts):
    """Create mock part store over the sample parts."""
    store = AsyncMock()
    by_id = {part.id: part for part in sample_parts}

    async def _create(part: SparePart) -> SparePart:
        part.id = "new-id"
        return part

    store.create_part.side_effect = _create
    store.get_part.side_effect = lambda part_id: by_id.get(part_id)
    store.list_parts.return_value = sample_parts
    store.search_parts.return_value = [by_id["3"]]
    store.update_part.return_value = by_id["7"].model_copy(update={"current_stock": 12})
    store.delete_part.return_value = True
    return store


@pytest.fixture
async def parts_client(mock_part_store):
    """Async client with part store override."""
    app.dependency_overrides[get_store] = lambda: mock_part_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_store, None)


class TestListAndGet:
    """Tests for listing and fetching parts."""

    async def test_list_parts(self, parts_client: AsyncClient):
        """GET /api/parts returns every part in store order."""
        response = await parts_client.get("/api/parts")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 8
        assert data[0]["name"] == "Hydraulic Pump Seal"

    async def test_camel_case_fields(self, parts_client: AsyncClient):
        """Part responses use camelCase and carry derived fields."""
        response = await parts_client.get("/api/parts/3")
        assert response.status_code == 200
        part = response.json()
        assert part["currentStock"] == 0
        assert part["reorderPoint"] == 3
        assert part["supplierLeadTime"] == 21
        assert part["urgency"] == -3
        assert part["needsReorder"] is True
        assert part["stockStatus"] == "critical"
        assert part["stockStatusLabel"] == "Critical - Reorder Now"

    async def test_get_missing_part(self, parts_client: AsyncClient):
        """Unknown id returns 404 PART_NOT_FOUND."""
        response = await parts_client.get("/api/parts/999")
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PART_NOT_FOUND"
        assert body["path"] == "/api/parts/999"


class TestCreatePart:
    """Tests for POST /api/parts."""

    async def test_create(self, parts_client: AsyncClient, mock_part_store):
        """POST trims the name and returns 201 with the generated id."""
        response = await parts_client.post(
            "/api/parts",
            json={
                "name": "  Drive Chain ",
                "currentStock": 4,
                "reorderPoint": 6,
                "supplierLeadTime": 9,
                "cost": 38.0,
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "new-id"
        assert data["name"] == "Drive Chain"
        assert data["urgency"] == -2
        mock_part_store.create_part.assert_awaited_once()

    @pytest.mark.parametrize(
        "body",
        [
            {"name": ""},
            {"name": "   "},
            {"currentStock": 1},
            {"name": "Seal", "currentStock": -1},
            {"name": "Seal", "cost": -0.5},
        ],
    )
    async def test_invalid_body(self, parts_client: AsyncClient, mock_part_store, body):
        """Blank names and negative numbers are rejected with 422."""
        response = await parts_client.post("/api/parts", json=body)
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        mock_part_store.create_part.assert_not_called()


class TestSearch:
    """Tests for GET /api/parts/search."""

    async def test_search(self, parts_client: AsyncClient, mock_part_store):
        """Search trims the term before querying the store."""
        response = await parts_client.get("/api/parts/search", params={"q": " belt "})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Conveyor Belt"]
        mock_part_store.search_parts.assert_awaited_once_with("belt")

    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    async def test_missing_query(self, parts_client: AsyncClient, params):
        """Missing or blank q returns 400 MISSING_QUERY."""
        response = await parts_client.get("/api/parts/search", params=params)
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == 'Query parameter "q" is required'
        assert body["error_code"] == "MISSING_QUERY"


class TestView:
    """Tests for GET /api/parts/view."""

    async def test_default_view(self, parts_client: AsyncClient):
        """Default view lists the most urgent part first with full counts."""
        response = await parts_client.get("/api/parts/view")
        assert response.status_code == 200
        data = response.json()
        assert data["parts"][0]["name"] == "Motor Brush Set"
        assert data["parts"][-1]["name"] == "Gasket Kit"
        assert data["total"] == 8
        assert data["needsReorderCount"] == 6
        assert data["adequateCount"] == 2
        assert data["matchCount"] == 8
        assert data["sortField"] == "priority"
        assert data["direction"] == "asc"
        assert data["algorithm"] == "comparator"

    async def test_desc_view(self, parts_client: AsyncClient):
        """direction=desc lists the best stocked part first."""
        response = await parts_client.get("/api/parts/view", params={"direction": "desc"})
        data = response.json()
        assert data["parts"][0]["name"] == "Gasket Kit"
        assert data["parts"][-1]["name"] == "Motor Brush Set"
        assert data["direction"] == "desc"

    @pytest.mark.parametrize("algorithm", ["comparator", "quicksort", "mergesort"])
    async def test_algorithms_agree_on_urgency(self, parts_client: AsyncClient, algorithm):
        """Every algorithm gives the same urgency sequence."""
        response = await parts_client.get(
            "/api/parts/view", params={"sort": "urgency", "algorithm": algorithm}
        )
        assert response.status_code == 200
        urgencies = [p["urgency"] for p in response.json()["parts"]]
        assert urgencies == [-7, -3, -3, -3, -3, -2, 2, 8]

    async def test_search_in_view(self, parts_client: AsyncClient):
        """View search narrows parts but keeps snapshot counts."""
        response = await parts_client.get(
            "/api/parts/view", params={"sort": "name", "direction": "asc", "q": "co"}
        )
        data = response.json()
        assert [p["name"] for p in data["parts"]] == ["Control Valve", "Conveyor Belt"]
        assert data["matchCount"] == 2
        assert data["needsReorderCount"] == 6

    async def test_exact_mode(self, parts_client: AsyncClient):
        """mode=exact uses whole-name lookup."""
        response = await parts_client.get(
            "/api/parts/view", params={"q": "circuit board", "mode": "exact"}
        )
        data = response.json()
        assert [p["name"] for p in data["parts"]] == ["Circuit Board"]
        assert data["searchMode"] == "exact"

    async def test_unknown_sort_field(self, parts_client: AsyncClient):
        """Unknown sort field returns 400 VALIDATION_ERROR."""
        response = await parts_client.get("/api/parts/view", params={"sort": "weight"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_storage_failure(self, parts_client: AsyncClient, mock_part_store):
        """Database errors surface as 500 DATABASE_ERROR."""
        mock_part_store.list_parts.side_effect = DatabaseError("list_parts", "disk I/O error")
        response = await parts_client.get("/api/parts/view")
        assert response.status_code == 500
        assert response.json()["error_code"] == "DATABASE_ERROR"


class TestUpdatePart:
    """Tests for PATCH /api/parts/{id}."""

    async def test_patch(self, parts_client: AsyncClient, mock_part_store):
        """PATCH sends only the provided fields to the store."""
        response = await parts_client.patch("/api/parts/7", json={"currentStock": 12})
        assert response.status_code == 200
        data = response.json()
        assert data["currentStock"] == 12
        assert data["urgency"] == 4
        assert data["stockStatus"] == "low"
        mock_part_store.update_part.assert_awaited_once_with("7", {"current_stock": 12})

    async def test_empty_patch_is_noop(self, parts_client: AsyncClient, mock_part_store):
        """An empty body returns the current part without writing."""
        response = await parts_client.patch("/api/parts/7", json={})
        assert response.status_code == 200
        assert response.json()["currentStock"] == 5
        mock_part_store.update_part.assert_not_called()

    async def test_patch_missing_part(self, parts_client: AsyncClient, mock_part_store):
        """PATCH on an unknown id returns 404."""
        mock_part_store.update_part.return_value = None
        response = await parts_client.patch("/api/parts/999", json={"cost": 1.0})
        assert response.status_code == 404
        assert response.json()["error_code"] == "PART_NOT_FOUND"

    async def test_patch_invalid_value(self, parts_client: AsyncClient):
        """Negative values in PATCH return 422."""
        response = await parts_client.patch("/api/parts/7", json={"reorderPoint": -3})
        assert response.status_code == 422


class TestDeletePart:
    """Tests for DELETE /api/parts/{id}."""

    async def test_delete(self, parts_client: AsyncClient):
        """DELETE returns 204."""
        response = await parts_client.delete("/api/parts/1")
        assert response.status_code == 204

    async def test_delete_missing(self, parts_client: AsyncClient, mock_part_store):
        """DELETE on an unknown id returns 404."""
        mock_part_store.delete_part.return_value = False
        response = await parts_client.delete("/api/parts/999")
        assert response.status_code == 404
