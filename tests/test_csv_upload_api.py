"""
tests/test_csv_upload_api.py

HTTP-level tests for POST /csv/upload using FastAPI's TestClient.

The upload service dependency is overridden with an in-memory store so
no database is touched.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config import get_csv_analysis_settings
from app.main import create_app
from app.repositories.dataset_store import InMemoryDatasetStore
from app.services.csv_analysis_service import CSVUploadService, get_csv_upload_service

SALES_CSV = (
    "date,customer,amount,quantity\n"
    "2024-01-05,alice,100,2\n"
    "2024-01-20,bob,300,1\n"
    "2024-02-03,alice,50,5\n"
)


@pytest.fixture()
def store() -> InMemoryDatasetStore:
    return InMemoryDatasetStore()


@pytest.fixture()
def client(store: InMemoryDatasetStore) -> Iterator[TestClient]:
    get_csv_analysis_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[get_csv_upload_service] = lambda: CSVUploadService(store=store)
    yield TestClient(application)
    application.dependency_overrides.clear()
    get_csv_analysis_settings.cache_clear()


def _upload(client: TestClient, content: str, *, name: str = "sales.csv", content_type: str = "text/csv"):
    return client.post("/csv/upload", files={"file": (name, content.encode("utf-8"), content_type)})


class TestUploadSuccess:
    def test_response_shape(self, client: TestClient, store: InMemoryDatasetStore) -> None:
        response = _upload(client, SALES_CSV)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["fileName"] == "sales.csv"
        assert body["recordCount"] == 3
        assert body["columns"] == ["date", "customer", "amount", "quantity"]
        assert body["aiUsed"] is False
        assert body["dataId"].startswith("upload-")
        assert len(store) == 1

    def test_summary_is_camel_case(self, client: TestClient) -> None:
        summary = _upload(client, SALES_CSV).json()["summary"]

        assert summary == {
            "totalRevenue": 450.0,
            "averageOrderValue": 150.0,
            "totalOrders": 8.0,
            "uniqueCustomers": 2,
            "dateRange": {"start": "2024-01-05", "end": "2024-02-03"},
        }

    def test_chart_and_raw_data(self, client: TestClient) -> None:
        body = _upload(client, SALES_CSV).json()

        assert body["chartData"] == [
            {"month": "Jan 24", "revenue": 400.0, "quantity": 3.0, "orders": 2},
            {"month": "Feb 24", "revenue": 50.0, "quantity": 5.0, "orders": 1},
        ]
        assert body["rawData"][0] == {
            "date": "2024-01-05",
            "customer": "alice",
            "amount": 100.0,
            "quantity": 2.0,
        }

    def test_insights_use_camel_case_keys(self, client: TestClient) -> None:
        insights = _upload(client, SALES_CSV).json()["insights"]

        assert "keyInsights" in insights
        assert insights["chartConfigs"][0]["dataKey"] == "month"

    def test_absent_summary_figures_are_omitted(self, client: TestClient) -> None:
        summary = _upload(client, "product,color\nwidget,red\n").json()["summary"]

        assert summary == {"totalOrders": 1.0}

    def test_content_type_alone_is_accepted(self, client: TestClient) -> None:
        response = _upload(client, SALES_CSV, name="export", content_type="text/csv")

        assert response.status_code == 200


class TestUploadRejections:
    def test_header_only_file(self, client: TestClient) -> None:
        response = _upload(client, "date,amount\n")

        assert response.status_code == 400
        assert response.json()["detail"] == "CSV file is empty or has no data rows."

    def test_all_rows_mismatched(self, client: TestClient) -> None:
        response = _upload(client, "a,b\n1\n2,3,4\n")

        assert response.status_code == 400
        assert response.json()["detail"] == "No valid data found in CSV file."

    def test_blank_file(self, client: TestClient) -> None:
        response = _upload(client, "   \n")

        assert response.status_code == 400
        assert response.json()["detail"] == "CSV file is empty."

    def test_non_csv_file(self, client: TestClient) -> None:
        response = _upload(client, SALES_CSV, name="notes.txt", content_type="text/plain")

        assert response.status_code == 400
        assert response.json()["detail"] == "Please upload a CSV file."

    def test_oversized_file(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSV_MAX_UPLOAD_BYTES", "16")
        get_csv_analysis_settings.cache_clear()

        response = _upload(client, SALES_CSV)

        assert response.status_code == 413

    def test_non_utf8_file(self, client: TestClient) -> None:
        response = client.post(
            "/csv/upload",
            files={"file": ("sales.csv", b"a,b\n\xff\xfe,1\n", "text/csv")},
        )

        assert response.status_code == 400


def test_healthcheck(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analysis_response_structure_block() -> None:
    from app.schemas.csv_analysis import DataAnalysisResponse
    from app.services.csv_analysis_service import analyze

    rendered = DataAnalysisResponse.from_analysis(analyze(SALES_CSV)).model_dump(
        by_alias=True,
        exclude_none=True,
    )

    assert rendered["structure"] == {
        "columns": ["date", "customer", "amount", "quantity"],
        "rowCount": 3,
        "dataTypes": {
            "date": "date",
            "customer": "string",
            "amount": "number",
            "quantity": "number",
        },
    }
    assert len(rendered["chartData"]) == 2
