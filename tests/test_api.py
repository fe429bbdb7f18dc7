"""API-level tests for the record store endpoints."""
import pathlib
import sys
from io import BytesIO

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from core.database import create_store
from core.settings import Settings
from main import create_app
from modules.reports.excel import format_spec_details


@pytest.fixture
def client():
    """Fresh app and seeded store for every test."""
    settings = Settings(simulate_latency=False)
    app = create_app(settings=settings, store=create_store(settings))
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_with_query_string_filters(client):
    resp = client.get("/bom_items", params={"variant_id": "101"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 3
    assert [item["id"] for item in body["data"]] == [1001, 1002, 1003]

    resp = client.get("/styles", params={"style_name__contains": "衬衫"})
    assert resp.json()["total"] == 1
    assert resp.json()["data"][0]["style_no"] == "ST2024-002"


def test_list_pagination(client):
    resp = client.get("/bom_items", params={"current": 2, "pageSize": 4})
    body = resp.json()
    assert body["total"] == 6
    assert [item["id"] for item in body["data"]] == [1005, 1006]


def test_list_rejects_page_below_one(client):
    resp = client.get("/styles", params={"current": 0})
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


def test_list_unknown_resource_is_empty(client):
    resp = client.get("/fabrics")
    assert resp.status_code == 200
    assert resp.json() == {"data": [], "total": 0}


def test_search_endpoint(client):
    resp = client.post(
        "/bom_items/search",
        json={
            "filters": [
                {"field": "variant_id", "operator": "eq", "value": 101},
                {"field": "material_name", "operator": "contains", "value": "布"},
            ],
            "pagination": {"current": 1, "pageSize": 10},
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 1
    assert body["data"][0]["id"] == 1002


def test_get_one_and_not_found(client):
    resp = client.get("/styles/1")
    assert resp.status_code == 200
    assert resp.json()["data"]["style_no"] == "ST2024-001"

    resp = client.get("/styles/999")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def test_create_update_delete_variant(client):
    resp = client.post("/variants", json={"style_id": 1, "color_name": "酒红色", "size_range": "S-M"})
    assert resp.status_code == 200, resp.text
    variant = resp.json()["data"]
    assert variant["id"] >= 10000

    resp = client.patch(f"/variants/{variant['id']}", json={"size_range": "S-XL", "id": 1})
    assert resp.status_code == 200
    assert resp.json()["data"] == {**variant, "size_range": "S-XL"}

    resp = client.delete(f"/variants/{variant['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == variant["id"]
    assert client.get(f"/variants/{variant['id']}").status_code == 404


def test_delete_variant_cascades_over_http(client):
    client.delete("/variants/101")
    resp = client.get("/bom_items", params={"variant_id": 101})
    assert resp.json()["total"] == 0


def test_bulk_endpoints(client):
    resp = client.post("/styles/get-many", json={"ids": [1, 999, 3]})
    assert [s["id"] for s in resp.json()["data"]] == [1, 3]

    resp = client.post("/styles/update-many", json={"ids": [2, 999], "values": {"public_note": "已审核"}})
    assert resp.json()["data"] == [2]
    assert client.get("/styles/2").json()["data"]["public_note"] == "已审核"

    resp = client.post("/variants/delete-many", json={"ids": [104, 999]})
    assert resp.json()["data"] == [104]
    # bulk delete does not cascade
    assert client.get("/bom_items", params={"variant_id": 104}).json()["total"] == 1


def test_clone_endpoint(client):
    resp = client.post("/api/styles/1/variants/101/clone", json={"new_color_name": "红色"})
    assert resp.status_code == 200, resp.text
    summary = resp.json()["data"]
    assert summary["color_name"] == "红色"
    assert summary["cloned_bom_count"] == 3
    assert summary["cloned_spec_count"] == 4

    clone_items = client.get("/bom_items", params={"variant_id": summary["id"]}).json()["data"]
    source_items = client.get("/bom_items", params={"variant_id": 101}).json()["data"]
    assert len(clone_items) == 3
    assert not {i["id"] for i in clone_items} & {i["id"] for i in source_items}


def test_clone_endpoint_validation_and_not_found(client):
    resp = client.post("/api/styles/1/variants/101/clone", json={"new_color_name": ""})
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"

    resp = client.post("/api/styles/1/variants/999/clone", json={"new_color_name": "红色"})
    assert resp.status_code == 404


def test_custom_endpoint(client):
    resp = client.post(
        "/custom",
        json={"url": "/api/styles/2/variants/103/clone", "method": "post", "payload": {"new_color_name": "藏青"}},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["cloned_bom_count"] == 1

    resp = client.post("/custom", json={"url": "/api/styles/2/publish", "method": "post"})
    assert resp.status_code == 501
    assert resp.json()["code"] == "unimplemented"


def test_bom_sheet_download(client):
    resp = client.get("/variants/101/bom-sheet")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats")

    wb = load_workbook(BytesIO(resp.content))
    ws = wb.active
    assert ws["A1"].value == "配料明细表"
    values = [cell.value for row in ws.iter_rows() for cell in row]
    assert "主面料-羊毛混纺" in values
    assert "S 1.5 米\nM 1.6 米\nL 1.7 米" in values
    assert "无规格" in values


def test_bom_sheet_missing_variant(client):
    resp = client.get("/variants/999/bom-sheet")
    assert resp.status_code == 404


def test_format_spec_details():
    specs = [
        {"id": 1, "size": "M", "spec_value": "10", "spec_unit": "cm"},
        {"id": 2, "size": "", "spec_value": "3", "spec_unit": "粒"},
    ]
    assert format_spec_details(specs) == "M 10 cm\n3 粒"
    assert format_spec_details([]) == ""
