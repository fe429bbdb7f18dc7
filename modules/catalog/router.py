from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query, Request

from core import latency
from core.database import get_store
from core.settings import CLONE, READ, WRITE
from modules.catalog import schemas
from modules.catalog.service import RecordStore

router = APIRouter(tags=["catalog"])

RESERVED_PARAMS = {"current", "pageSize"}
CONTAINS_SUFFIX = "__contains"


def _filters_from_query(request: Request):
    filters = []
    for key, value in request.query_params.items():
        if key in RESERVED_PARAMS:
            continue
        if key.endswith(CONTAINS_SUFFIX):
            filters.append({"field": key[: -len(CONTAINS_SUFFIX)], "operator": "contains", "value": value})
        else:
            filters.append({"field": key, "operator": "eq", "value": value})
    return filters


@router.post("/api/styles/{style_id}/variants/{variant_id}/clone", response_model=schemas.CloneResult)
async def clone_variant_endpoint(
    style_id: int,
    variant_id: int,
    clone_in: schemas.CloneRequest,
    store: RecordStore = Depends(get_store),
):
    await latency.simulate(store.settings, CLONE)
    summary = store.custom(
        f"/api/styles/{style_id}/variants/{variant_id}/clone",
        "post",
        {"new_color_name": clone_in.new_color_name},
    )
    return {"data": summary}


@router.post("/custom", response_model=schemas.CustomResult)
async def custom_endpoint(request_in: schemas.CustomRequest, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, CLONE)
    return {"data": store.custom(request_in.url, request_in.method, request_in.payload)}


@router.get("/{resource}", response_model=schemas.ListResult)
async def list_endpoint(
    resource: str,
    request: Request,
    current: int = Query(1, ge=1),
    pageSize: int = Query(10, ge=1),
    store: RecordStore = Depends(get_store),
):
    await latency.simulate(store.settings, READ)
    data, total = store.list(resource, _filters_from_query(request), {"current": current, "pageSize": pageSize})
    return {"data": data, "total": total}


@router.post("/{resource}/search", response_model=schemas.ListResult)
async def search_endpoint(resource: str, query: schemas.ListQuery, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, READ)
    data, total = store.list(
        resource,
        [f.model_dump() for f in query.filters],
        query.pagination.model_dump(by_alias=True),
    )
    return {"data": data, "total": total}


@router.post("/{resource}/get-many", response_model=schemas.RecordsResult)
async def get_many_endpoint(resource: str, payload: schemas.IdsPayload, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, READ)
    return {"data": store.get_many(resource, payload.ids)}


@router.post("/{resource}/update-many", response_model=schemas.IdsResult)
async def update_many_endpoint(
    resource: str,
    payload: schemas.UpdateManyPayload,
    store: RecordStore = Depends(get_store),
):
    await latency.simulate(store.settings, WRITE)
    return {"data": store.update_many(resource, payload.ids, payload.values)}


@router.post("/{resource}/delete-many", response_model=schemas.IdsResult)
async def delete_many_endpoint(resource: str, payload: schemas.IdsPayload, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, WRITE)
    return {"data": store.delete_many(resource, payload.ids)}


@router.get("/{resource}/{record_id}", response_model=schemas.RecordResult)
async def get_endpoint(resource: str, record_id: int, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, READ)
    return {"data": store.get(resource, record_id)}


@router.post("/{resource}", response_model=schemas.RecordResult)
async def create_endpoint(resource: str, values: Dict[str, Any] = Body(...), store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, WRITE)
    return {"data": store.create(resource, values)}


@router.patch("/{resource}/{record_id}", response_model=schemas.RecordResult)
async def update_endpoint(resource: str, record_id: int, values: Dict[str, Any] = Body(...), store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, WRITE)
    return {"data": store.update(resource, record_id, values)}


@router.delete("/{resource}/{record_id}", response_model=schemas.RecordResult)
async def delete_endpoint(resource: str, record_id: int, store: RecordStore = Depends(get_store)):
    await latency.simulate(store.settings, WRITE)
    return {"data": store.delete(resource, record_id)}
