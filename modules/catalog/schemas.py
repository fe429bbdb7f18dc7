from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RecordId = Union[int, str]


class FilterCondition(BaseModel):
    field: str
    operator: str = Field("eq", description="eq | contains")
    value: Optional[Any] = None


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current: int = Field(1, ge=1, description="从 1 开始的页码")
    page_size: int = Field(10, ge=1, alias="pageSize")


class ListQuery(BaseModel):
    filters: List[FilterCondition] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class ListResult(BaseModel):
    data: List[Dict[str, Any]]
    total: int


class RecordResult(BaseModel):
    data: Dict[str, Any]


class IdsPayload(BaseModel):
    ids: List[RecordId] = Field(default_factory=list)


class UpdateManyPayload(IdsPayload):
    values: Dict[str, Any] = Field(default_factory=dict)


class RecordsResult(BaseModel):
    data: List[Dict[str, Any]]


class IdsResult(BaseModel):
    data: List[RecordId]


class CloneRequest(BaseModel):
    new_color_name: Optional[str] = None


class CloneSummary(BaseModel):
    id: int
    color_name: str
    cloned_bom_count: int
    cloned_spec_count: int


class CloneResult(BaseModel):
    data: CloneSummary


class CustomRequest(BaseModel):
    url: str
    method: str = "post"
    payload: Optional[Dict[str, Any]] = None


class CustomResult(BaseModel):
    data: Any
