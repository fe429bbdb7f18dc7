import logging
import re
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.collection_store import CollectionStore
from core.errors import NotFoundException, UnimplementedException, ValidationAppException
from core.identity import IdentityAllocator
from core.query import normalize_value, run_query, same_value
from core.seed import iter_seed_ids
from core.settings import Settings
from modules.catalog.cascade import cascade_delete
from modules.catalog.clone import CloneEngine

logger = logging.getLogger(__name__)

CLONE_URL = re.compile(r"/api/styles/(\d+)/variants/(\d+)/clone")

# child resource -> (field holding the parent id, parent resource)
PARENT_REFERENCES = {
    "variants": ("style_id", "styles"),
    "bom_items": ("variant_id", "variants"),
}


class RecordStore:
    """In-memory store for styles, color variants and bom items.

    Each instance owns its collections and id counter; mutations are
    serialized by a single store-wide lock.
    """

    def __init__(self, settings: Settings, seed: Optional[Mapping[str, List[Dict[str, Any]]]] = None):
        self.settings = settings
        self.collections = CollectionStore()
        self.allocator = IdentityAllocator(settings.id_baseline)
        self.clone_engine = CloneEngine(self.collections, self.allocator)
        self._lock = threading.RLock()

        seed = seed or {}
        for resource, records in seed.items():
            for record in records:
                self.collections.insert(resource, record)
        for seed_id in iter_seed_ids(seed):
            self.allocator.reserve(seed_id)

    # Reads

    def list(
        self,
        resource: str,
        filters: Optional[List[Mapping[str, Any]]] = None,
        pagination: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        logger.debug("list %s filters=%s pagination=%s", resource, filters, pagination)
        return run_query(self.collections.all(resource), filters, pagination)

    def get(self, resource: str, record_id: Any) -> Dict[str, Any]:
        logger.debug("get %s#%s", resource, record_id)
        return self.collections.get(resource, record_id)

    def get_many(self, resource: str, ids: List[Any]) -> List[Dict[str, Any]]:
        logger.debug("get_many %s ids=%s", resource, ids)
        wanted = {normalize_value(record_id) for record_id in ids}
        return [record for record in self.collections.all(resource) if normalize_value(record["id"]) in wanted]

    # Writes

    def create(self, resource: str, values: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("create %s %s", resource, values)
        fields = {key: value for key, value in values.items() if key != "id"}
        with self._lock:
            self._check_references(resource, fields)
            if resource == "bom_items":
                self._prepare_spec_details(fields)
            record = {"id": self.allocator.next(), **fields}
            return self.collections.insert(resource, record)

    def update(self, resource: str, record_id: Any, values: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug("update %s#%s %s", resource, record_id, values)
        with self._lock:
            merged = self._merge(resource, self.collections.get(resource, record_id), values)
            return self.collections.replace(resource, record_id, merged)

    def delete(self, resource: str, record_id: Any) -> Dict[str, Any]:
        logger.debug("delete %s#%s", resource, record_id)
        with self._lock:
            removed = self.collections.remove(resource, record_id)
            cascade_delete(self.collections, resource, removed)
            return removed

    def update_many(self, resource: str, ids: List[Any], values: Dict[str, Any]) -> List[Any]:
        """Apply the same patch to every existing id; missing ids are skipped."""
        logger.debug("update_many %s ids=%s %s", resource, ids, values)
        with self._lock:
            pending = []
            for record_id in ids:
                if not self.collections.exists(resource, record_id):
                    continue
                merged = self._merge(resource, self.collections.get(resource, record_id), values)
                pending.append((record_id, merged))
            for record_id, merged in pending:
                self.collections.replace(resource, record_id, merged)
            return [record_id for record_id, _ in pending]

    def delete_many(self, resource: str, ids: List[Any]) -> List[Any]:
        """Remove every existing id; missing ids are skipped.

        Bulk deletion does not cascade to child records.
        """
        logger.debug("delete_many %s ids=%s", resource, ids)
        deleted = []
        with self._lock:
            for record_id in ids:
                if self.collections.exists(resource, record_id):
                    self.collections.remove(resource, record_id)
                    deleted.append(record_id)
        return deleted

    def clone_variant(self, variant_id: Any, new_color_name: str) -> Dict[str, Any]:
        with self._lock:
            return self.clone_engine.clone_variant(variant_id, new_color_name)

    def custom(self, url: str, method: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.debug("custom %s %s %s", method, url, payload)
        match = CLONE_URL.search(url or "")
        if match and (method or "").lower() == "post":
            style_id, variant_id = int(match.group(1)), int(match.group(2))
            with self._lock:
                summary = self.clone_variant(variant_id, (payload or {}).get("new_color_name"))
                source_style = self.collections.get("variants", variant_id).get("style_id")
            if not same_value(source_style, style_id):
                logger.warning("Clone URL style %s does not own variant %s (style %s)", style_id, variant_id, source_style)
            return summary
        raise UnimplementedException(f"{method} {url}")

    def bom_sheet(self, variant_id: Any) -> Dict[str, Any]:
        """Variant, owning style and bom items, as used by the BOM sheet export."""
        variant = self.collections.get("variants", variant_id)
        try:
            style = self.collections.get("styles", variant.get("style_id"))
        except NotFoundException:
            style = None
        items = [
            item
            for item in self.collections.all("bom_items")
            if same_value(item.get("variant_id"), variant["id"])
        ]
        return {"style": style, "variant": variant, "bom_items": items}

    # Helpers

    def _merge(self, resource: str, current: Dict[str, Any], values: Dict[str, Any]) -> Dict[str, Any]:
        patch = {key: value for key, value in values.items() if key != "id"}
        self._check_references(resource, patch)
        if resource == "bom_items":
            self._prepare_spec_details(patch)
        return {**current, **patch, "id": current["id"]}

    def _check_references(self, resource: str, fields: Dict[str, Any]) -> None:
        if not self.settings.enforce_references or resource not in PARENT_REFERENCES:
            return
        field, parent_resource = PARENT_REFERENCES[resource]
        if field not in fields:
            return
        parent_id = fields[field]
        if parent_id is None or not self.collections.exists(parent_resource, parent_id):
            raise ValidationAppException(field, f"引用的上级记录不存在：{parent_resource}#{parent_id}")

    def _prepare_spec_details(self, fields: Dict[str, Any]) -> None:
        """Validate spec line ids and give fresh ids to lines that have none."""
        if "specDetails" not in fields or fields["specDetails"] is None:
            return
        spec_details = fields["specDetails"]
        if not isinstance(spec_details, list):
            raise ValidationAppException("specDetails", "必须为列表")
        seen = set()
        for spec in spec_details:
            if not isinstance(spec, dict):
                raise ValidationAppException("specDetails", "规格明细必须为对象")
            if spec.get("id") is None:
                continue
            key = normalize_value(spec["id"])
            if key in seen:
                raise ValidationAppException("specDetails", f"规格明细 id 重复：{spec['id']}")
            seen.add(key)
        fields["specDetails"] = [
            dict(spec) if spec.get("id") is not None else {**spec, "id": self.allocator.next()}
            for spec in spec_details
        ]
