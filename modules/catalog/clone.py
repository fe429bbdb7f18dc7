"""Deep copy of a color variant together with its bill of material."""

import copy
import logging
from typing import Any, Dict, List

from core.collection_store import CollectionStore
from core.errors import ValidationAppException
from core.identity import IdentityAllocator
from core.query import same_value

logger = logging.getLogger(__name__)


def _copy_fields(record: Dict[str, Any], exclude: tuple) -> Dict[str, Any]:
    return {key: copy.deepcopy(value) for key, value in record.items() if key not in exclude}


class CloneEngine:
    def __init__(self, collections: CollectionStore, allocator: IdentityAllocator):
        self.collections = collections
        self.allocator = allocator

    def clone_spec_details(self, spec_details: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        cloned = []
        for spec in spec_details or []:
            new_spec = _copy_fields(spec, exclude=("id",))
            cloned.append({"id": self.allocator.next(), **new_spec})
        return cloned

    def clone_variant(self, source_variant_id: Any, new_color_name: str) -> Dict[str, Any]:
        """Copy variant ``source_variant_id`` and all of its bom_items under a new color.

        Every copied entity (variant, bom_item, spec line) gets a fresh id;
        every other field is deep-copied so the two subtrees share nothing.
        Preconditions are checked and the whole subtree is built before the
        first insert, so a failure leaves the store untouched.
        """
        if not new_color_name or not str(new_color_name).strip():
            raise ValidationAppException("new_color_name", "缺少必填参数")

        source_variant = self.collections.get("variants", source_variant_id)
        source_items = [
            item
            for item in self.collections.all("bom_items")
            if same_value(item.get("variant_id"), source_variant["id"])
        ]

        new_variant_id = self.allocator.next()
        new_variant = {"id": new_variant_id, **_copy_fields(source_variant, exclude=("id", "color_name"))}
        new_variant["color_name"] = new_color_name

        new_items = []
        cloned_spec_count = 0
        for item in source_items:
            spec_details = self.clone_spec_details(item.get("specDetails") or [])
            cloned_spec_count += len(spec_details)
            new_item = {
                "id": self.allocator.next(),
                **_copy_fields(item, exclude=("id", "variant_id", "specDetails")),
            }
            new_item["variant_id"] = new_variant_id
            new_item["specDetails"] = spec_details
            new_items.append(new_item)

        self.collections.insert("variants", new_variant)
        for new_item in new_items:
            self.collections.insert("bom_items", new_item)

        logger.info(
            "Cloned variant %s -> %s (%d bom items, %d spec lines)",
            source_variant["id"],
            new_variant_id,
            len(new_items),
            cloned_spec_count,
        )
        return {
            "id": new_variant_id,
            "color_name": new_color_name,
            "cloned_bom_count": len(new_items),
            "cloned_spec_count": cloned_spec_count,
        }
