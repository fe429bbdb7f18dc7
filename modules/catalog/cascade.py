import logging
from typing import Any, Dict, List

from core.collection_store import CollectionStore
from core.query import same_value

logger = logging.getLogger(__name__)

# parent resource -> (child resource, child field holding the parent id)
CASCADE_RULES = {
    "styles": ("variants", "style_id"),
    "variants": ("bom_items", "variant_id"),
}


def cascade_delete(collections: CollectionStore, resource: str, parent: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Remove the direct children of a deleted parent.

    Rules are applied one level deep only: deleting a style drops its
    variants but leaves the bom_items of those variants in place.
    """
    rule = CASCADE_RULES.get(resource)
    if rule is None:
        return []
    child_resource, parent_field = rule
    parent_id = parent["id"]
    removed = collections.remove_where(child_resource, lambda record: same_value(record.get(parent_field), parent_id))
    if removed:
        logger.info("Cascade %s#%s removed %d %s record(s)", resource, parent_id, len(removed), child_resource)
    return removed
