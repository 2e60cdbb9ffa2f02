"""
Payload Locator

Finds the list of campaign-like entries inside an arbitrarily shaped
client-data response. Known response shapes are tried in order by a chain of
candidate extractors; a depth-first search over the whole payload is the
last resort and is logged whenever it is needed.
"""
import math
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence

from campaign_analytics.utils.logger import log

NAME_KEYS = ("campaignName", "campaign_name", "name")
ID_KEYS = ("campaignId", "campaign_id", "id")


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _path(payload: Any, *keys: str) -> Optional[list]:
    """Follow nested mapping keys; return the value only if it is a list."""
    current = payload
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return list(current) if _is_list(current) else None


def _extractor(*keys: str) -> Callable[[Any], Optional[list]]:
    def extract(payload: Any) -> Optional[list]:
        return _path(payload, *keys)

    extract.__name__ = ".".join(("payload",) + keys)
    return extract


def _payload_itself(payload: Any) -> Optional[list]:
    return list(payload) if _is_list(payload) else None


# Ordered: the first non-empty candidate holding a valid entry wins
CANDIDATE_EXTRACTORS: Sequence[Callable[[Any], Optional[list]]] = (
    _payload_itself,
    _extractor("data"),
    _extractor("data", "data"),
    _extractor("campaigns"),
    _extractor("data", "campaigns"),
    _extractor("data", "edges"),
    # Secondary shapes
    _extractor("data", "records"),
    _extractor("records"),
    _extractor("items"),
    _extractor("data", "items"),
)


def is_potential_campaign(value: Any) -> bool:
    """
    Heuristic check for a campaign-like entry.

    True for a mapping with a string name field or a string/finite numeric
    id field. GraphQL edges ({"node": {...}}) are judged by their node,
    one level deep only (the normalizer unwraps exactly one level).
    """
    if not isinstance(value, Mapping):
        return False

    node = value.get("node")
    if isinstance(node, Mapping) and _has_identity(node):
        return True

    return _has_identity(value)


def _has_identity(value: Mapping) -> bool:
    if any(isinstance(value.get(key), str) for key in NAME_KEYS):
        return True

    for key in ID_KEYS:
        candidate = value.get(key)
        if isinstance(candidate, bool):
            continue
        if isinstance(candidate, (str, int)):
            return True
        if isinstance(candidate, float) and math.isfinite(candidate):
            return True

    return False


def _has_campaigns(candidate: Optional[list]) -> bool:
    return bool(candidate) and any(is_potential_campaign(item) for item in candidate)


def find_first_object_list(payload: Any) -> list:
    """
    Depth-first search for the first list that holds object entries.

    Mapping values are visited in insertion order. Containers already seen
    are skipped, so self-referencing payloads terminate. Uses an explicit
    stack, so nesting depth is not limited by the interpreter's recursion
    limit.
    """
    visited = set()
    stack = [payload]

    while stack:
        node = stack.pop()
        if not isinstance(node, (Mapping, list, tuple)):
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))

        if _is_list(node):
            if any(isinstance(item, (Mapping, list, tuple)) for item in node):
                return list(node)
            continue

        # reversed so the first value is popped first
        stack.extend(reversed(list(node.values())))

    return []


def locate_campaign_array(payload: Any) -> List[Any]:
    """
    Return the list of campaign-like entries in a response payload.

    An empty list means "no campaigns", never an error.
    """
    for extract in CANDIDATE_EXTRACTORS:
        candidate = extract(payload)
        if _has_campaigns(candidate):
            log.debug(f"Campaign entries located at {extract.__name__} ({len(candidate)} entries)")
            return candidate

    deep_match = find_first_object_list(payload)
    if _has_campaigns(deep_match):
        log.warning(
            f"Campaign entries found only by deep search ({len(deep_match)} entries); "
            f"response shape is not one of the known layouts"
        )
        return deep_match

    log.info("No campaign entries found in payload")
    return []
