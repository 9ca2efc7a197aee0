"""Cart hand-off between the catalog view and the checkout view"""

import logging

from pydantic import TypeAdapter, ValidationError

from ..core.storage import KeyValueStore
from ..models.cart import HandoffLine

logger = logging.getLogger(__name__)

HANDOFF_KEY = "cart"

_lines_adapter = TypeAdapter(list[HandoffLine])


def dump_cart(lines: list[HandoffLine]) -> str:
    """Serialize hand-off lines to a JSON document"""
    return _lines_adapter.dump_json(lines).decode()


def load_cart(document: str) -> list[HandoffLine]:
    """
    Deserialize a hand-off document.

    Malformed documents read as an empty cart.
    """
    try:
        return _lines_adapter.validate_json(document)
    except ValidationError as e:
        logger.warning(f"Discarding malformed cart hand-off: {e.error_count()} errors")
        return []


class CartHandoff:
    """Writes and reads the cart under a fixed key of a key-value store"""

    def __init__(self, store: KeyValueStore, key: str = HANDOFF_KEY):
        self.store = store
        self.key = key

    def save(self, lines: list[HandoffLine]) -> None:
        self.store.set(self.key, dump_cart(lines))
        logger.info(f"Handed off cart with {len(lines)} lines")

    def load(self) -> list[HandoffLine]:
        document = self.store.get(self.key)
        if document is None:
            return []
        return load_cart(document)
