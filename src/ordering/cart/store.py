"""Cart store: the shopper's cart kept in a keyed storage slot.

Slots used:

- ``cart``: the live cart, a JSON-encoded list of ``CartItem``.
- ``savedCart``: a snapshot written at checkout, read by the confirmation view
  after the live cart has been cleared. The id of the order it was taken for
  sits beside it in ``savedCartOrderId``.

Several stores may share one storage (one per tab). Writes are last-write-wins;
listeners subscribed through ``subscribe`` are told whenever the ``cart`` slot
changes, whether the write came from this store or another one.
"""

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from ordering.cart.models import CartItem
from ordering.cart.storage import KeyValueStorage

logger = structlog.get_logger(__name__)

CART_KEY = "cart"
SAVED_CART_KEY = "savedCart"
SAVED_ORDER_KEY = "savedCartOrderId"


@dataclass(frozen=True)
class CartUpdated:
    """Signal sent to cart listeners."""

    key: str
    items: list[CartItem]
    external: bool = False


CartListener = Callable[[CartUpdated], None]


class CartStore:
    def __init__(self, storage: KeyValueStorage, namespace: str | None = None) -> None:
        self.storage = storage
        self.namespace = namespace
        self._listeners: list[CartListener] = []
        self._writing = False
        self._unwatch = storage.watch(self._on_storage_change)

    # -------------------------------------------------------------------
    # Slot keys
    # -------------------------------------------------------------------
    def _key(self, slot: str) -> str:
        return f"{self.namespace}:{slot}" if self.namespace else slot

    @property
    def cart_key(self) -> str:
        return self._key(CART_KEY)

    @property
    def saved_cart_key(self) -> str:
        return self._key(SAVED_CART_KEY)

    @property
    def saved_order_key(self) -> str:
        return self._key(SAVED_ORDER_KEY)

    # -------------------------------------------------------------------
    # Live cart
    # -------------------------------------------------------------------
    def load(self) -> list[CartItem]:
        return self._read_slot(self.cart_key)

    def save(self, items: Iterable[CartItem]) -> None:
        self._write_slot(self.cart_key, list(items))

    def add_item(self, item: CartItem) -> list[CartItem]:
        """Add an item to the cart, or increase its quantity if already present."""
        items = self.load()
        existing = next((i for i in items if i.id == item.id), None)

        if existing:
            existing.quantity += item.quantity
        else:
            items.append(item)

        self.save(items)
        return items

    def update_quantity(self, item_id: str, quantity: int) -> list[CartItem]:
        items = self.load()
        item = next((i for i in items if i.id == item_id), None)
        if item is None:
            raise KeyError(item_id)

        item.quantity = quantity
        self.save(items)
        return items

    def remove_item(self, item_id: str) -> list[CartItem]:
        items = self.load()
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            raise KeyError(item_id)

        self.save(remaining)
        return remaining

    def clear(self) -> None:
        self._writing = True
        try:
            self.storage.remove(self.cart_key)
        finally:
            self._writing = False
        self._emit(CartUpdated(key=self.cart_key, items=[]))

    def item_count(self) -> int:
        """Total number of units in the cart, as shown on the cart button."""
        return sum(max(item.quantity, 0) for item in self.load())

    # -------------------------------------------------------------------
    # Checkout snapshot
    # -------------------------------------------------------------------
    def save_snapshot(self, items: Iterable[CartItem], order_id: str | None = None) -> None:
        self._write_slot(self.saved_cart_key, list(items))
        if order_id:
            self.storage.set(self.saved_order_key, order_id)
        else:
            self.storage.remove(self.saved_order_key)

    def load_snapshot(self, order_id: str | None = None) -> list[CartItem]:
        """The saved cart. With ``order_id``, empty unless the snapshot was taken for that order."""
        if order_id is not None and self.storage.get(self.saved_order_key) != order_id:
            return []
        return self._read_slot(self.saved_cart_key)

    # -------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------
    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a cart listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
        self._unwatch()

    def _on_storage_change(self, key: str, old_value: str | None, new_value: str | None) -> None:
        # Local writes are announced by the writer itself.
        if self._writing or key != self.cart_key:
            return
        self._emit(CartUpdated(key=key, items=self._decode(key, new_value), external=True))

    def _emit(self, signal: CartUpdated) -> None:
        for listener in list(self._listeners):
            listener(signal)

    # -------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------
    def _read_slot(self, key: str) -> list[CartItem]:
        return self._decode(key, self.storage.get(key))

    def _write_slot(self, key: str, items: list[CartItem]) -> None:
        self._writing = True
        try:
            self.storage.set(key, json.dumps([item.model_dump() for item in items]))
        finally:
            self._writing = False

        if key == self.cart_key:
            self._emit(CartUpdated(key=key, items=items))

    def _decode(self, key: str, raw: str | None) -> list[CartItem]:
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Cart slot is not valid JSON, treating as empty", key=key)
            return []

        if not isinstance(data, list):
            logger.warning("Cart slot does not hold a list, treating as empty", key=key)
            return []

        items = []
        for entry in data:
            try:
                items.append(CartItem.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Dropping malformed cart entry", key=key, errors=exc.errors())
        return items
