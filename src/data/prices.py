"""Price snapshot used to value resolved assets."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class PriceSnapshot:
    """Immutable type-level and item-level market prices.

    Item-level prices cover uniquely rolled items (abyssal modules) whose value
    depends on the individual item rather than its type.
    """

    def __init__(
        self,
        type_prices: Mapping[int, float] | None = None,
        item_prices: Mapping[int, float] | None = None,
    ):
        self._type_prices = MappingProxyType(dict(type_prices or {}))
        self._item_prices = MappingProxyType(dict(item_prices or {}))

    def get_type_price(self, type_id: int) -> float | None:
        return self._type_prices.get(type_id)

    def get_item_price(
        self,
        type_id: int,
        item_id: int | None = None,
        is_blueprint_copy: bool = False,
    ) -> float:
        """Get the unit price for an item.

        Precedence: blueprint copies are always 0.0; then the item-specific
        price; then the type price; then 0.0. Negative prices clamp to 0.0.
        """
        if is_blueprint_copy:
            return 0.0
        price: float | None = None
        if item_id is not None:
            price = self._item_prices.get(item_id)
        if price is None:
            price = self._type_prices.get(type_id)
        if price is None:
            return 0.0
        return max(float(price), 0.0)
