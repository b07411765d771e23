"""EVE Online market order data models."""

from datetime import datetime

from pydantic import BaseModel, Field


class EveMarketOrder(BaseModel):
    """Represents an open or historical market order from ESI.

    Only the fields needed to list an order as a held asset and to value it
    are kept.
    """

    order_id: int = Field(..., description="Unique order ID")
    type_id: int = Field(..., description="Item type being traded")
    location_id: int = Field(..., description="Station or structure the order is placed at")
    volume_total: int = Field(..., description="Original volume")
    volume_remain: int = Field(..., description="Remaining volume")
    price: float = Field(..., description="ISK per unit")
    is_buy_order: bool | None = Field(None, description="Buy or sell order")
    issued: datetime | None = Field(None, description="When order was placed")
    state: str = Field("active", description="Order state (active, cancelled, expired)")
    region_id: int | None = Field(None, description="Region ID")
    escrow: float | None = Field(None, description="ISK in escrow (buy orders)")

    @property
    def is_open(self) -> bool:
        """True while the order is active and still has volume left."""
        return self.state == "active" and self.volume_remain > 0

    @property
    def listed_value(self) -> float:
        """ISK tied up in the order: escrow for buy orders, remaining stock for sell orders."""
        if self.is_buy_order:
            return self.escrow or 0.0
        return self.price * self.volume_remain
