"""EVE Online contract data models."""

from datetime import datetime

from pydantic import BaseModel, Field


class EveContract(BaseModel):
    """Represents a contract from ESI.

    Contracts include item exchanges, auctions, and courier contracts.
    """

    contract_id: int = Field(..., description="Unique contract ID")
    issuer_id: int = Field(..., description="Character that issued")
    issuer_corporation_id: int = Field(..., description="Corp of issuer")
    assignee_id: int = Field(0, description="Assigned to (0 = public)")
    acceptor_id: int = Field(0, description="Who accepted (0 if not accepted)")
    start_location_id: int | None = Field(None, description="Start location")
    end_location_id: int | None = Field(None, description="End location (for courier)")
    type: str = Field(..., description="item_exchange, auction, courier")
    status: str = Field(..., description="outstanding, in_progress, finished, etc.")
    title: str | None = Field(None, description="Contract title")
    for_corporation: bool = Field(False, description="Corp contract or personal")
    date_issued: datetime | None = Field(None, description="When created")
    date_expired: datetime | None = Field(None, description="When expires")
    price: float | None = Field(None, description="Price (for auction/exchange)")


class EveContractItem(BaseModel):
    """Represents an item in a contract from ESI."""

    record_id: int = Field(..., description="Unique record ID")
    contract_id: int = Field(..., description="Parent contract")
    type_id: int = Field(..., description="Item type")
    quantity: int = Field(..., ge=1, description="Quantity")
    is_included: bool = Field(..., description="True = included, False = requested")
    is_singleton: bool = Field(False, description="Unique item")
    is_blueprint_copy: bool | None = Field(None, description="Blueprint copy flag")
    item_id: int | None = Field(None, description="Underlying asset item ID, if known")


class EveContractWithItems(BaseModel):
    """A contract together with its item lines (None when not yet fetched)."""

    contract: EveContract
    items: list[EveContractItem] | None = None
