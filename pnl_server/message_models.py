"""Pydantic models for REST request and response bodies."""

from decimal import Decimal
from typing import Annotated, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, FiniteFloat, PlainSerializer

from pnl_server.models import Instrument, Side, TradeSubmission
from pnl_server.money import format_decimal

DecimalString = Annotated[Decimal, PlainSerializer(format_decimal, return_type=str)]


class TradeRequest(BaseModel):
    """Raw trade input as posted by a client.

    ``ticker`` and ``qty`` are accepted as aliases of ``instrument`` and
    ``quantity``.
    """
    instrument: Instrument = Field(validation_alias=AliasChoices("instrument", "ticker"))
    side: Side
    quantity: Decimal = Field(gt=0, validation_alias=AliasChoices("quantity", "qty"))
    price: Decimal = Field(gt=0)
    timestamp: Optional[Union[int, FiniteFloat]] = None

    model_config = ConfigDict(extra="ignore")

    def to_submission(self, default_timestamp: Union[int, float]) -> TradeSubmission:
        return TradeSubmission(
            instrument=self.instrument,
            side=self.side,
            quantity=self.quantity,
            price=self.price,
            timestamp=self.timestamp if self.timestamp is not None else default_timestamp,
        )


class TradeModel(BaseModel):
    id: str
    instrument: Instrument
    side: Side
    quantity: DecimalString
    price: DecimalString
    timestamp: Union[int, float]

    model_config = ConfigDict(from_attributes=True)


class PositionModel(BaseModel):
    """Open position, serialized with the field names clients read."""
    quantity: DecimalString = Field(alias="qty")
    average_cost: DecimalString = Field(alias="avg")
    unrealized_pnl: DecimalString = Field(alias="unrealizedPnL")
    realized_pnl: DecimalString = Field(alias="realizedPnL")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PnLModel(BaseModel):
    realized_pnl: DecimalString = Field(alias="realizedPnL")
    unrealized_pnl: DecimalString = Field(alias="unrealizedPnL")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


PortfolioModel = Dict[Instrument, PositionModel]
TradesModel = List[TradeModel]
