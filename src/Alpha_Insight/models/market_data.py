"""Market data models: daily price points and quote snapshots.

All price fields use Decimal with custom serializers to prevent silent
float conversion in JSON roundtrips.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class PricePoint(BaseModel):
    """One trading day of a (synthetic) price history.

    ``price`` is the day's closing price. Frozen because a generated series
    is never mutated after creation.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    price: Decimal = Field(gt=0)
    open: Decimal = Field(gt=0)
    high: Decimal = Field(gt=0)
    low: Decimal = Field(gt=0)
    volume: int = Field(gt=0)

    @field_serializer("price", "open", "high", "low")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal fields as strings to preserve precision."""
        return str(value)


class Quote(BaseModel):
    """Point-in-time quote card for a ticker.

    ``change_percent`` is already expressed in percent (1.25 means 1.25%).
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    display_name: str
    price: Decimal = Field(gt=0)
    change: Decimal
    change_percent: Decimal
    last_updated: datetime.datetime

    @field_serializer("price", "change", "change_percent")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal fields as strings to preserve precision."""
        return str(value)

    @property
    def is_up(self) -> bool:
        """True when the change is zero or positive."""
        return self.change >= 0
