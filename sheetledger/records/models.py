"""Mini README: Domain records and payload validation for the ledger.

Structure:
    * ExpenseType - enum of supported expense categories.
    * Sale / Expense - slotted dataclasses for stored records with JSON export.
    * SaleDraft / ExpenseDraft - pydantic models validating request payloads.
    * compute_price_per_sheet / default_description - derived field helpers.
    * parse_sale_payload / parse_expense_payload / parse_timestamp - convert
      raw request data into validated values, raising ``ValidationError``.

Drafts carry only caller supplied fields. Identifiers and the
``createdAt``/``updatedAt`` timestamps are assigned by the record stores, and
``pricePerSheet`` is always derived from the draft rather than accepted from
the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

SALE_REQUIRED_MESSAGE = "Sheets sold and total revenue are required"
EXPENSE_REQUIRED_MESSAGE = "Type and amount are required"


class ExpenseType(str, Enum):
    """Enumerate the supported expense categories."""

    PETROL = "petrol"
    OTHER = "other"

    @classmethod
    def from_str(cls, value: str) -> "ExpenseType":
        """Coerce arbitrary casing into a valid expense type."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValidationError(f"Unsupported expense type: {value}") from error


def ensure_aware(value: datetime) -> datetime:
    """Attach the local time zone to naive timestamps."""

    if value.tzinfo is None:
        return value.astimezone()
    return value


def parse_timestamp(value: object) -> datetime:
    """Parse ISO formatted strings or datetime instances into aware timestamps."""

    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, str):
        try:
            return ensure_aware(datetime.fromisoformat(value.strip()))
        except ValueError as error:
            raise ValidationError(f"Invalid date: {value}") from error
    raise ValidationError("Dates must be provided as ISO strings or datetime instances.")


def compute_price_per_sheet(total_revenue: float, sheets_sold: int) -> float:
    """Return the revenue earned per sheet for a sale."""

    if sheets_sold < 1:
        raise ValidationError("Sheets sold must be at least 1")
    return total_revenue / sheets_sold


def default_description(expense_type: ExpenseType) -> str:
    """Describe an expense recorded without a description."""

    return f"{ExpenseType.from_str(expense_type).value} expense"


def _isoformat(value: datetime) -> str:
    return value.isoformat()


@dataclass(slots=True)
class Sale:
    """A recorded sale of sheets."""

    sale_id: str
    date: datetime
    sheets_sold: int
    total_revenue: float
    price_per_sheet: float
    created_at: datetime
    updated_at: datetime

    def as_dict(self) -> Dict[str, object]:
        """Export the sale with JSON serialisable values."""

        return {
            "id": self.sale_id,
            "date": _isoformat(self.date),
            "sheetsSold": self.sheets_sold,
            "totalRevenue": self.total_revenue,
            "pricePerSheet": self.price_per_sheet,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


@dataclass(slots=True)
class Expense:
    """A recorded outgoing cost."""

    expense_id: str
    date: datetime
    expense_type: ExpenseType
    amount: float
    description: str
    created_at: datetime
    updated_at: datetime

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with JSON serialisable values."""

        return {
            "id": self.expense_id,
            "date": _isoformat(self.date),
            "type": self.expense_type.value,
            "amount": self.amount,
            "description": self.description,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


class SaleDraft(BaseModel):
    """Validated sale fields supplied by a caller."""

    date: Optional[datetime] = None
    sheets_sold: int = Field(..., alias="sheetsSold", ge=1)
    total_revenue: float = Field(..., alias="totalRevenue", ge=0, allow_inf_nan=False)

    class Config:
        populate_by_name = True

    @validator("date")
    def _localise_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(value) if value is not None else None

    @property
    def price_per_sheet(self) -> float:
        return compute_price_per_sheet(self.total_revenue, self.sheets_sold)


class ExpenseDraft(BaseModel):
    """Validated expense fields supplied by a caller."""

    date: Optional[datetime] = None
    expense_type: ExpenseType = Field(..., alias="type")
    amount: float = Field(..., allow_inf_nan=False)
    description: Optional[str] = None

    class Config:
        populate_by_name = True

    @validator("date")
    def _localise_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(value) if value is not None else None

    @validator("expense_type", pre=True)
    def _normalise_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def description_or_default(self) -> str:
        """Return the supplied description, falling back to the type label."""

        if self.description and self.description.strip():
            return self.description
        return default_description(self.expense_type)


def _describe(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into a single readable line."""

    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "body"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_sale_payload(payload: Any) -> SaleDraft:
    """Validate a raw sale payload, raising ``ValidationError`` on failure."""

    try:
        return SaleDraft.model_validate(payload)
    except PydanticValidationError as error:
        raise ValidationError(SALE_REQUIRED_MESSAGE, detail=_describe(error)) from error


def parse_expense_payload(payload: Any) -> ExpenseDraft:
    """Validate a raw expense payload, raising ``ValidationError`` on failure."""

    try:
        return ExpenseDraft.model_validate(payload)
    except PydanticValidationError as error:
        raise ValidationError(EXPENSE_REQUIRED_MESSAGE, detail=_describe(error)) from error
