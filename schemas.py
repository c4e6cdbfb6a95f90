"""
Database Schemas for the accounting API

Each entity model below is stored in its own MongoDB collection, inside the
database named by the caller's ``db`` parameter. Collection names are the
plural, lowercase entity name (``spendings``, ``categories``, ``sources``,
``properties``).

The ``*Create`` / ``*Update`` models are request bodies. Update bodies only
carry the fields the client actually sent (``exclude_unset``), which is what
makes them sparse patches.
"""

from datetime import date, datetime, time, timezone
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

SPENDINGS = "spendings"
CATEGORIES = "categories"
SOURCES = "sources"
PROPERTIES = "properties"

SourceType = Literal["bank", "digital_wallet", "credit_card", "cash", "other"]
SOURCE_TYPES: Tuple[str, ...] = ("bank", "digital_wallet", "credit_card", "cash", "other")

CategoryRef = Union[int, str]


def as_datetime(value: date) -> datetime:
    """BSON has no calendar date type; store midnight of that day."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Spendings
class Spending(BaseModel):
    spendingId: int = Field(..., ge=1, description="Sequential id, unique per database")
    amount: float = Field(..., description="Negative for expense, positive for income")
    currency: str = Field(..., description="Currency code, e.g. USD")
    dateOfSpending: date
    description: Optional[str] = None
    categoryId: Optional[CategoryRef] = None

    def to_document(self) -> dict:
        doc = self.model_dump(exclude_none=True)
        doc["dateOfSpending"] = as_datetime(self.dateOfSpending)
        return doc


class SpendingCreate(BaseModel):
    amount: float
    currency: str
    dateOfSpending: date
    description: Optional[str] = None
    categoryId: Optional[CategoryRef] = None


class SpendingUpdate(BaseModel):
    spendingId: int
    amount: Optional[float] = None
    currency: Optional[str] = None
    dateOfSpending: Optional[date] = None
    description: Optional[str] = None
    categoryId: Optional[CategoryRef] = None

    def patch(self) -> dict:
        fields = self.model_dump(exclude_unset=True, exclude={"spendingId"})
        if fields.get("dateOfSpending") is not None:
            fields["dateOfSpending"] = as_datetime(fields["dateOfSpending"])
        return fields


class SpendingRef(BaseModel):
    spendingId: int


# Categories
class Category(BaseModel):
    categoryId: int = Field(..., ge=1)
    name: str


class CategoryCreate(BaseModel):
    name: Optional[str] = None


class CategoryUpdate(BaseModel):
    categoryId: int
    name: Optional[str] = None


class CategoryRefBody(BaseModel):
    categoryId: int


# Sources of funds
class Source(BaseModel):
    sourceId: int = Field(..., ge=1)
    name: str
    type: SourceType
    description: str = ""
    isActive: bool = True
    createdAt: datetime
    updatedAt: datetime


class SourceCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    isActive: Optional[bool] = None


class SourceUpdate(BaseModel):
    sourceId: int
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    isActive: Optional[bool] = None

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"sourceId"})


class SourceToggle(BaseModel):
    sourceId: int
    isActive: bool


class SourceRef(BaseModel):
    sourceId: int


# Per-database metadata
class Property(BaseModel):
    name: str = Field(..., description="Display name of the account book")


class PropertyNameUpdate(BaseModel):
    name: Optional[str] = None
