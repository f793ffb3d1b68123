from datetime import date as CalendarDate
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keeps sums of many amounts finite
MAX_AMOUNT = 1e12


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    description: str
    date: CalendarDate

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be empty")
        return value


class Transaction(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    type: TransactionType
    amount: float = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    description: str
    date: str  # ISO-8601 instant at 12:00 UTC of the calendar day

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class FinancialSummary(BaseModel):
    total_income: float = Field(default=0.0, alias="totalIncome")
    total_expenses: float = Field(default=0.0, alias="totalExpenses")
    savings: float = 0.0

    model_config = ConfigDict(populate_by_name=True)


class ChartSlice(BaseModel):
    name: str
    value: float


class SpendingDistribution(BaseModel):
    """How income splits into expenses and savings, for the chart."""

    has_data: bool
    slices: List[ChartSlice]
    deficit: Optional[float] = None
    expense_share: float = 0.0
    savings_share: float = 0.0


class AdviceResponse(BaseModel):
    advice: Optional[str] = None
    in_flight: bool = False
