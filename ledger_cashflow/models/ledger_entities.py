"""Row models produced by the ledger export tokenizers."""

import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ledger_cashflow.amounts import parse_amount


def _variance_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, float) and math.isnan(value)


class LedgerRow(BaseModel):
    """One account line of a comparative balance sheet."""

    model_config = ConfigDict(frozen=True)

    account_name: str = Field("", description="Free-text account description")
    account_type: str = Field("", description="Optional account-type hint (e.g. 'Asset')")
    current_amount: float = Field(0.0, description="Current period balance")
    prior_amount: float = Field(0.0, description="Prior period (comparison) balance")
    variance: float = Field(0.0, description="Period-over-period change (current - prior)")

    @model_validator(mode="before")
    @classmethod
    def _derive_variance(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        if _variance_missing(data.get("variance")):
            data["variance"] = parse_amount(data.get("current_amount")) - parse_amount(
                data.get("prior_amount")
            )
        return data

    @field_validator("account_name", "account_type", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("current_amount", "prior_amount", "variance", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return parse_amount(value)


class IncomeRow(BaseModel):
    """One two-column line of an income statement export."""

    model_config = ConfigDict(frozen=True)

    description: str = Field("", description="Financial row label")
    amount: float = Field(0.0, description="Period amount")

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return parse_amount(value)


class IncomeData(BaseModel):
    """Figures pulled from the income statement for the operating section."""

    model_config = ConfigDict(frozen=True)

    net_income: float = 0.0
    interest_income: float = 0.0
    dividend_income: float = 0.0
