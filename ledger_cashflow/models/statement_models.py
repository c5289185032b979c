"""Classification and cash flow statement models."""

from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Section(str, Enum):
    """Cash flow statement sections."""

    OPERATING = "operating"
    INVESTING = "investing"
    FINANCING = "financing"


# Provenance labels shown next to statement figures.
SOURCE_INCOME_STATEMENT = "Income Statement"
SOURCE_BALANCE_SHEET = "Quarterly Balance Sheet"
SOURCE_FORMULA = "Formula"


class LineKind(str, Enum):
    """Role of a line within its section."""

    MAIN_ITEM = "main_item"
    HEADER = "header"
    ADJUSTMENT = "adjustment"
    WORKING_CAPITAL = "working_capital"
    TOTAL = "total"


class Cash(BaseModel):
    """Cash-equivalent account; excluded from the statement body."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["cash"] = "cash"


class Skip(BaseModel):
    """Account that does not drive a cash flow line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["skip"] = "skip"


class Categorized(BaseModel):
    """Account routed to a canonical line item."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["categorized"] = "categorized"
    section: Section
    line_item: str = Field(..., min_length=1)


Classification = Annotated[Union[Cash, Skip, Categorized], Field(discriminator="kind")]

CASH = Cash()
SKIP = Skip()


class StatementLine(BaseModel):
    """One rendered line of a cash flow statement section."""

    model_config = ConfigDict(frozen=True)

    description: str
    amount: Optional[float] = Field(None, description="None marks a non-numeric header")
    kind: LineKind
    source: str = Field("", description="Where the figure came from")

    @property
    def is_header(self) -> bool:
        return self.amount is None


class CashFlowStatement(BaseModel):
    """Indirect-method cash flow statement with its reconciliation figures."""

    model_config = ConfigDict(frozen=True)

    operating: Tuple[StatementLine, ...] = ()
    investing: Tuple[StatementLine, ...] = ()
    financing: Tuple[StatementLine, ...] = ()
    net_change_in_cash: float = 0.0
    beginning_cash: float = 0.0
    ending_cash_computed: float = 0.0
    ending_cash_reported: float = 0.0
    reconciliation_delta: float = 0.0

    def section_lines(self, section: Section) -> Tuple[StatementLine, ...]:
        return {
            Section.OPERATING: self.operating,
            Section.INVESTING: self.investing,
            Section.FINANCING: self.financing,
        }[Section(section)]

    def section_total(self, section: Section) -> float:
        """Value of the section's total line, or 0 for an empty section."""
        for line in self.section_lines(section):
            if line.kind == LineKind.TOTAL:
                return float(line.amount or 0.0)
        return 0.0

    @property
    def operating_total(self) -> float:
        return self.section_total(Section.OPERATING)

    @property
    def investing_total(self) -> float:
        return self.section_total(Section.INVESTING)

    @property
    def financing_total(self) -> float:
        return self.section_total(Section.FINANCING)

    def is_reconciled(self, tolerance: float = 0.01) -> bool:
        """True when computed and reported ending cash agree within tolerance."""
        return abs(self.reconciliation_delta) <= tolerance
