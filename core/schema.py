"""
Pydantic models for ledger rows, aggregates and filter selections.
"""
from typing import Annotated, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

NO_ACCOUNT_GROUP = "(none)"

# Results closer to zero than half a cent are shown as balanced
BALANCED_TOLERANCE = 0.005


class Transaction(BaseModel):
    """One normalized ledger row."""
    model_config = ConfigDict(frozen=True)

    year: Optional[str] = None
    group: str = ""
    group_level1: Optional[str] = None
    account_group: str = NO_ACCOUNT_GROUP
    account: str = ""
    amount: float = 0.0


class Aggregate(BaseModel):
    """Expense/income totals for one account group or one account."""
    model_config = ConfigDict(frozen=True)

    key: str
    expense_total: float = 0.0
    income_total: float = 0.0
    balance: float = 0.0


class Overview(BaseModel):
    """
    Ledger-wide totals.

    ``result`` is expense minus income: negative means surplus,
    positive means deficit. Results within half a cent of zero
    (BALANCED_TOLERANCE) are labeled balanced and display as 0.
    """
    model_config = ConfigDict(frozen=True)

    income_total: float = 0.0
    expense_total: float = 0.0
    result: float = 0.0

    @computed_field
    @property
    def label(self) -> Literal["surplus", "deficit", "balanced"]:
        if abs(self.result) < BALANCED_TOLERANCE:
            return "balanced"
        return "surplus" if self.result < 0 else "deficit"

    @computed_field
    @property
    def display_result(self) -> float:
        if self.label == "surplus":
            return abs(self.result)
        if self.label == "balanced":
            return 0.0
        return self.result


class AllGroups(BaseModel):
    """No super-group restriction."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"


class SpecificGroup(BaseModel):
    """Restrict to one super-group."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["specific"] = "specific"
    name: str


GroupFilter = Annotated[Union[AllGroups, SpecificGroup], Field(discriminator="kind")]

ALL_GROUPS = AllGroups()


class FilterSelection(BaseModel):
    """Active filters. ``year=None`` and an empty ``groups`` set filter nothing."""
    model_config = ConfigDict(frozen=True)

    year: Optional[str] = None
    group_level1: GroupFilter = ALL_GROUPS
    groups: FrozenSet[str] = frozenset()
