from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MetricPair(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True, allow_inf_nan=False)

    income: float = 0
    active_partners: float = Field(default=0, alias="activePartners")


class MonthRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    plan: MetricPair = Field(default_factory=MetricPair)
    fact: MetricPair = Field(default_factory=MetricPair)


class AdminRow(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: int
    admin_id: Optional[int] = Field(default=None, alias="adminId")
    admin_name: str = Field(default="", alias="adminName")
    months: List[Optional[MonthRecord]] = Field(default_factory=list)
    year: Optional[int] = None

    def month(self, index: int) -> Optional[MonthRecord]:
        if 0 <= index < len(self.months):
            return self.months[index]
        return None


class Dataset(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    totals: List[Optional[MonthRecord]] = Field(default_factory=list, alias="total")
    rows: List[AdminRow] = Field(default_factory=list, alias="table")

    def total(self, index: int) -> Optional[MonthRecord]:
        if 0 <= index < len(self.totals):
            return self.totals[index]
        return None


class ApiResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    success: bool = True
    data: Dataset
