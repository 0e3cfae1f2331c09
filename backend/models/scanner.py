from pydantic import BaseModel, ConfigDict, Field
from typing import List


class RankedStock(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    cmf: float
    total_traded_value: float = Field(alias="totalTradedValue")
    total_volume: float = Field(alias="totalVolume")
    days_count: int = Field(alias="daysCount")
    price_change_5d_percent: float = Field(alias="priceChange5dPercent")


class ScanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days_analyzed: int = Field(alias="daysAnalyzed")
    top_stocks: List[RankedStock] = Field(alias="topStocks")


class ErrorResponse(BaseModel):
    error: str
