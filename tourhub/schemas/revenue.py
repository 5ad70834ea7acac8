# tourhub/schemas/revenue.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from enum import Enum


class ViewMode(str, Enum):
    """Chart granularity: days of one month, or months of one year."""
    DAY = "day"
    MONTH = "month"


class SortBy(str, Enum):
    RATING = "rating"
    REVENUE = "revenue"


class ChartPoint(BaseModel):
    label: str
    amount: float
    period_start: date


class ChartSeries(BaseModel):
    view_mode: ViewMode
    year: int
    month: Optional[int] = None
    points: List[ChartPoint]
    total: float

    @property
    def labels(self) -> List[str]:
        return [p.label for p in self.points]

    @property
    def amounts(self) -> List[float]:
        return [p.amount for p in self.points]


class TopCombo(BaseModel):
    offering_id: int
    name: Optional[str]
    image_url: str
    average_rating: float
    review_count: int
    period_revenue: float
    rank: int


class BookingStats(BaseModel):
    total: int
    accepted: int   # confirmed + completed
    rejected: int   # cancelled
    pending: int

    class Config:
        from_attributes = True


class RevenueReport(BaseModel):
    host_id: int
    sort_by: SortBy
    chart: ChartSeries
    top_combos: List[TopCombo]
    booking_stats: BookingStats
