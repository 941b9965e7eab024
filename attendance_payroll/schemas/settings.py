"""
Payroll settings schemas
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HolidayItem(BaseModel):
    date: date
    label: str = Field("", max_length=200)

    model_config = ConfigDict(from_attributes=True)


class PayrollSettingsOut(BaseModel):
    """Weekly off-days (0=Sunday..6=Saturday) and holidays"""
    off_days: List[int]
    holidays: List[HolidayItem]

    model_config = ConfigDict(from_attributes=True)


class PayrollSettingsUpdate(BaseModel):
    """Merge update: omitted fields keep their stored value; holidays replace the whole list"""
    off_days: Optional[List[int]] = None
    holidays: Optional[List[HolidayItem]] = None
