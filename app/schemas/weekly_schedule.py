from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from app.schemas.schedule_template import DayConfiguration


class WeeklyScheduleCreate(BaseModel):
    """指定單週排班"""
    employee_id: int
    template_id: int
    year: int
    week_number: int
    notes: Optional[str] = None


class WeeklyScheduleRangeCreate(BaseModel):
    """依日期範圍指定排班"""
    employee_id: int
    template_id: int
    start_date: date
    end_date: date
    notes: Optional[str] = None


class WeeklyScheduleCopy(BaseModel):
    """複製排班給其他員工"""
    employee_ids: list[int]


class WeeklyScheduleResponse(BaseModel):
    """每週排班回應格式"""
    id: int
    employee_id: int
    template_id: int
    year: int
    week_number: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BulkFailureResponse(BaseModel):
    unit: str
    error: str
    error_type: str


class BulkAssignResponse(BaseModel):
    """批次指定結果"""
    succeeded: list[WeeklyScheduleResponse]
    failed: list[BulkFailureResponse]
    summary: str


class EffectiveScheduleResponse(BaseModel):
    """某天實際適用的班表"""
    work_date: date
    source: str
    is_working_day: bool
    assignment_id: Optional[int] = None
    template_id: Optional[int] = None
    day: Optional[DayConfiguration] = None
    net_minutes: int = 0
