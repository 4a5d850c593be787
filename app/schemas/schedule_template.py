"""
班表範本的值物件

Break / DayConfiguration 在建立時即完成驗證，不合法的時間設定會直接拋出
InvalidScheduleError。
"""
from datetime import datetime, time
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from app.exceptions import InvalidScheduleError, ScheduleValidationError
from app.models.schedule_template import BreakType

DAYS_PER_WEEK = 7
DAY_NAMES = ["Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"]


def to_minutes(t: time) -> int:
    """時間轉成當天的分鐘數"""
    return t.hour * 60 + t.minute


class BreakSchema(BaseModel):
    """休息時段"""
    name: str
    start_time: time
    end_time: time
    break_type: BreakType = BreakType.REST
    is_paid: bool = True
    is_required: bool = False
    sort_order: int = 0

    class Config:
        from_attributes = True

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise InvalidScheduleError("Break name is required")
        return value.strip()

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_time >= self.end_time:
            raise InvalidScheduleError(
                f"Break '{self.name}' must start before it ends ({self.start_time}-{self.end_time})"
            )
        return self

    @property
    def minutes(self) -> int:
        return to_minutes(self.end_time) - to_minutes(self.start_time)


class DayConfiguration(BaseModel):
    """範本的單日設定（0=星期日 ... 6=星期六）"""
    day_of_week: int
    is_working_day: bool = True
    is_split_schedule: bool = False
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    morning_start: Optional[time] = None
    morning_end: Optional[time] = None
    afternoon_start: Optional[time] = None
    afternoon_end: Optional[time] = None
    breaks: list[BreakSchema] = []
    notes: Optional[str] = None

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def _check_shape(self):
        if not 0 <= self.day_of_week < DAYS_PER_WEEK:
            raise InvalidScheduleError(f"day_of_week must be between 0 and 6, got {self.day_of_week}")

        day_name = DAY_NAMES[self.day_of_week]

        if not self.is_working_day:
            # 休假日忽略所有時間設定
            self.is_split_schedule = False
            self.start_time = self.end_time = None
            self.morning_start = self.morning_end = None
            self.afternoon_start = self.afternoon_end = None
            self.breaks = []
            return self

        if self.is_split_schedule:
            fields = (self.morning_start, self.morning_end, self.afternoon_start, self.afternoon_end)
            if any(f is None for f in fields):
                raise InvalidScheduleError(f"{day_name}: split schedule needs morning and afternoon times")
            if self.morning_start >= self.morning_end:
                raise InvalidScheduleError(f"{day_name}: morning shift must start before it ends")
            if self.afternoon_start >= self.afternoon_end:
                raise InvalidScheduleError(f"{day_name}: afternoon shift must start before it ends")
            if self.morning_end > self.afternoon_start:
                raise InvalidScheduleError(f"{day_name}: morning shift overlaps afternoon shift")
            self.start_time = self.end_time = None
        else:
            if self.start_time is None or self.end_time is None:
                raise InvalidScheduleError(f"{day_name}: start and end time are required")
            if self.start_time >= self.end_time:
                raise InvalidScheduleError(f"{day_name}: start time must be before end time")
            self.morning_start = self.morning_end = None
            self.afternoon_start = self.afternoon_end = None

        self._check_breaks(day_name)
        return self

    def _check_breaks(self, day_name: str) -> None:
        windows = self.work_windows()
        for item in self.breaks:
            if not any(start <= item.start_time and item.end_time <= end for start, end in windows):
                raise InvalidScheduleError(
                    f"{day_name}: break '{item.name}' is outside the working hours"
                )

        # 依時間比較，與 sort_order 無關
        by_start = sorted(self.breaks, key=lambda b: (b.start_time, b.end_time))
        for previous, current in zip(by_start, by_start[1:]):
            if current.start_time < previous.end_time:
                raise InvalidScheduleError(
                    f"{day_name}: break '{current.name}' overlaps break '{previous.name}'"
                )

    def work_windows(self) -> list[tuple[time, time]]:
        """工作時段（分段班為兩段）"""
        if not self.is_working_day:
            return []
        if self.is_split_schedule:
            return [(self.morning_start, self.morning_end), (self.afternoon_start, self.afternoon_end)]
        return [(self.start_time, self.end_time)]

    def total_minutes(self) -> int:
        """排定的工作分鐘數（不扣休息）"""
        return sum(to_minutes(end) - to_minutes(start) for start, end in self.work_windows())

    def unpaid_break_minutes(self) -> int:
        return sum(b.minutes for b in self.breaks if not b.is_paid)

    def net_minutes(self) -> int:
        """扣除不給薪休息後的分鐘數"""
        return self.total_minutes() - self.unpaid_break_minutes()

    def ordered_breaks(self) -> list[BreakSchema]:
        return sorted(self.breaks, key=lambda b: b.sort_order)


def copy_day_config(source: DayConfiguration, day_of_week: Optional[int] = None) -> DayConfiguration:
    """
    複製單日設定（休息時段也一併深複製，不共用參照）

    Args:
        source: 來源設定
        day_of_week: 新的星期幾；None 表示沿用來源
    """
    copied = source.model_copy(deep=True)
    if day_of_week is not None:
        if not 0 <= day_of_week < DAYS_PER_WEEK:
            raise InvalidScheduleError(f"day_of_week must be between 0 and 6, got {day_of_week}")
        copied.day_of_week = day_of_week
    return copied


def copy_day_to_all(days: list[DayConfiguration], source_day_of_week: int) -> list[DayConfiguration]:
    """將某一天的設定複製到其他六天，回傳新的七天清單"""
    check_week_days(days)
    if not 0 <= source_day_of_week < DAYS_PER_WEEK:
        raise InvalidScheduleError(f"day_of_week must be between 0 and 6, got {source_day_of_week}")
    source = next(d for d in days if d.day_of_week == source_day_of_week)
    return [
        copy_day_config(source) if day.day_of_week == source_day_of_week
        else copy_day_config(source, day.day_of_week)
        for day in sorted(days, key=lambda d: d.day_of_week)
    ]


def check_week_days(days: list[DayConfiguration]) -> None:
    """確認七天設定齊全：0-6 各一筆，不重複不缺漏"""
    seen = sorted(d.day_of_week for d in days)
    if seen != list(range(DAYS_PER_WEEK)):
        raise ScheduleValidationError(
            f"A template needs exactly one configuration per weekday 0-6, got {seen}"
        )


class TemplateCreate(BaseModel):
    """建立範本時的資料"""
    name: str
    description: Optional[str] = None
    days: list[DayConfiguration]
    created_by: Optional[int] = None


class TemplateUpdate(BaseModel):
    """更新範本時的資料（days 需一次給齊七天）"""
    name: Optional[str] = None
    description: Optional[str] = None
    days: Optional[list[DayConfiguration]] = None
    is_active: Optional[bool] = None


class TemplateDuplicate(BaseModel):
    name: str


class TemplateResponse(BaseModel):
    """範本回應格式"""
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    days: list[DayConfiguration]
