"""
實際班表解析

某位員工某一天的班表依下列順序決定，先找到者為準：

1. 單日例外班表（daily_schedule_exceptions）
2. 該 ISO 週的週排班所指定的範本
3. 舊版基本班表（schedules，依星期幾）
4. 都沒有 → 無班表

例外班表與基本班表的時間不合法時，該步驟直接略過並記錄警告。

範本是以參照方式使用，範本修改後所有引用它的週會立即反映新設定。
"""
import enum
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.exceptions import InvalidScheduleError
from app.models.daily_schedule_exception import DailyScheduleException
from app.models.schedule import Schedule
from app.models.schedule_template import BreakType
from app.schemas.schedule_template import BreakSchema, DayConfiguration
from app.services.weekly_schedule_service import WeeklyScheduleService
from app.utils.iso_week import day_of_week, iso_week, week_date_range

logger = logging.getLogger(__name__)


class ScheduleSource(str, enum.Enum):
    """班表來源"""
    DAILY_EXCEPTION = "daily_exception"
    WEEKLY_TEMPLATE = "weekly_template"
    REGULAR_SCHEDULE = "regular_schedule"
    NO_SCHEDULE = "no_schedule"


@dataclass(frozen=True)
class EffectiveSchedule:
    """某天實際適用的班表"""
    work_date: date
    source: ScheduleSource
    day: Optional[DayConfiguration] = None
    assignment_id: Optional[int] = None
    template_id: Optional[int] = None

    @property
    def is_working_day(self) -> bool:
        return bool(self.day and self.day.is_working_day)

    @property
    def net_minutes(self) -> int:
        return self.day.net_minutes() if self.day else 0


def base_schedule_to_day(row: Schedule, break_name: str) -> DayConfiguration:
    """舊版基本班表轉成 DayConfiguration（一般班，最多一個休息時段）"""
    breaks = []
    has_break = (
        row.is_working_day and row.start_time and row.end_time
        and row.break_start_time and row.break_end_time
    )
    # 超出工作時段的舊資料休息時段直接忽略
    if has_break and row.start_time <= row.break_start_time < row.break_end_time <= row.end_time:
        breaks.append(BreakSchema(
            name=break_name,
            start_time=row.break_start_time,
            end_time=row.break_end_time,
            break_type=BreakType.MEAL,
            is_paid=False,
        ))
    return DayConfiguration(
        day_of_week=row.day_of_week,
        is_working_day=bool(row.is_working_day and row.start_time and row.end_time),
        start_time=row.start_time,
        end_time=row.end_time,
        breaks=breaks,
    )


class ScheduleResolver:
    """解析員工某天實際適用的班表（唯讀）"""

    def __init__(self, db: Session):
        self.db = db
        self.weekly = WeeklyScheduleService(db)
        self.settings = get_settings()

    @property
    def stages(self) -> list[Callable[[int, date], Optional[EffectiveSchedule]]]:
        """依優先順序排列的解析步驟"""
        return [
            self._from_daily_exception,
            self._from_weekly_template,
            self._from_base_schedule,
        ]

    def get_effective_schedule(self, employee_id: int, work_date: date) -> EffectiveSchedule:
        for stage in self.stages:
            effective = stage(employee_id, work_date)
            if effective is not None:
                logger.debug(
                    "Employee %s on %s resolved from %s", employee_id, work_date, effective.source.value
                )
                return effective
        return EffectiveSchedule(work_date=work_date, source=ScheduleSource.NO_SCHEDULE)

    def resolve_day(self, employee_id: int, work_date: date) -> Optional[DayConfiguration]:
        """取得某天實際適用的每日設定，沒有任何班表時回傳 None"""
        return self.get_effective_schedule(employee_id, work_date).day

    def get_week_view(self, employee_id: int, year: int, week_number: int) -> list[EffectiveSchedule]:
        """一整週（星期一到星期日）的實際班表"""
        monday, _ = week_date_range(year, week_number)
        return [
            self.get_effective_schedule(employee_id, monday + timedelta(days=i))
            for i in range(7)
        ]

    def estimate_scheduled_minutes(self, employee_id: int, start_date: date, end_date: date) -> int:
        """日期範圍（含頭尾）內預計的工作分鐘數（已扣除不給薪休息）"""
        total = 0
        current = start_date
        while current <= end_date:
            total += self.get_effective_schedule(employee_id, current).net_minutes
            current += timedelta(days=1)
        return total

    # ===== 解析步驟 =====

    def _from_daily_exception(self, employee_id: int, work_date: date) -> Optional[EffectiveSchedule]:
        exception = self.db.query(DailyScheduleException).filter(
            DailyScheduleException.employee_id == employee_id,
            DailyScheduleException.date == work_date,
            DailyScheduleException.is_active == True  # noqa: E712
        ).first()
        if not exception:
            return None

        working = bool(exception.is_working_day and exception.start_time and exception.end_time)
        try:
            day = DayConfiguration(
                day_of_week=day_of_week(work_date),
                is_working_day=working,
                start_time=exception.start_time if working else None,
                end_time=exception.end_time if working else None,
                notes=exception.notes,
            )
        except InvalidScheduleError as e:
            logger.warning("Ignoring daily schedule exception %s: %s", exception.id, e.message)
            return None
        return EffectiveSchedule(work_date=work_date, source=ScheduleSource.DAILY_EXCEPTION, day=day)

    def _from_weekly_template(self, employee_id: int, work_date: date) -> Optional[EffectiveSchedule]:
        year, week_number = iso_week(work_date)
        assignment = self.weekly.get_for_week(employee_id, year, week_number)
        if not assignment:
            return None

        template_day = assignment.template.get_day(day_of_week(work_date))
        return EffectiveSchedule(
            work_date=work_date,
            source=ScheduleSource.WEEKLY_TEMPLATE,
            day=DayConfiguration.model_validate(template_day) if template_day else None,
            assignment_id=assignment.id,
            template_id=assignment.template_id,
        )

    def _from_base_schedule(self, employee_id: int, work_date: date) -> Optional[EffectiveSchedule]:
        row = self.db.query(Schedule).filter(
            Schedule.employee_id == employee_id,
            Schedule.day_of_week == day_of_week(work_date)
        ).first()
        if not row:
            return None
        try:
            day = base_schedule_to_day(row, self.settings.default_break_name)
        except InvalidScheduleError as e:
            logger.warning("Ignoring base schedule %s: %s", row.id, e.message)
            return None
        return EffectiveSchedule(
            work_date=work_date,
            source=ScheduleSource.REGULAR_SCHEDULE,
            day=day,
        )
