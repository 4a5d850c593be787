from app.models.employee import Employee
from app.models.schedule_template import (
    BreakType,
    ScheduleTemplate,
    ScheduleTemplateDay,
    ScheduleTemplateBreak,
)
from app.models.weekly_schedule import WeeklySchedule
from app.models.schedule import Schedule
from app.models.daily_schedule_exception import DailyScheduleException

__all__ = [
    "Employee",
    "BreakType",
    "ScheduleTemplate",
    "ScheduleTemplateDay",
    "ScheduleTemplateBreak",
    "WeeklySchedule",
    "Schedule",
    "DailyScheduleException",
]
