from app.services.employee_service import EmployeeService
from app.services.template_service import ScheduleTemplateService
from app.services.weekly_schedule_service import WeeklyScheduleService, BulkAssignResult
from app.services.schedule_resolver import ScheduleResolver, EffectiveSchedule, ScheduleSource

__all__ = [
    "EmployeeService",
    "ScheduleTemplateService",
    "WeeklyScheduleService",
    "BulkAssignResult",
    "ScheduleResolver",
    "EffectiveSchedule",
    "ScheduleSource",
]
