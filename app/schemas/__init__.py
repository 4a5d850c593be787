from app.schemas.schedule_template import (
    BreakSchema,
    DayConfiguration,
    TemplateCreate,
    TemplateUpdate,
    TemplateDuplicate,
    TemplateResponse,
    copy_day_config,
    copy_day_to_all,
)
from app.schemas.weekly_schedule import (
    WeeklyScheduleCreate,
    WeeklyScheduleRangeCreate,
    WeeklyScheduleCopy,
    WeeklyScheduleResponse,
    BulkAssignResponse,
    EffectiveScheduleResponse,
)

__all__ = [
    "BreakSchema",
    "DayConfiguration",
    "TemplateCreate",
    "TemplateUpdate",
    "TemplateDuplicate",
    "TemplateResponse",
    "copy_day_config",
    "copy_day_to_all",
    "WeeklyScheduleCreate",
    "WeeklyScheduleRangeCreate",
    "WeeklyScheduleCopy",
    "WeeklyScheduleResponse",
    "BulkAssignResponse",
    "EffectiveScheduleResponse",
]
