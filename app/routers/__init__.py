from app.routers.schedule_templates import router as schedule_templates_router
from app.routers.weekly_schedules import router as weekly_schedules_router

__all__ = ["schedule_templates_router", "weekly_schedules_router"]
