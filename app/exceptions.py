"""
排班相關的領域例外

這些例外不繼承 ValueError，在 pydantic validator 中拋出時會原樣往外傳，
不會被包裝成 pydantic.ValidationError。
"""
from typing import Optional


class ScheduleError(Exception):
    """排班領域錯誤的基底類別"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ScheduleValidationError(ScheduleError):
    """範本或每日設定的結構不正確"""


class InvalidScheduleError(ScheduleValidationError):
    """每日設定或休息時段的時間不合法"""


class InvalidRangeError(ScheduleError):
    """日期範圍或週次不合法（例：結束日早於開始日）"""


class EmptyRangeError(ScheduleError):
    """日期範圍內沒有任何週次"""


class ConflictError(ScheduleError):
    """同一員工同一週已有排班"""

    def __init__(self, employee_id: int, year: int, week_number: int):
        super().__init__(
            f"Employee {employee_id} already has a schedule for week {week_number} of {year}"
        )
        self.employee_id = employee_id
        self.year = year
        self.week_number = week_number


class NotFoundError(ScheduleError):
    """找不到員工、範本或排班"""

    def __init__(self, entity: str, entity_id: Optional[int]):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InactiveTemplateError(ScheduleError):
    """範本已停用，無法用於新的排班"""

    def __init__(self, template_id: int):
        super().__init__(f"Schedule template {template_id} is inactive")
        self.template_id = template_id
