import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ScheduleValidationError
from app.models.schedule_template import ScheduleTemplate, ScheduleTemplateDay, ScheduleTemplateBreak
from app.models.weekly_schedule import WeeklySchedule
from app.schemas.schedule_template import DayConfiguration, check_week_days
from app.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

# update_template 中代表「不修改」；description 傳 None 表示清除
UNSET = object()


def to_day_configurations(template: ScheduleTemplate) -> list[DayConfiguration]:
    """ORM 範本轉成七個 DayConfiguration，依星期排序"""
    days = [DayConfiguration.model_validate(day) for day in template.template_days]
    return sorted(days, key=lambda d: d.day_of_week)


def _build_day_rows(days: list[DayConfiguration]) -> list[ScheduleTemplateDay]:
    rows = []
    for day in sorted(days, key=lambda d: d.day_of_week):
        row = ScheduleTemplateDay(
            day_of_week=day.day_of_week,
            is_working_day=day.is_working_day,
            is_split_schedule=day.is_split_schedule,
            start_time=day.start_time,
            end_time=day.end_time,
            morning_start=day.morning_start,
            morning_end=day.morning_end,
            afternoon_start=day.afternoon_start,
            afternoon_end=day.afternoon_end,
            notes=day.notes,
        )
        row.breaks = [
            ScheduleTemplateBreak(
                name=b.name,
                start_time=b.start_time,
                end_time=b.end_time,
                break_type=b.break_type.value,
                is_paid=b.is_paid,
                is_required=b.is_required,
                sort_order=b.sort_order,
            )
            for b in day.breaks
        ]
        rows.append(row)
    return rows


class ScheduleTemplateService:
    """班表範本管理服務"""

    def __init__(self, db: Session):
        self.db = db

    # ===== 查詢 =====

    def get_template(self, template_id: int) -> ScheduleTemplate:
        """取得範本，不存在時拋出 NotFoundError"""
        template = self.db.query(ScheduleTemplate).filter(ScheduleTemplate.id == template_id).first()
        if not template:
            raise NotFoundError("ScheduleTemplate", template_id)
        return template

    def list_templates(self, active_only: bool = False) -> list[ScheduleTemplate]:
        query = self.db.query(ScheduleTemplate)
        if active_only:
            query = query.filter(ScheduleTemplate.is_active == True)  # noqa: E712
        return query.order_by(ScheduleTemplate.name).all()

    def list_available_templates(self) -> list[ScheduleTemplate]:
        """可用於新排班的範本（僅限啟用中）"""
        return self.list_templates(active_only=True)

    def is_in_use(self, template_id: int) -> bool:
        return self.db.query(WeeklySchedule.id).filter(
            WeeklySchedule.template_id == template_id
        ).first() is not None

    # ===== 建立 / 更新 =====

    def create_template(
        self,
        name: str,
        description: Optional[str],
        days: list[DayConfiguration],
        created_by: Optional[int] = None
    ) -> ScheduleTemplate:
        """
        建立範本

        Args:
            name: 範本名稱
            description: 說明
            days: 七天設定（0-6 各一筆）
            created_by: 建立者員工 ID
        """
        name = self._check_name(name)
        check_week_days(days)
        if created_by is not None:
            EmployeeService(self.db).get_employee(created_by)

        template = ScheduleTemplate(
            name=name,
            description=description,
            is_active=True,
            created_by=created_by,
        )
        template.template_days = _build_day_rows(days)
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        logger.info("Created schedule template %s (%s)", template.id, template.name)
        return template

    def update_template(
        self,
        template_id: int,
        name: str = None,
        description: Optional[str] = UNSET,
        days: list[DayConfiguration] = None,
        is_active: bool = None
    ) -> ScheduleTemplate:
        """
        更新範本

        days 只能整組七天替換；驗證失敗時不會有任何變更。
        description 未傳入時不修改，傳入 None 則清除說明。
        """
        template = self.get_template(template_id)

        # 先驗證，再修改
        if name is not None:
            name = self._check_name(name)
        if days is not None:
            check_week_days(days)

        if name is not None:
            template.name = name
        if description is not UNSET:
            template.description = description
        if is_active is not None:
            template.is_active = is_active
        if days is not None:
            template.template_days = []
            self.db.flush()
            template.template_days = _build_day_rows(days)

        self.db.commit()
        self.db.refresh(template)
        logger.info("Updated schedule template %s", template.id)
        return template

    def deactivate_template(self, template_id: int) -> ScheduleTemplate:
        """停用範本（既有的週排班不受影響）"""
        template = self.get_template(template_id)
        template.is_active = False
        self.db.commit()
        logger.info("Deactivated schedule template %s", template_id)
        return template

    def activate_template(self, template_id: int) -> ScheduleTemplate:
        template = self.get_template(template_id)
        template.is_active = True
        self.db.commit()
        logger.info("Activated schedule template %s", template_id)
        return template

    def delete_template(self, template_id: int) -> bool:
        """
        刪除範本

        已被週排班使用的範本只會停用，以保留歷史班表。

        Returns:
            True 表示已實際刪除，False 表示改為停用
        """
        template = self.get_template(template_id)
        if self.is_in_use(template_id):
            template.is_active = False
            self.db.commit()
            logger.info("Schedule template %s is in use, deactivated instead of deleted", template_id)
            return False

        self.db.delete(template)
        self.db.commit()
        logger.info("Deleted schedule template %s", template_id)
        return True

    def duplicate_template(self, template_id: int, new_name: str) -> ScheduleTemplate:
        """複製範本（含七天設定與休息時段）"""
        source = self.get_template(template_id)
        return self.create_template(
            name=new_name,
            description=source.description,
            days=to_day_configurations(source),
            created_by=source.created_by,
        )

    @staticmethod
    def _check_name(name: Optional[str]) -> str:
        if not name or not name.strip():
            raise ScheduleValidationError("Template name is required")
        return name.strip()
