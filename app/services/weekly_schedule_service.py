import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    EmptyRangeError,
    InactiveTemplateError,
    InvalidRangeError,
    NotFoundError,
    ScheduleError,
)
from app.models.weekly_schedule import WeeklySchedule
from app.services.employee_service import EmployeeService
from app.services.template_service import ScheduleTemplateService
from app.utils.iso_week import MAX_ISO_YEAR, weeks_in_range, weeks_in_year

logger = logging.getLogger(__name__)


@dataclass
class BulkFailure:
    """批次中單一項目的失敗（unit 為週次或員工）"""
    unit: object
    error: ScheduleError


@dataclass
class BulkAssignResult:
    """批次指定的結果：部分成功是允許的"""
    unit_label: str
    succeeded: list[WeeklySchedule] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def conflicts(self) -> list[BulkFailure]:
        return [f for f in self.failed if isinstance(f.error, ConflictError)]

    def summary(self) -> str:
        """例：created 4 of 6 weeks; 2 already assigned"""
        text = f"created {len(self.succeeded)} of {self.total} {self.unit_label}"
        if self.conflicts:
            text += f"; {len(self.conflicts)} already assigned"
        others = len(self.failed) - len(self.conflicts)
        if others:
            text += f"; {others} failed"
        return text


class WeeklyScheduleService:
    """每週排班服務（員工 + 範本 + ISO 週）"""

    def __init__(self, db: Session):
        self.db = db

    # ===== 查詢 =====

    def get_assignment(self, assignment_id: int) -> WeeklySchedule:
        assignment = self.db.query(WeeklySchedule).filter(WeeklySchedule.id == assignment_id).first()
        if not assignment:
            raise NotFoundError("WeeklySchedule", assignment_id)
        return assignment

    def get_for_week(self, employee_id: int, year: int, week_number: int) -> Optional[WeeklySchedule]:
        """取得員工某一週的排班（沒有則回傳 None）"""
        return self.db.query(WeeklySchedule).filter(
            WeeklySchedule.employee_id == employee_id,
            WeeklySchedule.year == year,
            WeeklySchedule.week_number == week_number
        ).first()

    def list_for_employee_year(self, employee_id: int, year: int) -> list[WeeklySchedule]:
        """取得員工某年度的所有週排班，依週次排序"""
        return self.db.query(WeeklySchedule).filter(
            WeeklySchedule.employee_id == employee_id,
            WeeklySchedule.year == year
        ).order_by(WeeklySchedule.week_number).all()

    def list_for_week(self, year: int, week_number: int) -> list[WeeklySchedule]:
        """取得某一週所有員工的排班"""
        return self.db.query(WeeklySchedule).filter(
            WeeklySchedule.year == year,
            WeeklySchedule.week_number == week_number
        ).order_by(WeeklySchedule.employee_id).all()

    # ===== 單筆指定 =====

    def assign(
        self,
        employee_id: int,
        template_id: int,
        year: int,
        week_number: int,
        notes: Optional[str] = None
    ) -> WeeklySchedule:
        """
        指定員工某一週使用的範本

        唯一性由資料庫的 (employee_id, year, week_number) 限制判定，
        衝突時整筆回滾並拋出 ConflictError。
        """
        if not 1 <= year <= MAX_ISO_YEAR or not 1 <= week_number <= weeks_in_year(year):
            raise InvalidRangeError(f"Week {week_number} does not exist in {year}")

        EmployeeService(self.db).get_employee(employee_id)
        template = ScheduleTemplateService(self.db).get_template(template_id)
        if not template.is_active:
            raise InactiveTemplateError(template_id)

        assignment = WeeklySchedule(
            employee_id=employee_id,
            template_id=template_id,
            year=year,
            week_number=week_number,
            notes=notes.strip() if notes else None,
        )
        self.db.add(assignment)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(employee_id, year, week_number)

        self.db.refresh(assignment)
        logger.info(
            "Assigned template %s to employee %s for %s-W%02d",
            template_id, employee_id, year, week_number
        )
        return assignment

    def unassign(self, assignment_id: int) -> None:
        """移除週排班（範本不受影響）"""
        assignment = self.get_assignment(assignment_id)
        self.db.delete(assignment)
        self.db.commit()
        logger.info("Removed weekly schedule %s", assignment_id)

    # ===== 批次操作 =====

    def assign_range(
        self,
        employee_id: int,
        template_id: int,
        start_date: date,
        end_date: date,
        notes: Optional[str] = None
    ) -> BulkAssignResult:
        """
        依日期範圍指定範本，每個涵蓋到的 ISO 週各建立一筆

        已有排班的週會被略過並記錄在 failed，不會中斷整批。
        """
        weeks = weeks_in_range(start_date, end_date)
        if not weeks:
            raise EmptyRangeError(f"No weeks between {start_date} and {end_date}")

        result = BulkAssignResult(unit_label="weeks")
        for year, week_number in weeks:
            try:
                result.succeeded.append(
                    self.assign(employee_id, template_id, year, week_number, notes)
                )
            except ScheduleError as e:
                logger.warning("Range assign skipped %s-W%02d: %s", year, week_number, e.message)
                result.failed.append(BulkFailure(unit=(year, week_number), error=e))

        logger.info("Range assign for employee %s: %s", employee_id, result.summary())
        return result

    def copy_assignment(self, source_assignment_id: int, target_employee_ids: list[int]) -> BulkAssignResult:
        """
        將某筆週排班（同範本、同年、同週）複製給其他員工

        重複的 ID 只處理一次；個別員工失敗不影響其他人。
        """
        source = self.get_assignment(source_assignment_id)

        targets = []
        for employee_id in target_employee_ids:
            if employee_id not in targets:
                targets.append(employee_id)

        result = BulkAssignResult(unit_label="employees")
        for employee_id in targets:
            try:
                result.succeeded.append(
                    self.assign(employee_id, source.template_id, source.year, source.week_number, source.notes)
                )
            except ScheduleError as e:
                logger.warning("Copy of schedule %s skipped employee %s: %s", source_assignment_id, employee_id, e.message)
                result.failed.append(BulkFailure(unit=employee_id, error=e))

        logger.info("Copied weekly schedule %s: %s", source_assignment_id, result.summary())
        return result
