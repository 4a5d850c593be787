from sqlalchemy import (
    Column, Integer, String, DateTime, Boolean, Text, Time, ForeignKey, UniqueConstraint
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
import enum


class BreakType(str, enum.Enum):
    """休息類型"""
    REST = "rest"          # 休息
    MEAL = "meal"          # 用餐
    COFFEE = "coffee"      # 咖啡
    SMOKE = "smoke"        # 抽菸
    PRAYER = "prayer"      # 祈禱
    PERSONAL = "personal"  # 私人
    PAID = "paid"          # 給薪休息
    UNPAID = "unpaid"      # 不給薪休息
    OTHER = "other"        # 其他


class ScheduleTemplate(Base):
    """班表範本（七天的工作型態）"""
    __tablename__ = "schedule_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 關聯
    template_days = relationship(
        "ScheduleTemplateDay",
        back_populates="template",
        order_by="ScheduleTemplateDay.day_of_week",
        cascade="all, delete-orphan",
    )
    creator = relationship("Employee", foreign_keys=[created_by])
    weekly_schedules = relationship("WeeklySchedule", back_populates="template")

    def __repr__(self):
        return f"<ScheduleTemplate(id={self.id}, name={self.name}, active={self.is_active})>"

    def get_day(self, day_of_week: int):
        """取得指定星期幾的設定（0=星期日）"""
        for day in self.template_days:
            if day.day_of_week == day_of_week:
                return day
        return None


class ScheduleTemplateDay(Base):
    """範本的單日設定"""
    __tablename__ = "schedule_template_days"
    __table_args__ = (
        UniqueConstraint("template_id", "day_of_week", name="uq_template_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("schedule_templates.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0=星期日, 1=星期一, ..., 6=星期六
    is_working_day = Column(Boolean, default=True, nullable=False)
    is_split_schedule = Column(Boolean, default=False, nullable=False)  # 分段班

    # 一般班
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    # 分段班
    morning_start = Column(Time, nullable=True)
    morning_end = Column(Time, nullable=True)
    afternoon_start = Column(Time, nullable=True)
    afternoon_end = Column(Time, nullable=True)

    notes = Column(Text, nullable=True)

    # 關聯
    template = relationship("ScheduleTemplate", back_populates="template_days")
    breaks = relationship(
        "ScheduleTemplateBreak",
        back_populates="template_day",
        order_by="ScheduleTemplateBreak.sort_order",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<ScheduleTemplateDay(template_id={self.template_id}, day_of_week={self.day_of_week})>"


class ScheduleTemplateBreak(Base):
    """單日設定中的休息時段"""
    __tablename__ = "schedule_template_breaks"

    id = Column(Integer, primary_key=True, index=True)
    template_day_id = Column(
        Integer, ForeignKey("schedule_template_days.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(String(100), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    break_type = Column(String(20), default=BreakType.REST.value)
    is_paid = Column(Boolean, default=True)
    is_required = Column(Boolean, default=False)
    sort_order = Column(Integer, default=0)

    # 關聯
    template_day = relationship("ScheduleTemplateDay", back_populates="breaks")

    def __repr__(self):
        return f"<ScheduleTemplateBreak(name={self.name}, {self.start_time}-{self.end_time})>"
