from sqlalchemy import Column, Integer, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class WeeklySchedule(Base):
    """每週排班（員工 + 範本 + ISO 週）"""
    __tablename__ = "weekly_schedules"
    __table_args__ = (
        # 同一員工同一週只能有一筆，併發寫入時以此為準
        UniqueConstraint("employee_id", "year", "week_number", name="uq_employee_year_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("schedule_templates.id"), nullable=False)
    year = Column(Integer, nullable=False)  # ISO 年
    week_number = Column(Integer, nullable=False)  # ISO 週次 1-53
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # 關聯
    employee = relationship("Employee", back_populates="weekly_schedules")
    template = relationship("ScheduleTemplate", back_populates="weekly_schedules")

    def __repr__(self):
        return (
            f"<WeeklySchedule(id={self.id}, employee_id={self.employee_id}, "
            f"template_id={self.template_id}, week={self.year}-W{self.week_number:02d})>"
        )
