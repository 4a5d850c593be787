from sqlalchemy import Column, Integer, Boolean, Date, DateTime, Text, Time, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class DailyScheduleException(Base):
    """單日例外班表（優先於週排班與基本班表）"""
    __tablename__ = "daily_schedule_exceptions"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    is_working_day = Column(Boolean, default=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    notes = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee")

    def __repr__(self):
        return f"<DailyScheduleException(employee_id={self.employee_id}, date={self.date})>"
