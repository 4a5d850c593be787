from sqlalchemy import Column, Integer, Boolean, Time, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database import Base


class Schedule(Base):
    """舊版基本班表（每位員工每個星期幾一筆，沒有週排班時使用）"""
    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint("employee_id", "day_of_week", name="uq_employee_day_of_week"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=星期日, ..., 6=星期六
    is_working_day = Column(Boolean, default=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    break_start_time = Column(Time, nullable=True)  # 單一休息時段
    break_end_time = Column(Time, nullable=True)

    employee = relationship("Employee")

    def __repr__(self):
        return f"<Schedule(employee_id={self.employee_id}, day_of_week={self.day_of_week})>"
