from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Employee(Base):
    """員工資料表"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    employee_code = Column(String(50), unique=True, index=True, nullable=True)  # 員工編號
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 關聯
    weekly_schedules = relationship("WeeklySchedule", back_populates="employee")

    def __repr__(self):
        return f"<Employee(id={self.id}, name={self.name}, code={self.employee_code})>"
