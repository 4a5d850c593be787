from sqlalchemy.orm import Session
from typing import Optional

from app.exceptions import NotFoundError
from app.models.employee import Employee


class EmployeeService:
    """員工名冊查詢服務"""

    def __init__(self, db: Session):
        self.db = db

    def find_employee(self, employee_id: int) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def get_employee(self, employee_id: int) -> Employee:
        """取得員工，不存在時拋出 NotFoundError"""
        employee = self.find_employee(employee_id)
        if not employee:
            raise NotFoundError("Employee", employee_id)
        return employee

    def get_active_employees(self) -> list[Employee]:
        """取得所有在職員工"""
        return self.db.query(Employee).filter(
            Employee.is_active == True  # noqa: E712
        ).order_by(Employee.name).all()

    def create_employee(self, name: str, employee_code: Optional[str] = None) -> Employee:
        """建立員工"""
        employee = Employee(name=name, employee_code=employee_code, is_active=True)
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee
