"""
班表範本種子資料腳本

建立範例員工與常用範本
執行方式：python -m app.scripts.seed_schedules seed
"""

from datetime import time

from app.database import SessionLocal, init_db
from app.exceptions import ScheduleError
from app.models.employee import Employee
from app.models.schedule_template import ScheduleTemplate, BreakType
from app.schemas.schedule_template import BreakSchema, DayConfiguration, DAY_NAMES
from app.services.employee_service import EmployeeService
from app.services.template_service import ScheduleTemplateService, to_day_configurations

SAMPLE_EMPLOYEES = [
    ("Ana García", "EMP001"),
    ("Luis Pérez", "EMP002"),
    ("Marta López", "EMP003"),
]


def office_week() -> list[DayConfiguration]:
    """週一至週五 09:00-18:00，午餐 14:00-15:00 不給薪"""
    lunch = BreakSchema(
        name="Comida", start_time=time(14), end_time=time(15),
        break_type=BreakType.MEAL, is_paid=False, is_required=True,
    )
    return [
        DayConfiguration(
            day_of_week=d,
            is_working_day=1 <= d <= 5,
            start_time=time(9),
            end_time=time(18),
            breaks=[lunch],
        )
        for d in range(7)
    ]


def split_shift_week() -> list[DayConfiguration]:
    """週一至週六分段班 09:00-13:00 / 15:00-19:00"""
    coffee = BreakSchema(
        name="Café", start_time=time(11), end_time=time(11, 15), break_type=BreakType.COFFEE,
    )
    return [
        DayConfiguration(
            day_of_week=d,
            is_working_day=d != 0,
            is_split_schedule=True,
            morning_start=time(9),
            morning_end=time(13),
            afternoon_start=time(15),
            afternoon_end=time(19),
            breaks=[coffee],
        )
        for d in range(7)
    ]


SAMPLE_TEMPLATES = [
    ("Oficina L-V", "Jornada completa de lunes a viernes", office_week),
    ("Turno partido L-S", "Mañana y tarde de lunes a sábado", split_shift_week),
]


def seed_schedules(force: bool = False) -> bool:
    """
    寫入範例員工與範本

    Args:
        force: 同名範本已存在時是否仍新增
    """
    # 初始化資料庫
    init_db()

    db = SessionLocal()

    try:
        employees = EmployeeService(db)
        for name, code in SAMPLE_EMPLOYEES:
            if not db.query(Employee).filter(Employee.employee_code == code).first():
                employee = employees.create_employee(name, employee_code=code)
                print(f"  員工 {employee.employee_code}: {employee.name}")

        service = ScheduleTemplateService(db)
        for name, description, build_days in SAMPLE_TEMPLATES:
            existing = db.query(ScheduleTemplate).filter(ScheduleTemplate.name == name).first()
            if existing and not force:
                print(f"範本「{name}」已存在，若要重複建立請使用 --force 參數")
                continue
            template = service.create_template(name, description, build_days())
            print(f"  範本 {template.id}: {template.name}")

        return True

    except ScheduleError as e:
        db.rollback()
        print(f"匯入失敗: {e.message}")
        return False

    finally:
        db.close()


def list_templates():
    """列出在職員工與資料庫中的所有範本"""
    db = SessionLocal()

    try:
        employees = EmployeeService(db).get_active_employees()
        print(f"在職員工: {len(employees)} 人")
        for employee in employees:
            print(f"  {employee.employee_code or '-'}: {employee.name}")

        templates = ScheduleTemplateService(db).list_templates()

        if not templates:
            print("資料庫中尚無範本資料")
            return

        for template in templates:
            status = "啟用" if template.is_active else "停用"
            print(f"\n=== {template.name} ({status}) ===")
            for day in to_day_configurations(template):
                if not day.is_working_day:
                    print(f"  {DAY_NAMES[day.day_of_week]}: 休假")
                    continue
                windows = " + ".join(f"{s:%H:%M}-{e:%H:%M}" for s, e in day.work_windows())
                print(f"  {DAY_NAMES[day.day_of_week]}: {windows} ({day.net_minutes()} 分鐘)")

    finally:
        db.close()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="班表範本種子資料管理")
    parser.add_argument("action", choices=["seed", "list"], help="執行動作")
    parser.add_argument("--force", "-f", action="store_true", help="同名範本已存在時仍新增")

    args = parser.parse_args()

    if args.action == "seed":
        print("開始匯入範例資料...")
        seed_schedules(args.force)
    elif args.action == "list":
        list_templates()
