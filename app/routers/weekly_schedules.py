"""
每週排班路由

單週指定、日期範圍批次指定、複製給其他員工，以及實際班表查詢
"""
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.weekly_schedule import (
    BulkAssignResponse,
    BulkFailureResponse,
    EffectiveScheduleResponse,
    WeeklyScheduleCopy,
    WeeklyScheduleCreate,
    WeeklyScheduleRangeCreate,
    WeeklyScheduleResponse,
)
from app.services.schedule_resolver import EffectiveSchedule, ScheduleResolver
from app.services.weekly_schedule_service import BulkAssignResult, WeeklyScheduleService

router = APIRouter(prefix="/api/weekly-schedules", tags=["每週排班"])


def _bulk_response(result: BulkAssignResult) -> BulkAssignResponse:
    return BulkAssignResponse(
        succeeded=[WeeklyScheduleResponse.model_validate(a) for a in result.succeeded],
        failed=[
            BulkFailureResponse(
                unit=f"{f.unit[0]}-W{f.unit[1]:02d}" if isinstance(f.unit, tuple) else str(f.unit),
                error=f.error.message,
                error_type=type(f.error).__name__,
            )
            for f in result.failed
        ],
        summary=result.summary(),
    )


def _effective_response(effective: EffectiveSchedule) -> EffectiveScheduleResponse:
    return EffectiveScheduleResponse(
        work_date=effective.work_date,
        source=effective.source.value,
        is_working_day=effective.is_working_day,
        assignment_id=effective.assignment_id,
        template_id=effective.template_id,
        day=effective.day,
        net_minutes=effective.net_minutes,
    )


@router.post("", response_model=WeeklyScheduleResponse, status_code=201)
async def assign_week(data: WeeklyScheduleCreate, db: Session = Depends(get_db)):
    """指定員工某一週的範本"""
    return WeeklyScheduleService(db).assign(
        employee_id=data.employee_id,
        template_id=data.template_id,
        year=data.year,
        week_number=data.week_number,
        notes=data.notes,
    )


@router.post("/range", response_model=BulkAssignResponse)
async def assign_range(data: WeeklyScheduleRangeCreate, db: Session = Depends(get_db)):
    """依日期範圍指定範本（已有排班的週會被略過）"""
    result = WeeklyScheduleService(db).assign_range(
        employee_id=data.employee_id,
        template_id=data.template_id,
        start_date=data.start_date,
        end_date=data.end_date,
        notes=data.notes,
    )
    return _bulk_response(result)


@router.post("/{assignment_id}/copy", response_model=BulkAssignResponse)
async def copy_assignment(assignment_id: int, data: WeeklyScheduleCopy, db: Session = Depends(get_db)):
    """將排班複製給其他員工"""
    result = WeeklyScheduleService(db).copy_assignment(assignment_id, data.employee_ids)
    return _bulk_response(result)


@router.delete("/{assignment_id}")
async def unassign(assignment_id: int, db: Session = Depends(get_db)):
    """移除週排班"""
    WeeklyScheduleService(db).unassign(assignment_id)
    return {"success": True}


@router.get("/employee/{employee_id}/year/{year}", response_model=list[WeeklyScheduleResponse])
async def list_for_employee_year(employee_id: int, year: int, db: Session = Depends(get_db)):
    """取得員工某年度的週排班"""
    return WeeklyScheduleService(db).list_for_employee_year(employee_id, year)


@router.get("/effective/{employee_id}/{work_date}", response_model=EffectiveScheduleResponse)
async def get_effective_schedule(employee_id: int, work_date: date, db: Session = Depends(get_db)):
    """取得員工某天實際適用的班表"""
    effective = ScheduleResolver(db).get_effective_schedule(employee_id, work_date)
    return _effective_response(effective)


@router.get("/week-view/{employee_id}/{year}/{week_number}", response_model=list[EffectiveScheduleResponse])
async def get_week_view(employee_id: int, year: int, week_number: int, db: Session = Depends(get_db)):
    """取得員工一整週的實際班表"""
    week = ScheduleResolver(db).get_week_view(employee_id, year, week_number)
    return [_effective_response(e) for e in week]
