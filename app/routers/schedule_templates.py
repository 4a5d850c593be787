from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.schedule_template import ScheduleTemplate
from app.schemas.schedule_template import (
    TemplateCreate,
    TemplateDuplicate,
    TemplateResponse,
    TemplateUpdate,
)
from app.services.template_service import UNSET, ScheduleTemplateService, to_day_configurations

router = APIRouter(prefix="/api/schedule-templates", tags=["班表範本"])


def _to_response(template: ScheduleTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description,
        is_active=template.is_active,
        created_by=template.created_by,
        created_at=template.created_at,
        days=to_day_configurations(template),
    )


@router.get("", response_model=list[TemplateResponse])
async def list_templates(active_only: bool = False, db: Session = Depends(get_db)):
    """取得範本列表（active_only=true 時僅列出可指定的範本）"""
    service = ScheduleTemplateService(db)
    return [_to_response(t) for t in service.list_templates(active_only=active_only)]


@router.post("", response_model=TemplateResponse, status_code=201)
async def create_template(data: TemplateCreate, db: Session = Depends(get_db)):
    """建立範本"""
    template = ScheduleTemplateService(db).create_template(
        name=data.name,
        description=data.description,
        days=data.days,
        created_by=data.created_by,
    )
    return _to_response(template)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(template_id: int, db: Session = Depends(get_db)):
    """取得單一範本"""
    template = ScheduleTemplateService(db).get_template(template_id)
    return _to_response(template)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(template_id: int, data: TemplateUpdate, db: Session = Depends(get_db)):
    """更新範本（days 需整組七天；description 傳 null 會清除說明）"""
    template = ScheduleTemplateService(db).update_template(
        template_id,
        name=data.name,
        description=data.description if "description" in data.model_fields_set else UNSET,
        days=data.days,
        is_active=data.is_active,
    )
    return _to_response(template)


@router.post("/{template_id}/deactivate", response_model=TemplateResponse)
async def deactivate_template(template_id: int, db: Session = Depends(get_db)):
    """停用範本"""
    template = ScheduleTemplateService(db).deactivate_template(template_id)
    return _to_response(template)


@router.post("/{template_id}/duplicate", response_model=TemplateResponse, status_code=201)
async def duplicate_template(template_id: int, data: TemplateDuplicate, db: Session = Depends(get_db)):
    """複製範本"""
    template = ScheduleTemplateService(db).duplicate_template(template_id, data.name)
    return _to_response(template)


@router.delete("/{template_id}")
async def delete_template(template_id: int, db: Session = Depends(get_db)):
    """刪除範本（使用中的範本改為停用）"""
    deleted = ScheduleTemplateService(db).delete_template(template_id)
    return {"success": True, "deleted": deleted, "deactivated": not deleted}
