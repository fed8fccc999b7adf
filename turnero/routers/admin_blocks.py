from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from turnero.core.database import get_db
from turnero.deps import get_tenant_professional, require_admin_user
from turnero.models.admin_user import AdminUser
from turnero.models.blocked_date import BlockedDate
from turnero.models.professional import Professional
from turnero.schemas.booking import BlockedDateCreate, BlockedDateRead

router = APIRouter(prefix="/api/blocks", tags=["admin-blocks"])
logger = logging.getLogger(__name__)
BLOCKS_PREFIX = "[BLOCKS]"


@router.get("", response_model=list[BlockedDateRead])
def list_blocks(
    professional_id: int = Query(..., alias="professionalId"),
    db: Session = Depends(get_db),
    user: AdminUser = Depends(require_admin_user),
):
    get_tenant_professional(db, user, professional_id)
    blocks = (
        db.query(BlockedDate)
        .filter(BlockedDate.professional_id == professional_id)
        .order_by(BlockedDate.date.asc())
        .all()
    )
    return [BlockedDateRead.model_validate(block) for block in blocks]


@router.post("", response_model=BlockedDateRead, status_code=status.HTTP_201_CREATED)
def create_block(
    payload: BlockedDateCreate,
    db: Session = Depends(get_db),
    user: AdminUser = Depends(require_admin_user),
):
    professional = get_tenant_professional(db, user, payload.professional_id)
    block = BlockedDate(
        professional_id=professional.id,
        date=payload.date,
        reason=payload.reason.strip(),
    )
    db.add(block)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ese día ya está bloqueado para el profesional",
        ) from exc
    db.refresh(block)
    logger.info(
        "%s created id=%s professional_id=%s date=%s",
        BLOCKS_PREFIX,
        block.id,
        professional.id,
        block.date,
    )
    return BlockedDateRead.model_validate(block)


@router.delete("/{block_id}")
def delete_block(
    block_id: int,
    db: Session = Depends(get_db),
    user: AdminUser = Depends(require_admin_user),
):
    block = (
        db.query(BlockedDate)
        .join(Professional, Professional.id == BlockedDate.professional_id)
        .filter(BlockedDate.id == block_id, Professional.tenant_id == user.tenant_id)
        .first()
    )
    if not block:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bloqueo no encontrado")

    db.delete(block)
    db.commit()
    logger.info("%s deleted id=%s tenant_id=%s", BLOCKS_PREFIX, block_id, user.tenant_id)
    return {"ok": True}
