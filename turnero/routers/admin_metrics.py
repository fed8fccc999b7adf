from __future__ import annotations

from fastapi import APIRouter, Depends

from turnero.core.metrics import request_metrics
from turnero.deps import require_admin_user
from turnero.models.admin_user import AdminUser

router = APIRouter(prefix="/api/admin/metrics", tags=["admin-metrics"])


@router.get("")
def tenant_metrics(user: AdminUser = Depends(require_admin_user)):
    return {"tenantId": user.tenant_id, "requests": request_metrics.tenant(str(user.tenant_id))}
