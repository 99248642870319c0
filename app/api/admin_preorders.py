"""
Admin Pre-Orders API
Backs the pre-order tracking dashboard. Every endpoint requires an admin.

Endpoints:
- GET   /api/v1/admin/preorders        - List (search + status filter)
- PATCH /api/v1/admin/preorders        - Update status and/or notes
- GET   /api/v1/admin/preorders/stats  - Dashboard summary cards
- GET   /api/v1/admin/preorders/export - CSV download
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from app.core.auth import TokenUser, require_admin
from app.domain.preorder import PreOrderUpdate
from app.services.preorder_service import PreOrderService, get_preorder_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/admin/preorders",
    tags=["Admin"],
    dependencies=[Depends(require_admin)]
)

STATUS_PATTERN = "^(all|pending|contacted|converted|cancelled)$"


@router.get("")
async def list_preorders(
    search: Optional[str] = Query(None, description="Match email, product title or name"),
    status: str = Query("all", pattern=STATUS_PATTERN),
    service: PreOrderService = Depends(get_preorder_service)
):
    """All pre-orders, newest first"""
    preorders = service.list_preorders(search=search, status=status)
    return {
        "count": len(preorders),
        "preorders": [p.to_dict() for p in preorders]
    }


@router.patch("")
async def update_preorder(
    update: PreOrderUpdate,
    user: TokenUser = Depends(require_admin),
    service: PreOrderService = Depends(get_preorder_service)
):
    """
    Update a pre-order's status and/or notes.

    Only the fields present in the body are written.
    """
    if not update.id:
        raise HTTPException(status_code=400, detail="Missing id")

    preorder = service.update(update)
    logger.info(f"Pre-order {update.id} updated by {user.email or user.id}")
    return {"preorder": preorder.to_dict()}


@router.get("/stats")
async def preorder_stats(service: PreOrderService = Depends(get_preorder_service)):
    """Total, potential revenue, pending count and top 5 products"""
    return service.stats().model_dump()


@router.get("/export")
async def export_preorders(
    search: Optional[str] = Query(None),
    status: str = Query("all", pattern=STATUS_PATTERN),
    service: PreOrderService = Depends(get_preorder_service)
):
    """The filtered list as a CSV attachment"""
    content = service.export(search=search, status=status)
    filename = f"preorders-{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
