from fastapi import APIRouter, Depends, HTTPException, Query

from intake import settings
from intake.deps import get_store
from intake.repositories import EnquiryStore
from intake.schemas import AdminListResponse, DebugResponse, ErrorResponse
from intake.settings import ADMIN_LIST_LIMIT

router = APIRouter(prefix="/api", tags=["admin"])


@router.get("/admin/enquiries", response_model=AdminListResponse)
def list_enquiries(
    limit: int = Query(ADMIN_LIST_LIMIT, ge=1, le=ADMIN_LIST_LIMIT,
                       description="How many of the most recent enquiries to return"),
    store: EnquiryStore = Depends(get_store),
):
    """Most recent enquiries for this school, newest first."""
    rows = store.list(limit=limit)
    return {"success": True, "total": len(rows), "enquiries": rows}


@router.get("/debug", response_model=DebugResponse,
            responses={403: {"model": ErrorResponse}})
def debug_enquiries(store: EnquiryStore = Depends(get_store)):
    """
    Development helper: full records (not summaries) of the most recent
    ADMIN_LIST_LIMIT enquiries. Disabled when ENV=production.
    """
    if settings.ENV == "production":
        raise HTTPException(403, "Debug endpoint disabled in production")
    records = [store.get(s.id) for s in store.list(limit=ADMIN_LIST_LIMIT)]
    return {"totalEnquiries": len(records), "enquiries": records}
