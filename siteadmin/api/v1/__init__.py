"""API v1 router initialization."""

from fastapi import APIRouter

from siteadmin.api.v1.auth import router as auth_router
from siteadmin.api.v1.contact import router as contact_router
from siteadmin.api.v1.inbox import router as inbox_router
from siteadmin.api.v1.logs import router as logs_router
from siteadmin.api.v1.metrics import router as metrics_router
from siteadmin.api.v1.tracking import router as tracking_router
from siteadmin.api.v1.users import router as users_router
from siteadmin.api.v1.visitors import router as visitors_router

router = APIRouter()

router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(users_router, prefix="/users", tags=["Users"])
router.include_router(tracking_router, prefix="/visitor", tags=["Tracking"])
router.include_router(contact_router, prefix="/contact", tags=["Contact"])
router.include_router(visitors_router, prefix="/visitors", tags=["Visitors"])
router.include_router(logs_router, prefix="/logs", tags=["Logs"])
router.include_router(inbox_router, prefix="/inbox", tags=["Inbox"])
router.include_router(metrics_router, prefix="/metrics", tags=["Metrics"])
