"""Member views: my enrollments and my payments."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from witti.core.auth import get_current_user
from witti.db.database import get_db
from witti.models.entities import User
from witti.services.enrollment import list_enrollments, list_payments

router = APIRouter(prefix="/api/my", tags=["my"])


@router.get("/enrollments")
async def my_enrollments(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Classes the member is enrolled in, newest first."""
    return {"success": True, "enrollments": await list_enrollments(db, user.id)}


@router.get("/payments")
async def my_payments(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Payments newest first, each with the classes it paid for."""
    return {"success": True, "payments": await list_payments(db, user.id)}
