"""Public read-only endpoints: greeting, insight cards and the class catalog."""
from fastapi import APIRouter, Depends
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from witti.data.catalog import INSIGHTS
from witti.db.database import get_db
from witti.models.entities import ClassOffering

router = APIRouter(prefix="/api", tags=["catalog"])

API_VERSION = "1.0.0"


@router.get("/hello")
async def hello():
    return {"message": "Welcome to WITTI API", "version": API_VERSION, "status": "active"}


@router.get("/insights")
async def insights():
    return {"insights": INSIGHTS}


@router.get("/classes")
async def list_classes(db: AsyncSession = Depends(get_db)):
    """Class catalog, most popular first."""
    rows = (
        await db.scalars(select(ClassOffering).order_by(desc(ClassOffering.student_count), ClassOffering.id))
    ).all()
    return {
        "success": True,
        "classes": [
            {
                "id": c.id,
                "title": c.title,
                "description": c.description,
                "instructor_name": c.instructor_name,
                "instructor_role": c.instructor_role,
                "price": c.price,
                "duration": c.duration,
                "thumbnail_icon": c.thumbnail_icon,
                "rating": c.rating,
                "student_count": c.student_count,
            }
            for c in rows
        ],
    }
