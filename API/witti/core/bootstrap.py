import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from witti.core.settings import settings
from witti.data.catalog import SEED_CLASSES
from witti.models.base import Base
from witti.models.entities import ClassOffering

logger = logging.getLogger(__name__)


async def seed_catalog(session: AsyncSession) -> int:
    count = int((await session.execute(select(func.count(ClassOffering.id)))).scalar_one())
    if count > 0:
        return 0

    for title, description, instructor, role, price, duration, icon, rating, students in SEED_CLASSES:
        session.add(
            ClassOffering(
                title=title,
                description=description,
                instructor_name=instructor,
                instructor_role=role,
                price=price,
                duration=duration,
                thumbnail_icon=icon,
                rating=rating,
                student_count=students,
            )
        )
    await session.commit()
    logger.info("Seeded class catalog: classes=%s", len(SEED_CLASSES))
    return len(SEED_CLASSES)


async def initialize_database(session: AsyncSession, engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_catalog_on_start:
        await seed_catalog(session)
