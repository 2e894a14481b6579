"""
Graduation Years Repository
"""

from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import GraduationYear


async def list_all(db: AsyncSession) -> list[GraduationYear]:
    """All graduation years, most recent first."""
    result = await db.execute(select(GraduationYear).order_by(desc(GraduationYear.year)))
    return list(result.scalars().all())


async def get_by_id(db: AsyncSession, id: UUID) -> GraduationYear | None:
    return await db.get(GraduationYear, id)


async def get_by_year(db: AsyncSession, year: int) -> GraduationYear | None:
    result = await db.execute(select(GraduationYear).where(GraduationYear.year == year))
    return result.scalar_one_or_none()


async def create(db: AsyncSession, year: int) -> GraduationYear:
    graduation_year = GraduationYear(year=year)

    db.add(graduation_year)
    await db.commit()
    await db.refresh(graduation_year)

    return graduation_year


async def delete(db: AsyncSession, graduation_year: GraduationYear) -> None:
    await db.delete(graduation_year)
    await db.commit()
