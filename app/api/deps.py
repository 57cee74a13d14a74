from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.services.repository import ScheduleRepository, SqlScheduleRepository


async def get_repository(session: AsyncSession = Depends(get_session)) -> ScheduleRepository:
    """One repository per request, bound to the request's session."""
    return SqlScheduleRepository(session)
