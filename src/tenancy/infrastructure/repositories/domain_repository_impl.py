from __future__ import annotations

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from src.tenancy.domain.entities.domain_config import DomainConfig, SiteType
from src.tenancy.domain.repositories.domain_repository import DomainRepository
from src.tenancy.infrastructure.models.domain_model import DomainORM


def _to_domain(row: DomainORM) -> DomainConfig:
    # domain_settings rows -> flat {setting_key: setting_value}
    settings = {s.setting_key: s.setting_value for s in row.settings}
    return DomainConfig(
        id=row.id,
        domain=row.domain,
        site_type=SiteType(row.site_type),
        is_active=row.is_active,
        custom_branding=dict(row.custom_branding or {}),
        owner_user_id=row.owner_user_id,
        settings=settings,
    )


class SqlAlchemyDomainRepository(DomainRepository):
    """
    SQLAlchemy 2.x async implementation.
    Opens a short-lived session per lookup; errors propagate to the caller.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_active_by_domain(self, domain: str) -> Optional[DomainConfig]:
        stmt = (
            select(DomainORM)
            .options(selectinload(DomainORM.settings))
            .where(
                and_(
                    DomainORM.domain == domain,
                    DomainORM.is_active.is_(True),
                )
            )
            .limit(1)
        )
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).scalars().first()
            return _to_domain(row) if row else None
