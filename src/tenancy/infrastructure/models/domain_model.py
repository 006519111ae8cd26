from __future__ import annotations

from typing import Any, List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.infrastructure.database.base_model import Base, JSONType, TimestampMixin


class DomainORM(TimestampMixin, Base):
    __tablename__ = "domains"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain: Mapped[str] = mapped_column(String(253), nullable=False)
    site_type: Mapped[str] = mapped_column(String(20), nullable=False, server_default=text("'custom'"))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    custom_branding: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    owner_user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    settings: Mapped[List["DomainSettingORM"]] = relationship(
        back_populates="domain",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    __table_args__ = (
        UniqueConstraint("domain", name="uq_domains__domain"),
        CheckConstraint(
            "site_type IN ('bigbased', 'basedbook', 'custom')",
            name="ck_domains__site_type",
        ),
    )


class DomainSettingORM(Base):
    __tablename__ = "domain_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domains.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    setting_key: Mapped[str] = mapped_column(String(100), nullable=False)
    setting_value: Mapped[Any] = mapped_column(JSONType, nullable=True)

    domain: Mapped[DomainORM] = relationship(back_populates="settings")

    __table_args__ = (
        UniqueConstraint("domain_id", "setting_key", name="uq_domain_settings__domain_key"),
    )
