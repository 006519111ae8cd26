from src.tenancy.infrastructure.models.domain_model import DomainORM, DomainSettingORM

__all__ = ["DomainORM", "DomainSettingORM"]
