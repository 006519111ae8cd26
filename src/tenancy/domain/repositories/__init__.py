from src.tenancy.domain.repositories.domain_repository import DomainRepository

__all__ = ["DomainRepository"]
