from src.tenancy.infrastructure.repositories.domain_repository_impl import SqlAlchemyDomainRepository

__all__ = ["SqlAlchemyDomainRepository"]
