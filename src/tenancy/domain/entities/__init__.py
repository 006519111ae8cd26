from src.tenancy.domain.entities.domain_config import DomainConfig, NavItem, SiteType

__all__ = ["DomainConfig", "NavItem", "SiteType"]
