from src.tenancy.domain.entities.domain_config import DomainConfig, SiteType
from src.tenancy.domain.repositories.domain_repository import DomainRepository


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryDomainRepository(DomainRepository):
    def __init__(self, *configs: DomainConfig):
        self.rows = {c.domain: c for c in configs}
        self.lookups: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.lookups)

    async def get_active_by_domain(self, domain: str):
        self.lookups.append(domain)
        config = self.rows.get(domain)
        return config if config is not None and config.is_active else None


BOOKS = DomainConfig(
    id=7,
    domain="books.example.org",
    site_type=SiteType.BASEDBOOK,
    custom_branding={"primary_color": "#112233"},
    owner_user_id="user-42",
    settings={"enabled_features": ["chat"]},
)
