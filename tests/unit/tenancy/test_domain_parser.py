import pytest

from src.tenancy.domain.entities.domain_config import DomainConfig, SiteType
from src.tenancy.domain.services.domain_parser import (
    FALLBACK_DOMAIN,
    get_default_domain_config,
    get_site_type_from_domain,
    is_valid_domain,
    normalize_hostname,
    parse_domain,
    should_show_feature,
)


@pytest.mark.parametrize(
    "hostname,expected",
    [
        ("WWW.Example.com:8080", "example.com"),
        ("www.bigbased.com", "bigbased.com"),
        ("basedbook.com:443", "basedbook.com"),
        ("Shop.BasedBook.com", "shop.basedbook.com"),
        ("localhost:3000", "localhost"),
        ("", FALLBACK_DOMAIN),
        ("   ", FALLBACK_DOMAIN),
        ("-bad-.com", FALLBACK_DOMAIN),
        ("exa mple.com", FALLBACK_DOMAIN),
        ("example..com", FALLBACK_DOMAIN),
        ("example.com.", FALLBACK_DOMAIN),
        ("a" * 64 + ".com", FALLBACK_DOMAIN),
    ],
)
def test_parse_domain(hostname, expected):
    assert parse_domain(hostname) == expected


@pytest.mark.parametrize("value", [None, 42, b"example.com", ["example.com"]])
def test_parse_domain_non_string_falls_back(value):
    assert parse_domain(value) == FALLBACK_DOMAIN


@pytest.mark.parametrize(
    "hostname",
    ["", "www.", ":80", "WWW.Example.com:8080", "ünïcode.com", "x" * 300, "a.b.c.d.e", "-", "foo_bar.com", "example.com\n"],
)
def test_parse_domain_result_is_always_valid(hostname):
    assert is_valid_domain(parse_domain(hostname))


def test_is_valid_domain_rules():
    assert is_valid_domain("example.com")
    assert is_valid_domain("a")
    assert is_valid_domain("xn--bcher-kva.example")
    assert is_valid_domain("a" * 63 + ".com")
    assert not is_valid_domain("a" * 64 + ".com")
    assert not is_valid_domain("-example.com")
    assert not is_valid_domain("example-.com")
    assert not is_valid_domain("example.com\n")
    assert not is_valid_domain("")
    assert not is_valid_domain(None)


def test_is_valid_domain_total_length_limit():
    label = "a" * 63
    # 4 labels of 63 + 3 dots = 255 chars
    assert not is_valid_domain(".".join([label] * 4))
    assert is_valid_domain(".".join([label] * 3 + ["a" * 61]))


@pytest.mark.parametrize("hostname", ["\u017fhop.com", "\u212aelvin.com"])
def test_non_ascii_case_folding_letters_are_not_valid(hostname):
    # U+017F and U+212A match [a-z] under a unicode IGNORECASE
    assert not is_valid_domain(hostname)


def test_parse_domain_rejects_long_s():
    assert parse_domain("\u017fhop.com") == FALLBACK_DOMAIN
    assert parse_domain("\u017fhop.com").isascii()


def test_normalize_hostname_reports_invalid_as_none():
    assert normalize_hostname("WWW.Example.com:8080") == "example.com"
    assert normalize_hostname("not a host") is None
    assert normalize_hostname("") is None


@pytest.mark.parametrize(
    "domain,site_type",
    [
        ("basedbook.com", SiteType.BASEDBOOK),
        ("bigbased.com", SiteType.BIGBASED),
        ("random-custom.org", SiteType.CUSTOM),
        ("www.BasedBook.com:3000", SiteType.BASEDBOOK),
        ("shop.basedbook.com", SiteType.BASEDBOOK),
        ("bigbased.net", SiteType.BIGBASED),
        ("basedbook.bigbased.com", SiteType.BASEDBOOK),
        ("notbasedbook.com", SiteType.CUSTOM),
        ("", SiteType.BIGBASED),
    ],
)
def test_get_site_type_from_domain(domain, site_type):
    assert get_site_type_from_domain(domain) is site_type


def test_default_domain_config():
    cfg = get_default_domain_config("WWW.BasedBook.com:8080")
    assert cfg == DomainConfig(id=0, domain="basedbook.com", site_type=SiteType.BASEDBOOK)
    assert cfg.is_default
    assert cfg.is_active
    assert cfg.custom_branding == {} and cfg.settings == {}
    assert cfg.owner_user_id is None


def test_default_domain_config_for_garbage_uses_fallback():
    cfg = get_default_domain_config("%%%")
    assert cfg.domain == FALLBACK_DOMAIN
    assert cfg.site_type is SiteType.BIGBASED


def test_should_show_feature_main_domains_allow_everything():
    assert should_show_feature(get_default_domain_config("bigbased.com"), "anything")
    assert should_show_feature(get_default_domain_config("basedbook.com"), "anything")


def test_should_show_feature_uses_enabled_features_elsewhere():
    cfg = DomainConfig(id=3, domain="shop.example.com", site_type=SiteType.CUSTOM,
                       settings={"enabled_features": ["chat", "shop"]})
    assert should_show_feature(cfg, "chat")
    assert not should_show_feature(cfg, "forum")
    assert not should_show_feature(get_default_domain_config("shop.example.com"), "chat")


def test_should_show_feature_ignores_malformed_setting():
    cfg = DomainConfig(id=3, domain="shop.example.com", site_type=SiteType.CUSTOM,
                       settings={"enabled_features": "chat"})
    assert not should_show_feature(cfg, "chat")
