import pytest

from common.compliance_engine.models import AccountSnapshot, EntityStatus, Keyword
from common.compliance_engine.provider import InMemoryAccountProvider
from common.compliance_engine.query import contains, eq, in_, lte, not_contains, where


def _kw(kw_id: str, text: str, quality_score=None, status: str = "ENABLED") -> Keyword:
    return Keyword(id=kw_id, text=text, status=status, quality_score=quality_score, ad_group_id="g1")


def test_conditions_are_conjunctive():
    provider = InMemoryAccountProvider(
        AccountSnapshot(
            keywords=[
                _kw("1", "food bank", 2),
                _kw("2", "food", 2, status="PAUSED"),
                _kw("3", "pantry", 7),
            ]
        )
    )
    out = list(provider.select(Keyword, where(eq("status", EntityStatus.ENABLED), lte("quality_score", 2))))
    assert [k.id for k in out] == ["1"]


def test_null_attribute_never_matches():
    kw = _kw("1", "food bank", None)
    assert not lte("quality_score", 2).matches(kw)
    assert not eq("quality_score", None).matches(kw)


def test_string_containment_operators():
    kw = _kw("1", "food bank")
    assert contains("text", " ").matches(kw)
    assert not not_contains("text", " ").matches(kw)
    assert in_("status", ["PAUSED", "ENABLED"]).matches(kw)


def test_unknown_attribute_is_rejected():
    provider = InMemoryAccountProvider(AccountSnapshot(keywords=[_kw("1", "food")]))
    with pytest.raises(ValueError, match="no attribute 'score'"):
        list(provider.select(Keyword, where(lte("score", 2))))


def test_missing_stats_window_raises():
    provider = InMemoryAccountProvider(AccountSnapshot())
    from common.compliance_engine.models import DateRange

    with pytest.raises(KeyError):
        provider.account_stats(DateRange.LAST_30_DAYS)


def test_containment_on_enum_attribute_uses_its_value():
    kw = _kw("1", "food bank")
    assert contains("status", "ENAB").matches(kw)
    assert not contains("status", "EntityStatus").matches(kw)
    assert not_contains("status", "PAUSED").matches(kw)
