from common.compliance_engine.models import RuleStatus
from common.compliance_engine.rules.grant_geo_targeting import GRANT_GEO_TARGETING
from common.compliance_engine.rules.grant_sitelinks_minimum import GRANT_SITELINKS_MINIMUM


def _sitelinks(count: int) -> list[dict]:
    return [
        {"id": str(i), "link_text": f"Page {i}", "final_url": f"https://example.org/{i}"}
        for i in range(count)
    ]


def test_single_sitelink_fails_with_policy_message(make_snapshot, make_ctx):
    res = GRANT_SITELINKS_MINIMUM().evaluate(make_ctx(snapshot=make_snapshot(sitelinks=_sitelinks(1))))

    assert res.status == RuleStatus.FAIL
    assert [d.line() for d in res.details] == [
        "[FAIL]: Account only has 1 sitelink extensions. Need at least TWO."
    ]
    assert res.details[0].values["count"] == 1


def test_two_sitelinks_pass(make_snapshot, make_ctx):
    res = GRANT_SITELINKS_MINIMUM().evaluate(make_ctx(snapshot=make_snapshot(sitelinks=_sitelinks(2))))

    assert res.status == RuleStatus.PASS
    assert res.details[0].line() == "[PASS]: Account has 2 sitelink extensions."


def test_no_sitelinks_fails(make_snapshot, make_ctx):
    res = GRANT_SITELINKS_MINIMUM().evaluate(make_ctx(snapshot=make_snapshot()))
    assert res.status == RuleStatus.FAIL
    assert "only has 0 sitelink extensions" in res.details[0].message


def test_geo_targeting_passes_with_one_location(make_snapshot, make_ctx):
    snap = make_snapshot(targeted_locations=[{"id": "2840", "campaign_id": "c1", "name": "geoTargetConstants/2840"}])
    res = GRANT_GEO_TARGETING().evaluate(make_ctx(snapshot=snap))

    assert res.status == RuleStatus.PASS
    assert len(res.details) == 1
    assert res.details[0].line().startswith("[PASS]")


def test_geo_targeting_fails_without_locations(make_snapshot, make_ctx):
    res = GRANT_GEO_TARGETING().evaluate(make_ctx(snapshot=make_snapshot()))

    assert res.status == RuleStatus.FAIL
    assert len(res.details) == 1
    assert res.details[0].line() == "[FAIL]: Account does not use geo-targeting. Target at least one location."
