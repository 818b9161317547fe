from common.compliance_engine.models import RuleStatus
from common.compliance_engine.rules.grant_keyword_quality import GRANT_KEYWORD_QUALITY


def _keyword(kw_id: str, text: str, quality_score=None, **overrides) -> dict:
    kw = {
        "id": kw_id,
        "text": text,
        "status": "ENABLED",
        "quality_score": quality_score,
        "ad_group_id": "g1",
        "ad_group_name": "Footwear drive",
        "ad_group_status": "ENABLED",
        "campaign_status": "ENABLED",
    }
    kw.update(overrides)
    return kw


def test_single_word_keyword_fails_but_quality_score_passes(make_snapshot, make_ctx):
    snap = make_snapshot(keywords=[_keyword("k1", "shoes", quality_score=4)])
    res = GRANT_KEYWORD_QUALITY().evaluate(make_ctx(snapshot=snap))

    assert [d.line() for d in res.details] == [
        "[PASS]: No active keywords have a quality score of 2 or lower.",
        '[FAIL]: Keyword "shoes" in ad group "Footwear drive" is a single word.',
    ]
    assert res.status == RuleStatus.FAIL


def test_low_quality_scores_each_fail(make_snapshot, make_ctx):
    snap = make_snapshot(
        keywords=[
            _keyword("k1", "donate old shoes", quality_score=2),
            _keyword("k2", "shoe donation near me", quality_score=1),
            _keyword("k3", "charity shoe drive", quality_score=3),
        ]
    )
    res = GRANT_KEYWORD_QUALITY().evaluate(make_ctx(snapshot=snap))

    failures = [d for d in res.details if d.key.startswith("quality_score:")]
    assert [d.message for d in failures] == [
        'Keyword "donate old shoes" has a quality score of 2.',
        'Keyword "shoe donation near me" has a quality score of 1.',
    ]
    assert all(d.status == RuleStatus.FAIL for d in failures)
    assert not any(d.key == "quality_score" for d in res.details)
    assert res.details[-1].line() == "[PASS]: No active single-word keywords found."


def test_unscored_keywords_are_treated_as_compliant(make_snapshot, make_ctx):
    snap = make_snapshot(keywords=[_keyword("k1", "new keyword phrase", quality_score=None)])
    res = GRANT_KEYWORD_QUALITY().evaluate(make_ctx(snapshot=snap))
    assert res.status == RuleStatus.PASS
    assert len(res.details) == 2


def test_inactive_keywords_are_ignored(make_snapshot, make_ctx):
    snap = make_snapshot(
        keywords=[
            _keyword("k1", "shoes", quality_score=1, status="PAUSED"),
            _keyword("k2", "boots", quality_score=1, ad_group_status="PAUSED"),
            _keyword("k3", "sandals", quality_score=1, campaign_status="REMOVED"),
        ]
    )
    res = GRANT_KEYWORD_QUALITY().evaluate(make_ctx(snapshot=snap))
    assert res.status == RuleStatus.PASS
    assert [d.status for d in res.details] == [RuleStatus.PASS, RuleStatus.PASS]


def test_failing_score_threshold_is_configurable(make_snapshot, make_ctx):
    snap = make_snapshot(keywords=[_keyword("k1", "shoe drive", quality_score=3)])
    res = GRANT_KEYWORD_QUALITY().evaluate(
        make_ctx(snapshot=snap, client_rules={"GRANT-KEYWORD-QUALITY": {"max_failing_quality_score": 3}})
    )
    assert res.details[0].status == RuleStatus.FAIL
    assert res.details[0].values == {"keyword": "shoe drive", "quality_score": 3}
