import pytest

from hexlayout.layout.ranking import (
    HybridRanker,
    LabelRanker,
    RankKey,
    UsageFrequencyRanker,
    build_ranker,
)


def keys(items):
    return [item.key for item in items]


def test_usage_frequency_descending(make_item):
    items = [make_item("low", usage_count=10), make_item("high", usage_count=1000), make_item("mid", usage_count=100)]
    assert keys(build_ranker(RankKey.USAGE_FREQUENCY)(items)) == ["high", "mid", "low"]


def test_usage_time_descending(make_item):
    items = [make_item("old", last_used_at=5), make_item("never"), make_item("new", last_used_at=50)]
    assert keys(build_ranker(RankKey.USAGE_TIME)(items)) == ["new", "old", "never"]


def test_notification_count_descending(make_item):
    items = [make_item("a", notification_count=1), make_item("b", notification_count=3)]
    assert keys(build_ranker(RankKey.NOTIFICATION_COUNT)(items)) == ["b", "a"]


def test_label_is_case_insensitive(make_item):
    items = [make_item("1", label="zeta"), make_item("2", label="Alpha"), make_item("3", label="beta")]
    assert keys(LabelRanker()(items)) == ["2", "3", "1"]


def test_ties_keep_input_order(make_item):
    items = [make_item(f"app{i}", usage_count=5) for i in range(6)]
    assert keys(UsageFrequencyRanker()(items)) == keys(items)


def test_hybrid_most_used_then_most_recent(make_item):
    items = [
        make_item("frequent", usage_count=100, last_used_at=1),
        make_item("recent", usage_count=1, last_used_at=90),
        make_item("stale", usage_count=50, last_used_at=2),
        make_item("fresh", usage_count=2, last_used_at=80),
    ]
    ranked = HybridRanker(head=1, recent=2)(items)
    assert keys(ranked) == ["frequent", "recent", "fresh", "stale"]


def test_hybrid_is_a_permutation(make_item):
    items = [make_item(f"app{i}", usage_count=25 - i, last_used_at=1000 - i * 7) for i in range(26)]
    ranked = build_ranker(RankKey.HYBRID)(items)
    assert ranked[0].key == "app0"
    assert sorted(keys(ranked)) == sorted(keys(items))


def test_hybrid_rejects_negative_sizes():
    with pytest.raises(ValueError):
        HybridRanker(head=-1)


@pytest.mark.parametrize("rank_key", list(RankKey))
def test_every_rank_key_builds(rank_key, make_item):
    items = [make_item("a", usage_count=1), make_item("b", usage_count=2)]
    assert sorted(keys(build_ranker(rank_key)(items))) == ["a", "b"]
