"""Tests for keyword pinning resolution."""

from content_engine.core.pinning import PinningResolver
from content_engine.core.schemas_assets import PinningRule
from tests.fakes.fake_stores import FakeAssetStore
from tests.fixtures_assets import ALL_ASSETS, CROWDSTRIKE, KEYNOTE, PINNING_RULES, make_asset


def _resolver(**kwargs) -> PinningResolver:
    kwargs.setdefault("assets", ALL_ASSETS)
    kwargs.setdefault("rules", PINNING_RULES)
    return PinningResolver(FakeAssetStore(**kwargs))


def test_pins_matching_keyword():
    pinned = _resolver().get_pinned_assets("CrowdStrike case study")
    assert [asset.id for asset in pinned] == [CROWDSTRIKE.id]


def test_all_matching_rules_in_priority_order():
    a = make_asset("A")
    b = make_asset("B")
    rules = [
        PinningRule(keyword="crowdstrike case", asset_id="B", priority=5),
        PinningRule(keyword="crowdstrike", asset_id="A", priority=10),
    ]

    pinned = _resolver(assets=[b, a], rules=rules).get_pinned_assets("crowdstrike case study")

    assert [asset.id for asset in pinned] == ["A", "B"]


def test_order_follows_priority_not_store_order():
    rules = [
        PinningRule(keyword="keynote", asset_id=KEYNOTE.id, priority=10),
        PinningRule(keyword="crowdstrike", asset_id=CROWDSTRIKE.id, priority=1),
    ]
    pinned = _resolver(rules=rules).get_pinned_assets("CrowdStrike keynote")
    assert [asset.id for asset in pinned] == [KEYNOTE.id, CROWDSTRIKE.id]


def test_duplicate_targets_collapsed():
    rules = [
        PinningRule(keyword="crowdstrike", asset_id=CROWDSTRIKE.id, priority=10),
        PinningRule(keyword="falcon", asset_id=CROWDSTRIKE.id, priority=3),
    ]
    store = FakeAssetStore(assets=ALL_ASSETS, rules=rules)

    pinned = PinningResolver(store).get_pinned_assets("crowdstrike falcon")

    assert [asset.id for asset in pinned] == [CROWDSTRIKE.id]
    assert store.fetched_ids == [[CROWDSTRIKE.id]]


def test_no_match_skips_asset_fetch():
    store = FakeAssetStore(assets=ALL_ASSETS, rules=PINNING_RULES)
    assert PinningResolver(store).get_pinned_assets("brand refresh") == []
    assert store.fetched_ids == []


def test_missing_asset_skipped():
    rules = [PinningRule(keyword="ghost", asset_id="deleted-asset", priority=1)]
    assert _resolver(rules=rules).get_pinned_assets("ghost story") == []


def test_rules_error_means_no_pins():
    resolver = _resolver(rules_error=RuntimeError("relation pinning_rules does not exist"))
    assert resolver.get_pinned_assets("CrowdStrike") == []


def test_asset_fetch_error_means_no_pins():
    resolver = _resolver(assets_error=RuntimeError("timeout"))
    assert resolver.get_pinned_assets("CrowdStrike") == []


def test_no_rules():
    assert _resolver(rules=[]).get_pinned_assets("CrowdStrike") == []


def test_match_asset_ids():
    assert _resolver().match_asset_ids("crowdstrike keynote") == [CROWDSTRIKE.id, KEYNOTE.id]
