import pytest

from cardrank.config import FIELDING_POSITIONS, get_profile, iter_profiles, normalize_weights
from cardrank.config.positions import BATTING_MAX, FIELDING_MAX
from cardrank.models import RawCardItem, Role
from cardrank.scoring import META_CAP, MetaScorer, ModelRepository, PositionProfileTable


def test_eight_fielding_profiles_with_normalized_weights():
    assert set(FIELDING_POSITIONS) == {"C", "1B", "2B", "3B", "SS", "LF", "CF", "RF"}
    for profile in iter_profiles():
        positive = [w for w in profile.weights.values() if w > 0]
        assert sum(positive) == pytest.approx(1.0)
        assert all(w >= 0 for w in profile.weights.values())
    assert get_profile("dh") is None
    assert get_profile("SP") is None
    assert get_profile(" ss ").position == "SS"


def test_normalize_weights_drops_non_positive_entries():
    assert normalize_weights({"a": 3.0, "b": 1.0, "c": -2.0}) == {"a": 0.75, "b": 0.25, "c": 0.0}
    assert normalize_weights({"a": 0.0}) == {"a": 0.0}


def test_max_card_pins_listed_attributes_to_ceilings():
    profile = get_profile("C")
    card = profile.max_card()
    assert card["blocking"] == FIELDING_MAX
    assert card["power_left"] == BATTING_MAX
    assert "hitting_durability" not in card
    assert "baserunning_aggression" not in card


@pytest.mark.parametrize("position", ["C", "1B", "2B", "3B", "SS", "LF", "CF", "RF"])
def test_reference_max_calibrates_to_cap(profiles, position):
    profile = get_profile(position)
    reference = profiles.reference_max(position)
    assert reference == profiles.core_score(profile.max_card(), profile)
    assert profiles.calibration_scale(position) * reference == pytest.approx(META_CAP)

    card = RawCardItem(
        item_id=f"max-{position}",
        display_position=position,
        role=Role.HITTER,
        attributes=profile.max_card(),
    )
    meta = MetaScorer(profiles).compute(card, true_ovr=None)
    assert meta == pytest.approx(125.0)
    assert meta <= 125.0


def test_reference_max_is_memoized_per_table(repository):
    calls = []

    class CountingTable(PositionProfileTable):
        def _compute_reference(self, profile):
            calls.append(profile.position)
            return super()._compute_reference(profile)

    table = CountingTable(repository)
    first = table.reference_max("SS")
    assert table.reference_max("ss") == first
    assert calls == ["SS"]
    assert table.reference_max("DH") is None
    assert table.calibration_scale("DH") is None


def test_reference_falls_back_to_cap_without_model():
    table = PositionProfileTable(ModelRepository.from_payload({"models": {}}))
    assert table.reference_max("CF") == META_CAP
    assert table.calibration_scale("CF") == pytest.approx(1.0)
