import random

import pytest

from cardrank.config import FIELDING_POSITIONS, get_profile
from cardrank.models import HITTER_ATTRIBUTES, RawCardItem
from cardrank.scoring import FACETS, FacetComputer
from cardrank.scoring.facets import bunting_composite, facet_weights

from tests.factories import hitter_payload, pitcher_payload


def test_facet_bound_holds_for_random_cards(profiles):
    rng = random.Random(20250401)
    computer = FacetComputer(profiles)
    positions = list(FIELDING_POSITIONS) + ["DH"]
    for _ in range(300):
        attributes = {key: rng.uniform(0, 125) for key in HITTER_ATTRIBUTES if rng.random() > 0.1}
        position = rng.choice(positions)
        for facet in FACETS:
            value = computer.compute(attributes, position, facet)
            if value is not None:
                assert value <= 125.0


def test_shortstop_defense_outranks_power(profiles, shortstop):
    facets = FacetComputer(profiles).compute_all(shortstop)
    assert set(facets) == set(FACETS)
    assert facets["defense"] > facets["power"] + 5
    assert facets["defense"] > facets["contact"]


def test_pitchers_and_designated_hitters_have_no_facets(profiles):
    computer = FacetComputer(profiles)
    pitcher = RawCardItem.model_validate(pitcher_payload())
    dh = RawCardItem.model_validate(hitter_payload(display_position="DH", primary_position="DH"))
    assert all(value is None for value in computer.compute_all(pitcher).values())
    assert all(value is None for value in computer.compute_all(dh).values())


def test_facet_falls_back_to_primary_position(profiles):
    computer = FacetComputer(profiles)
    dh_with_home = RawCardItem.model_validate(hitter_payload(display_position="DH", primary_position="1B"))
    first_base = computer.compute(dh_with_home.attributes, "1B", "power")
    assert computer.compute_for_item(dh_with_home, "power") == pytest.approx(first_base)


def test_facet_weights_renormalize_after_boosts():
    weights = facet_weights(get_profile("LF").weights, "power", "LF")
    assert sum(w for w in weights.values() if w > 0) == pytest.approx(1.0)
    assert weights["power_left"] > get_profile("LF").weights["power_left"]
    running = facet_weights(get_profile("LF").weights, "baserunning", "LF")
    assert running["baserunning_aggression"] > 0


def test_vs_left_tracks_left_splits(profiles):
    computer = FacetComputer(profiles)
    lefty_masher = {"contact_left": 110.0, "power_left": 110.0, "contact_right": 50.0, "power_right": 50.0}
    assert computer.compute(lefty_masher, "LF", "vs_left") > computer.compute(lefty_masher, "LF", "vs_right")


def test_catcher_defense_weights_blocking():
    catcher = facet_weights(get_profile("C").weights, "defense", "C")
    shortstop = facet_weights(get_profile("SS").weights, "defense", "SS")
    assert catcher["blocking"] > 0
    assert shortstop["blocking"] == 0


def test_bunting_composite_and_unknown_facet(profiles):
    assert bunting_composite({"drag_bunting_ability": 100.0, "bunting_ability": 80.0, "speed": 90.0}) == pytest.approx(
        55.0 + 28.0 + 9.0
    )
    assert bunting_composite({}) == 0.0
    with pytest.raises(ValueError):
        FacetComputer(profiles).compute({}, "SS", "clutch")
