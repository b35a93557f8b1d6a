import json

import pytest

from cardrank.models import Role
from cardrank.scoring import ModelArtifactError, ModelRepository
from cardrank.scoring.model import parse_role_model


def test_packaged_artifact_loads_both_roles(repository):
    hitter = repository.get_model(Role.HITTER)
    pitcher = repository.get_model("pitcher")
    assert hitter is not None and pitcher is not None
    assert "SS" in hitter.position_terms()
    assert "contact_right" in hitter.continuous_terms()
    assert set(pitcher.position_terms()) == {"SP", "RP", "CP"}


def test_non_linear_winner_is_ignored():
    assert parse_role_model({"winner": "xgboost", "linear": {"intercept": 1.0}}) is None
    assert parse_role_model({"winner": "linear", "linear": {"intercept": None}}) is None
    assert parse_role_model(None) is None


def test_non_finite_coefficients_are_dropped(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(
        '{"models": {"hitter": {"winner": "linear", "linear": '
        '{"intercept": 2.0, "coefficients": {"speed": NaN, "contact_left": 0.5, "blocking": "x"}}}}}',
        encoding="utf-8",
    )
    repo = ModelRepository(path)
    model = repo.get_model("hitter")
    assert model.coefficients == {"contact_left": 0.5}
    assert repo.get_model("pitcher") is None


def test_unreadable_artifact_raises(tmp_path):
    with pytest.raises(ModelArtifactError):
        ModelRepository(tmp_path / "missing.json").get_model("hitter")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ModelArtifactError):
        ModelRepository(broken).get_model("hitter")
    listing = tmp_path / "list.json"
    listing.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ModelArtifactError):
        ModelRepository(listing).get_model("hitter")


def test_repository_requires_a_source():
    with pytest.raises(ValueError):
        ModelRepository()
