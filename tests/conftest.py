from __future__ import annotations

import pytest

from cardrank.config.settings import DEFAULT_MODEL_PATH
from cardrank.ingest import ItemNormalizer
from cardrank.models import RawCardItem
from cardrank.scoring import ModelRepository, PositionProfileTable

from tests.factories import hitter_payload


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def repository() -> ModelRepository:
    return ModelRepository(DEFAULT_MODEL_PATH)


@pytest.fixture
def profiles(repository: ModelRepository) -> PositionProfileTable:
    return PositionProfileTable(repository)


@pytest.fixture
def normalizer(profiles: PositionProfileTable) -> ItemNormalizer:
    return ItemNormalizer(profiles)


@pytest.fixture
def shortstop() -> RawCardItem:
    return RawCardItem.model_validate(hitter_payload())
