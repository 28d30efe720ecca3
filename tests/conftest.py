"""
Pytest configuration and fixtures
"""
import pytest

from recconfig.core.config import create_config
from recconfig.components.registry import default_registry

ITEMITEM_SCRIPT = """\
/* Configuration script to run a pretty good item-item recommender. */
rec.name = "ItemItem"
rec.module = org.grouplens.lenskit.knn.item.ItemRecommenderModule
rec.module.knn.similarityDamping = 50
rec.module.core.baseline = org.grouplens.lenskit.baseline.ItemUserMeanPredictor
"""

FUNKSVD_SCRIPT = """\
// Configure the gradient descent SVD to behave mostly like FunkSVD
rec.name = "FunkSVD"
rec.module = org.grouplens.lenskit.svd.GradientDescentSVDModule
// rec.module.core.meanDamping = 25
rec.module.core.baseline = org.grouplens.lenskit.baseline.ItemUserMeanPredictor
rec.module.clampingFunction = org.grouplens.lenskit.svd.RatingRangeClamp
"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep loader settings from the developer's shell out of the tests"""
    for name in (
        "RECCONFIG_STRICT",
        "RECCONFIG_SCRIPT_DIRS",
        "RECCONFIG_ROOT_NAME",
        "RECCONFIG_CATALOG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def loader_config():
    return create_config(strict=True, script_dirs=[])


@pytest.fixture
def script_dir(tmp_path):
    """Directory holding both reference scripts"""
    (tmp_path / "itemitem.rec").write_text(ITEMITEM_SCRIPT)
    (tmp_path / "funksvd.rec").write_text(FUNKSVD_SCRIPT)
    return tmp_path
