"""
Built-in component catalog.

Names follow the recommender toolkit's package layout so that existing
configuration scripts resolve without edits. Parameter defaults are the
toolkit's declared defaults.
"""

import os

from recconfig.components.spec import (
    ComponentKind,
    ComponentSpec,
    ParameterKind,
    ParameterSpec,
)

BASE_PACKAGE = "org.grouplens.lenskit"


def _core_parameters():
    """Parameters every recommender module accepts under ``module.core``."""
    return [
        ParameterSpec(
            path="core.baseline",
            kind=ParameterKind.COMPONENT,
            component_kind=ComponentKind.BASELINE,
            description="Baseline predictor used for normalization and fallback",
        ),
        ParameterSpec(
            path="core.meanDamping",
            kind=ParameterKind.FLOAT,
            default=0.0,
            minimum=0,
            description="Bayesian damping applied to baseline means",
        ),
        ParameterSpec(
            path="core.threadCount",
            kind=ParameterKind.INT,
            default=os.cpu_count() or 1,
            minimum=1,
            description="Threads used while building models",
        ),
        ParameterSpec(
            path="core.minRating",
            kind=ParameterKind.FLOAT,
            default=1.0,
            description="Lowest value of the rating scale",
        ),
        ParameterSpec(
            path="core.maxRating",
            kind=ParameterKind.FLOAT,
            default=5.0,
            description="Highest value of the rating scale",
        ),
    ]


def _knn_parameters():
    return [
        ParameterSpec(
            path="knn.similarityDamping",
            kind=ParameterKind.FLOAT,
            default=100.0,
            minimum=0,
            description="Damping term added to the similarity denominator",
        ),
        ParameterSpec(
            path="knn.neighborhoodSize",
            kind=ParameterKind.INT,
            default=20,
            minimum=1,
            description="Neighbors considered per prediction",
        ),
        ParameterSpec(
            path="knn.similarity",
            kind=ParameterKind.COMPONENT,
            component_kind=ComponentKind.SIMILARITY,
            default=f"{BASE_PACKAGE}.knn.CosineSimilarity",
            description="Vector similarity function",
        ),
        ParameterSpec(
            path="knn.normalizer",
            kind=ParameterKind.COMPONENT,
            component_kind=ComponentKind.NORMALIZER,
            description="Rating vector normalizer applied before similarity",
        ),
    ]


def _svd_parameters():
    return [
        ParameterSpec(
            path="featureCount",
            kind=ParameterKind.INT,
            default=100,
            minimum=1,
            description="Number of latent features",
        ),
        ParameterSpec(
            path="learningRate",
            kind=ParameterKind.FLOAT,
            default=0.001,
            minimum=0,
            description="Gradient descent learning rate",
        ),
        ParameterSpec(
            path="regularization",
            kind=ParameterKind.FLOAT,
            default=0.015,
            minimum=0,
            description="Gradient descent regularization term",
        ),
        ParameterSpec(
            path="iterationCount",
            kind=ParameterKind.INT,
            default=0,
            minimum=0,
            description="Training epochs per feature; 0 trains until the threshold",
        ),
        ParameterSpec(
            path="trainingThreshold",
            kind=ParameterKind.FLOAT,
            default=1e-5,
            minimum=0,
            description="Error improvement below which training of a feature stops",
        ),
        ParameterSpec(
            path="clampingFunction",
            kind=ParameterKind.COMPONENT,
            component_kind=ComponentKind.CLAMP,
            default=f"{BASE_PACKAGE}.svd.IdentityClamp",
            description="Function applied to intermediate predictions",
        ),
    ]


def builtin_components():
    """Return fresh ComponentSpec instances for the built-in catalog."""
    modules = [
        ComponentSpec(
            name=f"{BASE_PACKAGE}.knn.item.ItemRecommenderModule",
            kind=ComponentKind.MODULE,
            aliases=["ItemItem"],
            description="Item-item collaborative filtering",
            parameters=_knn_parameters() + _core_parameters(),
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.knn.user.UserRecommenderModule",
            kind=ComponentKind.MODULE,
            aliases=["UserUser"],
            description="User-user collaborative filtering",
            parameters=_knn_parameters() + _core_parameters(),
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.svd.GradientDescentSVDModule",
            kind=ComponentKind.MODULE,
            aliases=["FunkSVD"],
            description="Matrix factorization trained by gradient descent",
            parameters=_svd_parameters() + _core_parameters(),
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.slopeone.SlopeOneModule",
            kind=ComponentKind.MODULE,
            aliases=["SlopeOne"],
            description="Slope One rating prediction",
            parameters=_core_parameters(),
        ),
    ]

    baselines = [
        ComponentSpec(
            name=f"{BASE_PACKAGE}.baseline.{short}",
            kind=ComponentKind.BASELINE,
            description=description,
        )
        for short, description in (
            ("ConstantPredictor", "Predicts a fixed value"),
            ("GlobalMeanPredictor", "Predicts the global mean rating"),
            ("UserMeanPredictor", "Predicts the user's mean rating"),
            ("ItemMeanPredictor", "Predicts the item's mean rating"),
            ("ItemUserMeanPredictor", "Item mean plus the user's mean offset"),
        )
    ]

    others = [
        ComponentSpec(
            name=f"{BASE_PACKAGE}.svd.RatingRangeClamp",
            kind=ComponentKind.CLAMP,
            description="Clamps values to the rating scale",
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.svd.IdentityClamp",
            kind=ComponentKind.CLAMP,
            description="Leaves values unchanged",
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.knn.CosineSimilarity",
            kind=ComponentKind.SIMILARITY,
            description="Cosine similarity of rating vectors",
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.knn.PearsonCorrelation",
            kind=ComponentKind.SIMILARITY,
            description="Pearson correlation of co-rated items",
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.norm.BaselineSubtractingNormalizer",
            kind=ComponentKind.NORMALIZER,
            description="Subtracts baseline predictions",
        ),
        ComponentSpec(
            name=f"{BASE_PACKAGE}.norm.MeanVarianceNormalizer",
            kind=ComponentKind.NORMALIZER,
            description="Centers and scales by the vector's mean and variance",
        ),
    ]

    return modules + baselines + others
