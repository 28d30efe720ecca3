"""
Tests for the component catalog, registry and parameter validation
"""
import json

import pytest
from pydantic import ValidationError

from recconfig.core.errors import (
    AmbiguousComponentError,
    ConfigurationError,
    ConfigurationValidationError,
    TypeMismatchError,
    UnknownPathError,
    UnresolvedComponentError,
)
from recconfig.core.reference import ComponentReference
from recconfig.components.registry import ComponentRegistry
from recconfig.components.spec import (
    ComponentKind,
    ComponentSpec,
    ParameterKind,
    ParameterSpec,
)
from recconfig.components.validation import validate_parameters

ITEM_MODULE = "org.grouplens.lenskit.knn.item.ItemRecommenderModule"
SVD_MODULE = "org.grouplens.lenskit.svd.GradientDescentSVDModule"
ITEM_USER_MEAN = "org.grouplens.lenskit.baseline.ItemUserMeanPredictor"


def test_builtin_catalog_kinds(registry):
    assert len(registry.modules()) == 4
    assert len(registry.by_kind(ComponentKind.BASELINE)) == 5
    assert len(registry.by_kind("clamp")) == 2
    assert ITEM_MODULE in registry
    assert "org.example.Nothing" not in registry


def test_resolve_by_name_alias_and_short_name(registry):
    spec = registry.resolve(ITEM_MODULE)
    assert spec.kind == ComponentKind.MODULE
    assert registry.resolve("ItemItem") is spec
    assert registry.resolve(ComponentReference(ITEM_MODULE)) is spec
    assert registry.resolve("ItemUserMeanPredictor").name == ITEM_USER_MEAN


def test_dotted_names_must_match_exactly(registry):
    with pytest.raises(UnresolvedComponentError):
        registry.resolve("org.other.baseline.ItemUserMeanPredictor")
    with pytest.raises(UnresolvedComponentError) as excinfo:
        registry.resolve("NoSuchThing", kind=ComponentKind.CLAMP)
    assert excinfo.value.kind == "clamp"


def test_ambiguous_short_names():
    registry = ComponentRegistry(
        [
            ComponentSpec(name="a.Shared", kind=ComponentKind.CLAMP),
            ComponentSpec(name="b.Shared", kind=ComponentKind.BASELINE),
        ]
    )
    with pytest.raises(AmbiguousComponentError) as excinfo:
        registry.resolve("Shared")
    assert excinfo.value.candidates == ["a.Shared", "b.Shared"]
    assert registry.resolve("Shared", kind=ComponentKind.BASELINE).name == "b.Shared"


def test_register_conflicts(registry):
    duplicate = ComponentSpec(name=ITEM_MODULE, kind=ComponentKind.MODULE)
    with pytest.raises(ValueError):
        registry.register(duplicate)

    alias_clash = ComponentSpec(name="org.example.Other", kind=ComponentKind.MODULE, aliases=["ItemItem"])
    with pytest.raises(ValueError):
        registry.register(alias_clash)

    registry.register(duplicate, replace=True)
    assert registry.resolve(ITEM_MODULE).parameters == []
    with pytest.raises(UnresolvedComponentError):
        registry.resolve("ItemItem")


def test_load_catalog(tmp_path, registry):
    catalog = tmp_path / "catalog.json"
    catalog.write_text(
        json.dumps(
            [
                {
                    "name": "org.example.PopularityModule",
                    "kind": "module",
                    "aliases": ["Popular"],
                    "parameters": [
                        {"path": "windowDays", "kind": "int", "default": 7, "minimum": 1}
                    ],
                },
                {"name": "org.example.ZeroBaseline", "kind": "baseline"},
            ]
        )
    )
    assert registry.load_catalog(catalog) == 2
    module = registry.resolve("Popular")
    assert module.defaults() == {"windowDays": 7}
    assert registry.resolve("ZeroBaseline").kind == ComponentKind.BASELINE


def test_load_catalog_errors(tmp_path, registry):
    bad = tmp_path / "bad.json"
    bad.write_text('[{"name": "org.example.X", "kind": "gizmo"}]')
    with pytest.raises(ConfigurationError):
        registry.load_catalog(bad)
    with pytest.raises(ConfigurationError):
        registry.load_catalog(tmp_path / "missing.json")


def test_spec_models_check_their_shape():
    with pytest.raises(ValidationError):
        ParameterSpec(path="x", kind=ParameterKind.COMPONENT)
    with pytest.raises(ValidationError):
        ParameterSpec(path="x", kind=ParameterKind.INT, component_kind=ComponentKind.CLAMP)
    with pytest.raises(ValidationError):
        ParameterSpec(path="bad..path", kind=ParameterKind.INT)
    with pytest.raises(ValidationError):
        ComponentSpec(
            name="org.example.B",
            kind=ComponentKind.BASELINE,
            parameters=[ParameterSpec(path="x", kind=ParameterKind.INT)],
        )


def test_module_defaults(registry):
    defaults = registry.resolve("ItemItem").defaults()
    assert defaults["knn.similarityDamping"] == 100.0
    assert defaults["knn.neighborhoodSize"] == 20
    assert defaults["knn.similarity"] == ComponentReference(
        "org.grouplens.lenskit.knn.CosineSimilarity"
    )
    assert "core.baseline" not in defaults

    svd = registry.resolve("FunkSVD").defaults()
    assert svd["regularization"] == 0.015
    assert svd["iterationCount"] == 0
    assert svd["clampingFunction"].short_name == "IdentityClamp"


def test_validate_coerces_values(registry):
    module = registry.resolve("ItemItem")
    validated = validate_parameters(
        module,
        {
            "knn.similarityDamping": 50,
            "knn.neighborhoodSize": 30.0,
            "core.baseline": ComponentReference("ItemUserMeanPredictor"),
        },
        registry,
    )
    assert validated["knn.similarityDamping"] == 50.0
    assert isinstance(validated["knn.similarityDamping"], float)
    assert validated["knn.neighborhoodSize"] == 30
    assert validated["core.baseline"] == ComponentReference(ITEM_USER_MEAN)


@pytest.mark.parametrize(
    "path,value",
    [
        ("knn.neighborhoodSize", 20.5),
        ("knn.neighborhoodSize", "many"),
        ("knn.neighborhoodSize", "30"),
        ("knn.similarityDamping", "50.0"),
        ("knn.similarityDamping", float("nan")),
        ("knn.similarityDamping", float("inf")),
        ("knn.neighborhoodSize", True),
        ("knn.neighborhoodSize", 0),
        ("knn.similarityDamping", -1),
        ("knn.similarityDamping", ComponentReference(ITEM_USER_MEAN)),
        ("core.baseline", "ItemUserMeanPredictor"),
        ("core.baseline", ComponentReference("org.grouplens.lenskit.svd.RatingRangeClamp")),
    ],
)
def test_validate_type_mismatches(registry, path, value):
    module = registry.resolve("ItemItem")
    with pytest.raises(ConfigurationValidationError) as excinfo:
        validate_parameters(module, {path: value}, registry)
    assert len(excinfo.value.errors) == 1
    assert isinstance(excinfo.value.errors[0], TypeMismatchError)
    assert excinfo.value.errors[0].path == f"module.{path}"


def test_validate_unresolved_component(registry):
    module = registry.resolve("FunkSVD")
    with pytest.raises(ConfigurationValidationError) as excinfo:
        validate_parameters(
            module, {"clampingFunction": ComponentReference("org.example.Nope")}, registry
        )
    assert isinstance(excinfo.value.errors[0], UnresolvedComponentError)


def test_unknown_paths_strict_and_lenient(registry):
    module = registry.resolve("FunkSVD")
    overrides = {"knn.similarityDamping": 50, "featureCount": 40}

    with pytest.raises(ConfigurationValidationError) as excinfo:
        validate_parameters(module, overrides, registry, source="funksvd.rec")
    assert [type(e) for e in excinfo.value.errors] == [UnknownPathError]
    assert excinfo.value.source == "funksvd.rec"

    validated = validate_parameters(module, overrides, registry, strict=False)
    assert validated == {"knn.similarityDamping": 50, "featureCount": 40}


def test_validate_collects_every_error(registry):
    module = registry.resolve("ItemItem")
    with pytest.raises(ConfigurationValidationError) as excinfo:
        validate_parameters(
            module,
            {"knn.neighborhoodSize": "x", "bogus": 1, "knn.similarityDamping": 10},
            registry,
        )
    assert len(excinfo.value.errors) == 2
    assert "2 configuration error(s)" in str(excinfo.value)
