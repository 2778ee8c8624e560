"""
Tests for thin categories, functor validation and natural transformations
"""

import pytest
import numpy as np

from thin_categories import (
    ThinCategory,
    Functor,
    build_category,
    has_arrow,
    is_valid_functor,
    create_functor,
    exists_transformation,
    ValidationError,
    ContractViolation,
    UnknownObjectError,
)
from thin_categories import constants


@pytest.fixture
def chain():
    return ThinCategory.from_generators(["a", "b", "c"], [("a", "b"), ("b", "c")], name="C")


@pytest.fixture
def arrow():
    return ThinCategory.from_generators(["x", "y"], [("x", "y")], name="D")


class TestThinCategory:
    def test_from_generators(self, chain):
        assert chain.objects == ("a", "b", "c")
        assert chain.relation["a"] == {"a", "b", "c"}
        assert chain.relation["b"] == {"b", "c"}
        assert chain.relation["c"] == {"c"}
        assert chain.name == "C"

    def test_default_name(self):
        cat = ThinCategory(["a"], {"a": {"a"}})
        assert cat.name == constants.DEFAULT_CATEGORY_NAME

    def test_preclosed_relation(self):
        cat = ThinCategory(["x", "y"], {"x": {"x", "y"}, "y": {"y"}})
        assert cat.has_arrow("x", "y")
        assert not cat.has_arrow("y", "x")

    def test_invalid_key_rejected(self):
        with pytest.raises(ValidationError):
            ThinCategory(["x"], {"x": {"x"}, "q": {"x"}})

    def test_invalid_value_rejected(self):
        with pytest.raises(ValidationError):
            ThinCategory(["x"], {"x": {"x", "q"}})

    def test_duplicate_object_rejected(self):
        with pytest.raises(ValidationError):
            ThinCategory(["x", "x"], {"x": {"x"}})

    def test_preclosed_relation_trusted_by_default(self):
        cat = ThinCategory(["a", "b", "c"], {"a": {"b"}, "b": {"c"}})
        assert not cat.has_arrow("a", "a")
        assert not cat.has_arrow("a", "c")
        assert not cat.is_preorder()

    def test_verify_rejects_non_reflexive(self):
        with pytest.raises(ValidationError):
            ThinCategory(["a", "b"], {"a": {"a", "b"}}, verify=True)

    def test_verify_rejects_non_transitive(self):
        relation = {"a": {"a", "b"}, "b": {"b", "c"}, "c": {"c"}}
        with pytest.raises(ValidationError):
            ThinCategory(["a", "b", "c"], relation, verify=True)

    def test_verify_accepts_preorder(self):
        relation = {"a": {"a", "b"}, "b": {"b"}}
        cat = ThinCategory(["a", "b"], relation, verify=True)
        assert cat.is_preorder()

    def test_verify_default_from_constants(self, monkeypatch):
        monkeypatch.setattr(constants, "VERIFY_PRECLOSED_RELATIONS", True)
        with pytest.raises(ValidationError):
            ThinCategory(["a"], {})

    def test_missing_keys_have_no_arrows(self):
        cat = ThinCategory(["a", "b"], {"a": {"a"}})
        assert cat.relation["b"] == frozenset()

    def test_unknown_source_is_lookup_failure(self, chain):
        with pytest.raises(UnknownObjectError):
            chain.has_arrow("q", "a")
        with pytest.raises(KeyError):
            chain.has_arrow("q", "a")

    def test_unknown_target_has_no_arrow(self, chain):
        assert not chain.has_arrow("a", "q")

    def test_unhashable_target_has_no_arrow(self, chain):
        assert not chain.has_arrow("a", ["b"])
        assert ["b"] not in chain

    def test_arrows(self, arrow):
        assert list(arrow.arrows()) == [("x", "x"), ("x", "y"), ("y", "y")]

    def test_container_protocol(self, chain):
        assert "a" in chain
        assert "q" not in chain
        assert len(chain) == 3
        assert list(chain) == ["a", "b", "c"]
        assert chain.index_of("c") == 2

    def test_immutable_views(self, chain):
        with pytest.raises(TypeError):
            chain.relation["a"] = frozenset()
        with pytest.raises(ValueError):
            chain.reachability[0, 2] = False

    def test_identity_equality(self):
        first = ThinCategory.from_generators(["x"], [])
        second = ThinCategory.from_generators(["x"], [])
        assert first == first
        assert first != second


class TestBuildCategory:
    def test_mapping_is_closed_relation(self):
        cat = build_category(["x", "y"], {"x": {"x", "y"}, "y": {"y"}})
        assert cat.has_arrow("x", "y")

    def test_pairs_are_generators(self):
        cat = build_category(["a", "b", "c"], [("a", "b"), ("b", "c")])
        assert cat.has_arrow("a", "c")
        assert cat.is_preorder()

    def test_module_level_has_arrow(self, chain):
        assert has_arrow(chain, "a", "c")
        assert not has_arrow(chain, "c", "a")

    def test_bad_pairs_abort(self):
        with pytest.raises(ValidationError):
            build_category(["a"], [("a", "z")])


class TestPreorderLaws:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_reflexive_and_transitive(self, seed):
        rng = np.random.default_rng(seed)
        objects = [f"o{i}" for i in range(6)]
        pairs = [
            (objects[int(i)], objects[int(j)])
            for i, j in rng.integers(0, len(objects), size=(8, 2))
        ]
        cat = build_category(objects, pairs)

        for obj in objects:
            assert cat.has_arrow(obj, obj)
        for a in objects:
            for b in objects:
                for c in objects:
                    if cat.has_arrow(a, b) and cat.has_arrow(b, c):
                        assert cat.has_arrow(a, c)


class TestFunctorValidation:
    def test_constant_map_is_valid(self, chain, arrow):
        assert is_valid_functor(chain, arrow, {"a": "x", "b": "x", "c": "x"})

    def test_monotone_map_is_valid(self, chain, arrow):
        assert is_valid_functor(chain, arrow, {"a": "x", "b": "y", "c": "y"})

    def test_order_reversing_map_is_invalid(self, chain, arrow):
        assert not is_valid_functor(chain, arrow, {"a": "y", "b": "x", "c": "x"})

    def test_incomplete_mapping_is_contract_violation(self, chain, arrow):
        with pytest.raises(ContractViolation):
            is_valid_functor(chain, arrow, {"a": "x", "b": "x"})

    def test_foreign_image_is_contract_violation(self, chain, arrow):
        with pytest.raises(ContractViolation):
            is_valid_functor(chain, arrow, {"a": "x", "b": "x", "c": "q"})

    def test_extra_keys_are_contract_violation(self, chain, arrow):
        with pytest.raises(ContractViolation):
            is_valid_functor(chain, arrow, {"a": "x", "b": "x", "c": "x", "zzz": "y"})
        with pytest.raises(ContractViolation):
            create_functor(chain, arrow, {"a": "x", "b": "x", "c": "x", "zzz": "y"})

    def test_create_functor(self, chain, arrow):
        functor = create_functor(chain, arrow, {"a": "x", "b": "y", "c": "y"})
        assert isinstance(functor, Functor)
        assert functor.source is chain
        assert functor.target is arrow
        assert functor("b") == "y"
        assert functor["a"] == "x"
        assert functor.images() == ("x", "y", "y")

    def test_create_functor_returns_none_when_invalid(self, chain, arrow):
        assert create_functor(chain, arrow, {"a": "y", "b": "x", "c": "x"}) is None

    def test_functor_mapping_is_copied(self, chain, arrow):
        mapping = {"a": "x", "b": "x", "c": "x"}
        functor = create_functor(chain, arrow, mapping)
        mapping["a"] = "y"
        assert functor("a") == "x"
        with pytest.raises(TypeError):
            functor.mapping["a"] = "y"

    def test_functor_equality(self, chain, arrow):
        mapping = {"a": "x", "b": "y", "c": "y"}
        F = create_functor(chain, arrow, mapping)
        G = create_functor(chain, arrow, dict(mapping))
        assert F == G
        assert hash(F) == hash(G)
        assert len({F, G}) == 1

    def test_functors_on_different_categories_differ(self, arrow):
        first = ThinCategory.from_generators(["a"], [])
        second = ThinCategory.from_generators(["a"], [])
        assert create_functor(first, arrow, {"a": "x"}) != create_functor(second, arrow, {"a": "x"})


class TestNaturalTransformation:
    def test_exists_pointwise(self, chain, arrow):
        F1 = create_functor(chain, arrow, {"a": "x", "b": "x", "c": "x"})
        F2 = create_functor(chain, arrow, {"a": "x", "b": "y", "c": "y"})
        assert exists_transformation(F1, F2)
        assert not exists_transformation(F2, F1)

    def test_reflexive(self, chain, arrow):
        F = create_functor(chain, arrow, {"a": "x", "b": "y", "c": "y"})
        assert exists_transformation(F, F)

    def test_mismatched_source(self, arrow):
        cat1 = ThinCategory.from_generators(["a"], [], name="C1")
        cat2 = ThinCategory.from_generators(["a"], [], name="C2")
        F = create_functor(cat1, arrow, {"a": "x"})
        G = create_functor(cat2, arrow, {"a": "x"})
        with pytest.raises(ContractViolation):
            exists_transformation(F, G)

    def test_mismatched_target(self, chain, arrow):
        other = ThinCategory.from_generators(["x", "y"], [("x", "y")], name="D2")
        F = create_functor(chain, arrow, {"a": "x", "b": "x", "c": "x"})
        G = create_functor(chain, other, {"a": "x", "b": "x", "c": "x"})
        with pytest.raises(ContractViolation):
            exists_transformation(F, G)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
