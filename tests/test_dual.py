"""
Tests for the dual value type: value semantics, direction sets, NumPy interop.
"""

import numpy as np
import pytest

from wirtinger_flow import (
    ComplexDirectionDual,
    DirectionMismatchError,
    RealDirectionDual,
    Tag,
    extract_derivative,
    partials,
    seed,
    seed_real,
    value,
)
from wirtinger_flow.ad import ops

Z = 0.3 + 0.4j


class TestDualValue:
    """Construction, immutability and equality."""

    def test_seed_is_complex_direction_dual(self):
        d = seed(Z)
        assert isinstance(d, ComplexDirectionDual)
        assert value(d) == Z
        dz, dzbar = partials(d)
        assert dz.tolist() == [1.0]
        assert dzbar.tolist() == [0.0]

    def test_real_seed_is_real_direction_dual(self):
        d = seed_real(2.5)
        assert isinstance(d, RealDirectionDual)
        assert value(d) == 2.5
        assert partials(d).tolist() == [1.0]

    def test_immutable(self):
        d = seed(Z)
        with pytest.raises(AttributeError):
            d.val = 1.0

    def test_operations_return_new_values(self):
        d = seed(Z)
        e = d + 1
        assert e is not d
        assert value(d) == Z
        assert value(e) == Z + 1

    def test_equality_is_by_primal_value(self):
        d = seed(Z)
        assert d == Z
        assert Z == d
        assert d != Z + 1
        assert hash(d) == hash(Z)
        assert seed(0j) == 0

    def test_truthiness_follows_the_primal(self):
        assert not seed(0j)
        assert not seed_real(0.0)
        assert seed(Z)
        assert bool(seed(0j) + 1) is True
        assert not Tag("t").constant(0.0)

    def test_ordering_on_real_primals(self):
        s = seed_real(2.0)
        assert s > 0
        assert s >= 2.0
        assert not s < 1.0

    def test_conversion_to_plain_number_is_refused(self):
        with pytest.raises(TypeError):
            complex(seed(Z))
        with pytest.raises(TypeError):
            float(seed_real(1.0))

    def test_constant_embedding_has_zero_partials(self):
        c = Tag("t").constant(Z)
        assert c == Z
        dz, dzbar = partials(c)
        assert not dz.any() and not dzbar.any()

    def test_repr_mentions_token(self):
        assert "token='blob3'" in repr(seed(Z, "blob3"))


class TestDirectionSets:
    """Combining duals with incompatible seeds fails loudly."""

    def test_different_tokens(self):
        with pytest.raises(DirectionMismatchError):
            seed(Z, "a") + seed(Z, "b")

    def test_different_counts(self):
        with pytest.raises(DirectionMismatchError):
            seed(Z, "a", 0, 2) * seed(Z, "a", 0, 1)

    def test_different_kinds(self):
        with pytest.raises(DirectionMismatchError):
            seed(Z, "a") / seed_real(1.0, "a")

    def test_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            seed(Z, "a") - seed(Z, "b")

    def test_direction_count_is_preserved(self):
        x = seed(Z, "j", 1, 3)
        y = ops.sqrt(x * x.conjugate() + 1) / x
        assert y.tag == Tag("j", "complex", 3)
        assert all(len(p) == 3 for p in y.partials)

    def test_invalid_tags(self):
        with pytest.raises(ValueError):
            Tag(None, "quaternion")
        with pytest.raises(ValueError):
            Tag(None, "complex", 0)


class TestPower:

    def test_integer_power(self):
        dz, dzbar = extract_derivative(None, seed(Z) ** 3)
        assert np.isclose(dz, 3 * Z ** 2)
        assert dzbar == 0

    def test_zero_power_is_constant(self):
        d = seed(Z) ** 0
        assert d == 1
        assert extract_derivative(None, d) == (0, 0)

    def test_dual_exponent(self):
        dz, dzbar = extract_derivative(None, 2 ** seed(Z))
        assert np.isclose(dz, np.log(2) * 2 ** Z)
        assert abs(dzbar) < 1e-15


class TestNumpyInterop:
    """Duals inside NumPy expressions and object arrays."""

    def test_numpy_scalar_operands(self):
        d = np.float64(2.0) * seed(Z)
        assert isinstance(d, ComplexDirectionDual)
        assert value(d) == 2 * Z
        d = np.complex128(1j) + seed(Z)
        assert value(d) == 1j + Z

    def test_ufuncs_on_scalar_duals(self):
        d = seed(Z)
        assert isinstance(np.sqrt(d), ComplexDirectionDual)
        assert value(np.exp(d)) == np.exp(Z)
        assert value(np.log(d)) == np.log(Z)
        assert value(np.conjugate(d)) == Z.conjugate()
        assert value(np.abs(d)) == abs(Z)

    def test_array_with_dual_operand(self):
        out = np.array([1.0, 2.0]) + seed(Z)
        assert out.dtype == object
        np.testing.assert_array_equal(value(out), [1.0 + Z, 2.0 + Z])

    def test_object_array_ufuncs(self):
        arr = np.empty(2, dtype=object)
        arr[0], arr[1] = seed(Z), 2 * seed(Z)
        roots = np.sqrt(arr)
        np.testing.assert_allclose(value(roots), np.sqrt([Z, 2 * Z]))
        dz, dzbar = extract_derivative(None, roots)
        np.testing.assert_allclose(dz, [0.5 / np.sqrt(Z), 1.0 / np.sqrt(2 * Z)])
        np.testing.assert_array_equal(dzbar, [0, 0])

    def test_unsupported_ufunc_is_refused(self):
        with pytest.raises(TypeError):
            np.sin(seed(Z))
