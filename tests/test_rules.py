"""
Tests for the Wirtinger rule table: closed-form derivatives, the
holomorphic-zero law, agreement with finite differences, value transparency,
and the singularity policy.
"""

import numpy as np
import pytest

from wirtinger_flow import (
    SingularityError,
    derivative,
    get_config,
    seed,
    use_config,
    value,
)
from wirtinger_flow.ad import ops
from wirtinger_flow.flow.bumping import wirtinger_fd

BIGEPS = 1000 * np.finfo(float).eps

# upper half plane keeps sqrt(z-1)*sqrt(z+1) on one branch
POINTS = [0.3 + 0.7j, 0.8 + 0.25j, -0.4 + 0.6j, 0.65 + 0.45j]


def close(a, b, tol=BIGEPS):
    return abs(a - b) < tol


def joukowsky_like(z):
    return ops.real(z - ops.sqrt(z - 1) * ops.sqrt(z + 1))


HOLOMORPHIC = {
    "log_sqrt": lambda z: ops.log(ops.sqrt(z)),
    "mixed": lambda z: z + ops.sqrt(ops.log(z)) - 1 / z ** 2,
    "exp_div": lambda z: ops.exp(z) / (z + 2),
    "power": lambda z: (z - 0.5j) ** 3,
}

GENERAL = {
    "conj": lambda z: z.conjugate(),
    "cauchy": lambda z: 0.5j / (np.pi * z.conjugate()),
    "abs": lambda z: abs(z),
    "abs2": ops.abs2,
    "joukowsky_like": joukowsky_like,
    "nested": lambda z: ops.log(abs(ops.sqrt(z)) + z.conjugate()) * z,
    **HOLOMORPHIC,
}


@pytest.mark.parametrize("z", POINTS)
class TestClosedForms:
    """Derivatives with known analytic answers."""

    def test_log_sqrt(self, z):
        dz, dzbar = derivative(lambda v: ops.log(ops.sqrt(v)), z)
        assert close(dz, 0.5 / z)
        assert dzbar == 0

    def test_conjugate(self, z):
        dz, dzbar = derivative(lambda v: v.conjugate(), z)
        assert dz == 0 and dzbar == 1

    def test_cauchy_kernel_form(self, z):
        dz, dzbar = derivative(lambda v: 0.5j / (np.pi * v.conjugate()), z)
        assert close(dz, 0)
        assert close(dzbar, -0.5j / (np.pi * z.conjugate() ** 2))

    def test_shifted_cauchy_kernel_form(self, z):
        z0 = -0.2 - 0.3j
        dz, dzbar = derivative(lambda v: 0.5j / (np.pi * (v - z0).conjugate()), z)
        assert close(dz, 0)
        assert close(dzbar, -0.5j / (np.pi * (z - z0).conjugate() ** 2))

    def test_absolute_value(self, z):
        dz, dzbar = derivative(abs, z)
        assert close(dz, z.conjugate() / (2 * abs(z)))
        assert close(dzbar, z / (2 * abs(z)))

    def test_mixed_holomorphic(self, z):
        dz, dzbar = derivative(HOLOMORPHIC["mixed"], z)
        expected = 1 + 0.5 / (np.sqrt(np.log(z)) * z) + 2 / z ** 3
        assert close(dz, expected)
        assert dzbar == 0

    def test_real_part_of_joukowsky_inverse(self, z):
        dz, dzbar = derivative(joukowsky_like, z)
        expected = 0.5 * (1 - 0.5 * np.sqrt((z + 1) / (z - 1)) - 0.5 * np.sqrt((z - 1) / (z + 1)))
        assert close(dz, expected)
        assert close(dzbar, np.conj(expected))

    def test_real_and_imag(self, z):
        assert derivative(lambda v: v.real, z) == (0.5, 0.5)
        assert derivative(lambda v: v.imag, z) == (-0.5j, 0.5j)


@pytest.mark.parametrize("name", sorted(HOLOMORPHIC))
@pytest.mark.parametrize("z", POINTS)
def test_holomorphic_functions_have_zero_conjugate_derivative(name, z):
    _, dzbar = derivative(HOLOMORPHIC[name], z)
    assert abs(dzbar) < 1e-12


@pytest.mark.parametrize("name", sorted(GENERAL))
@pytest.mark.parametrize("z", POINTS)
def test_agreement_with_finite_differences(name, z):
    f = GENERAL[name]
    dz, dzbar = derivative(f, z)
    # |f| reaches ~3 in this grid, too large for rounding at the default step
    dz_fd, dzbar_fd = wirtinger_fd(f, z, step=1e-7)
    tol = get_config().fd_tol
    assert abs(dz - dz_fd) < tol
    assert abs(dzbar - dzbar_fd) < tol


@pytest.mark.parametrize("name", ["abs", "joukowsky_like", "cauchy"])
@pytest.mark.parametrize("z", [0.3 + 0.7j, 0.65 + 0.45j])
def test_agreement_with_finite_differences_at_default_step(name, z):
    f = GENERAL[name]
    dz, dzbar = derivative(f, z)
    dz_fd, dzbar_fd = wirtinger_fd(f, z)
    assert abs(dz - dz_fd) < 5e-6
    assert abs(dzbar - dzbar_fd) < 5e-6


@pytest.mark.parametrize("name", sorted(GENERAL))
@pytest.mark.parametrize("z", POINTS)
def test_primal_value_matches_plain_arithmetic(name, z):
    f = GENERAL[name]
    assert value(f(seed(z))) == f(z)


def test_real_valued_output_has_conjugate_symmetric_partials():
    z = POINTS[0]
    dz, dzbar = derivative(lambda v: ops.abs2(ops.exp(v) - v), z)
    assert close(dzbar, np.conj(dz))


class TestSingularityPolicy:
    """Behaviour at poles under the two policies."""

    def test_default_policy(self):
        assert get_config().singularity == "propagate"

    def test_python_complex_division_by_zero_propagates(self):
        with pytest.raises(ZeroDivisionError):
            seed(1 + 0j) / 0

    def test_numpy_division_by_zero_propagates(self):
        with np.errstate(all="ignore"):
            d = seed(np.complex128(1 + 0j)) / np.complex128(0)
        assert not np.isfinite(value(d))

    def test_log_at_zero_propagates(self):
        with np.errstate(all="ignore"):
            d = ops.log(seed(np.complex128(0)))
        assert np.isneginf(value(d).real)

    def test_raise_policy_on_python_complex(self):
        with use_config(singularity="raise"):
            with pytest.raises(SingularityError):
                seed(1 + 0j) / 0

    def test_raise_policy_on_numpy_scalars(self):
        with use_config(singularity="raise"), np.errstate(all="ignore"):
            with pytest.raises(SingularityError):
                seed(np.complex128(1 + 0j)) / np.complex128(0)
            with pytest.raises(SingularityError):
                ops.log(seed(np.complex128(0)))

    def test_singularity_error_is_arithmetic_error(self):
        with use_config(singularity="raise"):
            with pytest.raises(ArithmeticError):
                seed(1 + 0j) / 0

    def test_non_finite_operands_are_not_singularities(self):
        with use_config(singularity="raise"), np.errstate(all="ignore"):
            d = seed(np.complex128(np.inf)) + 1
        assert not np.isfinite(value(d))


class TestConfig:

    def test_use_config_restores_previous(self):
        before = get_config()
        with use_config(fd_step=1e-8) as cfg:
            assert cfg.fd_step == 1e-8
            assert get_config() is cfg
        assert get_config() is before

    def test_use_config_restores_on_error(self):
        before = get_config()
        with pytest.raises(RuntimeError):
            with use_config(singularity="raise"):
                raise RuntimeError("boom")
        assert get_config() is before

    def test_invalid_settings(self):
        with pytest.raises(ValueError):
            with use_config(singularity="ignore"):
                pass
        with pytest.raises(ValueError):
            with use_config(fd_step=0.0):
                pass
