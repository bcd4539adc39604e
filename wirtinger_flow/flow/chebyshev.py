"""
Chebyshev series on the extrema (Gauss-Lobatto) nodes.

Nodes run from -1 to 1:  s_j = cos(pi (N-1-j) / (N-1)),  j = 0..N-1.
The first-kind transform maps samples f(s_j) to coefficients a_n with

    f(s) = sum_n a_n T_n(s)

exactly for polynomials of degree < N. It is applied as a dense matrix so
plain arrays and object arrays of duals go through the same sequence of
multiply-adds, and the primal coefficients of a dual transform match the plain ones.
"""

from functools import lru_cache

import numpy as np


def nodes(N: int) -> np.ndarray:
    if N < 2:
        raise ValueError(f"need at least 2 Chebyshev nodes, got N={N}")
    return np.cos(np.pi * np.arange(N - 1, -1, -1) / (N - 1))


@lru_cache(maxsize=32)
def transform_matrix(N: int) -> np.ndarray:
    """(N, N) matrix taking node samples to coefficients (DCT-I with half-weighted ends)."""
    s = nodes(N)
    T = np.cos(np.outer(np.arange(N), np.arccos(np.clip(s, -1.0, 1.0))))
    w = np.ones(N)
    w[0] = w[-1] = 0.5
    M = (2.0 / (N - 1)) * T * w[None, :]
    M[0] *= 0.5
    M[-1] *= 0.5
    M.setflags(write=False)
    return M


def transform(values) -> np.ndarray:
    """Samples at ``nodes(N)`` -> first-kind coefficients a_0..a_{N-1}. Returns a new array."""
    values = np.asarray(values)
    M = transform_matrix(len(values))
    if values.dtype == object:
        out = np.empty(len(values), dtype=object)
        for n in range(len(values)):
            acc = 0.0
            for j in range(len(values)):
                acc = acc + M[n, j] * values[j]
            out[n] = acc
        return out
    out = np.zeros(len(values), dtype=np.result_type(values, float))
    for j in range(len(values)):
        out = out + M[:, j] * values[j]
    return out


def firstkind(coefficients, s):
    """Evaluate sum_n a_n T_n(s) at points s in [-1, 1]."""
    s = np.atleast_1d(np.asarray(s, dtype=float))
    T = np.cos(np.outer(np.arccos(np.clip(s, -1.0, 1.0)), np.arange(len(coefficients))))
    return np.dot(T, np.asarray(coefficients))
