# ad/ops/__init__.py

# Convenience re-exports so users can do: from wirtinger_flow.ad.ops import mul, sqrt, conj, ...
from .arithmetic import add, sub, mul, div, neg, pow, scale
from .transcendental import exp, log, sqrt
from .special import conj, real, imag, absolute, abs2

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "scale",
    "exp", "log", "sqrt",
    "conj", "real", "imag", "absolute", "abs2",
]
