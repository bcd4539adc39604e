# ad/ops/arithmetic.py
"""
Wirtinger rule table for the arithmetic primitives.

Every channel (d/dz_k, d/dzbar_k, or d/dx_k) obeys the ordinary product and
quotient rules: multiplication and division are bilinear, not conjugating, so
the holomorphic and anti-holomorphic channels never mix here.
"""
import numpy as np

from ...config import get_config
from ..core.dual import Dual, make_dual
from ..core.errors import DirectionMismatchError, SingularityError


def _common_tag(*xs):
    """Tag shared by the dual operands; mixing different direction sets is a caller bug."""
    tag = None
    for x in xs:
        if not isinstance(x, Dual):
            continue
        if tag is None:
            tag = x.tag
        elif x.tag != tag:
            raise DirectionMismatchError(
                f"cannot combine duals with different directions: {tag} vs {x.tag}"
            )
    return tag


def _val(x):
    return x.val if isinstance(x, Dual) else x


def _parts(x, tag):
    return x.partials if isinstance(x, Dual) else tag.zero_partials()


def _finite(v) -> bool:
    return bool(np.all(np.isfinite(v)))


def _checked(out_val, *operands):
    """Apply the singularity policy to a freshly computed primal value."""
    if get_config().singularity == "raise" and not _finite(out_val):
        if all(_finite(_val(x)) for x in operands):
            raise SingularityError(f"non-finite result {out_val!r} from finite operands")
    return out_val


def _binary(x, y, f, rule):
    """
    Generic binary primitive:
      - out.val      = f(x.val, y.val)
      - out channels = rule(x.val, y.val, dx, dy), channel by channel
    Plain-number operands act as constants (zero partials).
    """
    tag = _common_tag(x, y)
    xv, yv = _val(x), _val(y)
    if tag is None:
        return f(xv, yv)
    out_val = _checked(f(xv, yv), x, y)
    partials = tuple(rule(xv, yv, dx, dy) for dx, dy in zip(_parts(x, tag), _parts(y, tag)))
    return make_dual(out_val, tag, partials)


def add(x, y): return _binary(x, y, lambda a, b: a + b, lambda a, b, da, db: da + db)
def sub(x, y): return _binary(x, y, lambda a, b: a - b, lambda a, b, da, db: da - db)
def mul(x, y): return _binary(x, y, lambda a, b: a * b, lambda a, b, da, db: da * b + a * db)


def div(x, y):
    """
    Quotient rule on each channel: d(u/v) = (du*v - u*dv) / v^2.

    At a zero denominator the host numeric type decides: Python complex raises
    ZeroDivisionError, NumPy scalars produce inf/nan.
    """
    try:
        return _binary(x, y, lambda a, b: a / b,
                       lambda a, b, da, db: (da * b - a * db) / (b * b))
    except ZeroDivisionError as exc:
        if get_config().singularity == "raise":
            raise SingularityError(f"division by zero: {_val(x)!r} / {_val(y)!r}") from exc
        raise


def neg(x):
    """
    Unary negation:
      out.val   = -x.val
      channels  = -dx
    """
    if not isinstance(x, Dual):
        return -x
    return make_dual(-x.val, x.tag, tuple(-p for p in x.partials))


def scale(x, c):
    """Multiply by a plain constant (no tag check needed)."""
    if not isinstance(x, Dual):
        return x * c
    return make_dual(_checked(x.val * c, x), x.tag, tuple(p * c for p in x.partials))


def pow(x, y):
    """
    Power:
      constant exponent p : d(u^p) = p * u^(p-1) * du     (holomorphic)
      dual exponent       : u^v = exp(v * log(u))         (composed)

    Principal branch, as for plain complex ``**``.
    """
    if isinstance(y, Dual):
        from .transcendental import exp, log
        _common_tag(x, y)
        return exp(mul(y, log(x)))
    if not isinstance(x, Dual):
        return x ** y
    if y == 0:
        return x.tag.constant(_checked(x.val ** y, x))
    out_val = _checked(x.val ** y, x)
    deriv = y * x.val ** (y - 1)
    return make_dual(out_val, x.tag, tuple(deriv * p for p in x.partials))
