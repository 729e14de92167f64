"""Text codec for the ``matrix(a,b,c,d,tx,ty)`` form.

The same six-number form is used by SVG ``transform`` attributes and the CSS
``matrix()`` function. Only this single form is understood; chained
transform lists (``translate(...) rotate(...)``) are not.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from matrix2d.affine.errors import MatrixParseError

logger = logging.getLogger(__name__)

# Decimal or exponent notation with an optional sign: 1, -2.5, .5, 3., +43e-21
_NUMBER = r"([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_SEPARATOR = r"\s*,\s*"

_MATRIX_RE = re.compile(
    r"matrix\(\s*" + _SEPARATOR.join([_NUMBER] * 6) + r"\s*\)",
    re.IGNORECASE,
)

# Integral values beyond this magnitude keep their exponent form
_MAX_PLAIN_INTEGER = 1e16


def parse_matrix(text: str) -> tuple[float, float, float, float, float, float]:
    """Parse ``matrix(a,b,c,d,tx,ty)`` into six floats.

    Args:
        text: The textual matrix. The keyword is case-insensitive and
            whitespace is allowed around every number.

    Returns:
        Coefficients in ``(a, b, c, d, tx, ty)`` order.

    Raises:
        MatrixParseError: If the text is not exactly six numbers in that shape.
    """
    match = _MATRIX_RE.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        logger.debug("Rejected matrix text: %r", text)
        raise MatrixParseError(str(text))
    a, b, c, d, tx, ty = (float(group) for group in match.groups())
    return a, b, c, d, tx, ty


def format_number(value: float) -> str:
    """Shortest text that parses back to ``value``.

    Integral values drop the trailing ``.0`` so identity prints as
    ``matrix(1,0,0,1,0,0)``.
    """
    value = float(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
        return str(int(value))
    return repr(value)


def format_matrix(values: Iterable[float]) -> str:
    """Render coefficients as ``matrix(a,b,c,d,tx,ty)`` with no spaces."""
    return "matrix(" + ",".join(format_number(v) for v in values) + ")"
