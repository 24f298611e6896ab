"""Parse fractional share strings into rounded percentages.

Values are parsed with :mod:`decimal` so rounding happens on the exact
decimal text rather than on a binary float. Rounding is half-to-even at
``PERCENT_PRECISION`` places (``"0.00125"`` becomes ``0.0012``), then the
proportion is scaled by 100.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any

import pandas as pd

from covidprep.config import NULL_TOKEN, PERCENT_PRECISION, MalformedValuePolicy
from covidprep.quality import MalformedValueError, ValueIssue

LOGGER = logging.getLogger(__name__)

_HUNDRED = Decimal(100)


def normalize_percentage(
    value: Any,
    *,
    null_token: str = NULL_TOKEN,
    precision: int = PERCENT_PRECISION,
) -> float | None:
    """Convert one raw share into a percentage.

    ``null_token``, blanks and absent cells map to ``None``. Anything else
    must be a finite decimal number, otherwise ``ValueError`` is raised.
    """

    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None

    text = str(value).strip()
    if not text or text == null_token:
        return None

    try:
        parsed = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal number: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")

    rounded = parsed.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_EVEN)
    return float(rounded * _HUNDRED)


def normalize_percentage_column(
    values: pd.Series,
    *,
    field_name: str,
    policy: MalformedValuePolicy | str = MalformedValuePolicy.REJECT,
    null_token: str = NULL_TOKEN,
    precision: int = PERCENT_PRECISION,
) -> tuple[pd.Series, list[ValueIssue]]:
    """Normalize a whole column, collecting cells that fail to parse.

    Under ``reject`` any malformed cell raises ``MalformedValueError`` after
    the whole column is scanned. Under ``missing`` malformed cells become NaN
    and are returned as issues.
    """

    policy = MalformedValuePolicy(policy)
    issues: list[ValueIssue] = []
    normalized: list[float | None] = []

    for row, value in values.items():
        try:
            normalized.append(
                normalize_percentage(value, null_token=null_token, precision=precision)
            )
        except ValueError as exc:
            issues.append(
                ValueIssue(row=row, field_name=field_name, raw_value=str(value), message=str(exc))
            )
            normalized.append(None)

    if issues and policy is MalformedValuePolicy.REJECT:
        raise MalformedValueError(issues)
    if issues:
        LOGGER.warning(
            "Treated %s malformed %s value(s) as missing",
            len(issues),
            field_name,
        )

    return pd.Series(normalized, index=values.index, dtype="float64", name=values.name), issues
