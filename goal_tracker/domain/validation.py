from __future__ import annotations

from typing import List, Optional

MAX_TARGET_AMOUNT = 10_000_000
MAX_MONTHLY_CONTRIBUTION = 100_000
MAX_RETURN_RATE = 0.3
MAX_INFLATION_RATE = 0.2
MAX_YEARS = 50
MIN_YEARS = 1 / 12


class FinancialInputError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_financial_inputs(
    *,
    target_amount: Optional[float] = None,
    current_amount: Optional[float] = None,
    monthly_contribution: Optional[float] = None,
    return_rate: Optional[float] = None,
    inflation_rate: Optional[float] = None,
    years: Optional[float] = None,
) -> List[str]:
    """
    Check every supplied value and return all violations (empty list = valid).
    Values left as None are not checked.
    """
    errors: List[str] = []

    if target_amount is not None:
        if target_amount <= 0:
            errors.append("target amount must be greater than 0")
        elif target_amount > MAX_TARGET_AMOUNT:
            errors.append(f"target amount cannot exceed {MAX_TARGET_AMOUNT:,}")

    if current_amount is not None and current_amount < 0:
        errors.append("current amount cannot be negative")

    if monthly_contribution is not None:
        if monthly_contribution < 0:
            errors.append("monthly contribution cannot be negative")
        elif monthly_contribution > MAX_MONTHLY_CONTRIBUTION:
            errors.append(f"monthly contribution cannot exceed {MAX_MONTHLY_CONTRIBUTION:,}")

    if return_rate is not None and not 0 <= return_rate <= MAX_RETURN_RATE:
        errors.append("return rate must be between 0% and 30%")

    if inflation_rate is not None and not 0 <= inflation_rate <= MAX_INFLATION_RATE:
        errors.append("inflation rate must be between 0% and 20%")

    if years is not None:
        if years <= 0:
            errors.append("time period must be greater than 0")
        elif years < MIN_YEARS:
            errors.append("time period must be at least one month")
        elif years > MAX_YEARS:
            errors.append(f"time period cannot exceed {MAX_YEARS} years")

    return errors


def ensure_horizon_within_limit(years: float) -> None:
    """Goal horizons may be shorter than a month (due soon) but never beyond MAX_YEARS."""
    if years > MAX_YEARS:
        raise FinancialInputError([f"time period cannot exceed {MAX_YEARS} years"])


def ensure_valid_inputs(**inputs: Optional[float]) -> None:
    errors = validate_financial_inputs(**inputs)
    if errors:
        raise FinancialInputError(errors)
