"""Amortized mortgage payment estimate for sale listings."""

from __future__ import annotations

from dataclasses import dataclass

from .rounding import round_half_up


@dataclass
class MortgageConfig:
    """Loan assumptions applied when estimating a buyer's monthly payment."""

    down_payment_percent: float = 20.0
    annual_rate_percent: float = 7.0
    term_years: int = 30


@dataclass(slots=True)
class MortgageEstimate:
    """Mortgage breakdown; currency amounts rounded to whole units."""

    home_price: float
    down_payment: int
    loan_amount: int
    interest_rate: float
    loan_term_years: int
    monthly_payment: int
    total_paid: int
    total_interest: int


def estimate_mortgage(
    price: float,
    down_payment_percent: float = 20.0,
    annual_rate_percent: float = 7.0,
    term_years: int = 30,
) -> MortgageEstimate:
    """Estimate payments with ``M = P * r(1+r)^n / ((1+r)^n - 1)``.

    A zero rate falls back to straight-line repayment ``P / n``.
    """
    if price < 0:
        raise ValueError("price must be non-negative")
    if term_years <= 0:
        raise ValueError("term_years must be positive")
    if annual_rate_percent < 0:
        raise ValueError("annual_rate_percent must be non-negative")

    down_payment = price * (down_payment_percent / 100)
    loan_amount = price - down_payment
    monthly_rate = annual_rate_percent / 100 / 12
    payments = term_years * 12

    if monthly_rate == 0:
        monthly_payment = loan_amount / payments
    else:
        growth = (1 + monthly_rate) ** payments
        monthly_payment = loan_amount * (monthly_rate * growth) / (growth - 1)

    total_paid = monthly_payment * payments
    return MortgageEstimate(
        home_price=price,
        down_payment=round_half_up(down_payment),
        loan_amount=round_half_up(loan_amount),
        interest_rate=annual_rate_percent,
        loan_term_years=term_years,
        monthly_payment=round_half_up(monthly_payment),
        total_paid=round_half_up(total_paid),
        total_interest=round_half_up(total_paid - loan_amount),
    )


def estimate_with_config(price: float, config: MortgageConfig) -> MortgageEstimate:
    return estimate_mortgage(
        price,
        down_payment_percent=config.down_payment_percent,
        annual_rate_percent=config.annual_rate_percent,
        term_years=config.term_years,
    )
