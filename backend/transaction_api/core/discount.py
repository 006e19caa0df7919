"""Discount Engine - tiered base rate, stacking bonus rules, 20% cap.

Invariants:
    - PURE: total amount in, DiscountResult out
    - All intermediate arithmetic in Decimal, never binary float
    - 0 <= total_discount <= total_amount * 20%, truncated toward zero
    - final_amount == total_amount - total_discount

Design Decisions:
    - Tier table as ordered (upper_bound, rate) tuples, first match wins:
      the 0% tier uses an exclusive bound (< 200), the rest are inclusive
"""

import math
from decimal import Decimal, ROUND_DOWN, localcontext

from transaction_api.core.errors import DiscountComputationError
from transaction_api.core.outcomes import DiscountResult


ZERO_RATE_BELOW = 200
BASE_TIERS: tuple[tuple[int, Decimal], ...] = (
    (500, Decimal("0.05")),
    (800, Decimal("0.07")),
    (1200, Decimal("0.10")),
)
TOP_TIER_RATE = Decimal("0.15")

PRIME_BONUS_RATE = Decimal("0.08")
PRIME_BONUS_MIN_EXCLUSIVE = 500

ENDS_IN_FIVE_BONUS_RATE = Decimal("0.10")
ENDS_IN_FIVE_MIN_EXCLUSIVE = 900

DISCOUNT_CAP_RATE = Decimal("0.20")


TRIAL_DIVISION_LIMIT = 10**12

# Deterministic Miller-Rabin witnesses, exact for every n < 3.3e24
_MR_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def _miller_rabin(number: int) -> bool:
    d, s = number - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _MR_WITNESSES:
        if number % a == 0:
            return number == a
        x = pow(a, d, number)
        if x in (1, number - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, number)
            if x == number - 1:
                break
        else:
            return False
    return True


def is_prime(number: int) -> bool:
    """Trial division up to floor(sqrt(n)). Numbers <= 1 are not prime.

    Above TRIAL_DIVISION_LIMIT the same answer is computed with Miller-Rabin,
    so a large prime total cannot stall a worker.
    """
    if number <= 1:
        return False
    if number > TRIAL_DIVISION_LIMIT:
        return _miller_rabin(number)
    for divisor in range(2, math.isqrt(number) + 1):
        if number % divisor == 0:
            return False
    return True


def base_rate(total_amount: int) -> Decimal:
    """Base discount rate for the amount tier."""
    if total_amount < ZERO_RATE_BELOW:
        return Decimal(0)
    for upper_bound, rate in BASE_TIERS:
        if total_amount <= upper_bound:
            return rate
    return TOP_TIER_RATE


def bonus_rate(total_amount: int) -> Decimal:
    """Sum of the bonus rates whose predicates hold. Bonuses stack."""
    rate = Decimal(0)
    if total_amount > PRIME_BONUS_MIN_EXCLUSIVE and is_prime(total_amount):
        rate += PRIME_BONUS_RATE
    if total_amount > ENDS_IN_FIVE_MIN_EXCLUSIVE and total_amount % 10 == 5:
        rate += ENDS_IN_FIVE_BONUS_RATE
    return rate


def calculate_discount(total_amount: int) -> DiscountResult:
    """Compute the capped, truncated discount for a validated total amount."""
    if isinstance(total_amount, bool) or not isinstance(total_amount, int) or total_amount < 1:
        raise DiscountComputationError(total_amount)

    with localcontext() as ctx:
        # Enough digits that no product is ever rounded before truncation
        ctx.prec = max(ctx.prec, len(str(total_amount)) + 4)
        amount = Decimal(total_amount)
        discount = amount * base_rate(total_amount) + amount * bonus_rate(total_amount)
        capped = min(discount, amount * DISCOUNT_CAP_RATE)
        truncated = int(capped.to_integral_value(rounding=ROUND_DOWN))
    return DiscountResult(total_amount=total_amount, total_discount=truncated)
