"""Combat layer: how flipping pieces turns into damage"""

import math
from fractions import Fraction


def calculate_damage(
    attack_power: int, flipped_count: int, combo_multiplier: float
) -> int:
    """
    base attack * (1 + number of flipped pieces * combo multiplier), rounded down.

    ex) attack 10, 3 flips, multiplier 0.5 --> floor(10 * 2.5) = 25

    NOTE: the multiplier is taken at its written (decimal) value and the product is exact,
    so 0.1 behaves like one tenth and arbitrarily large attack values never go through a float.
    """
    multiplier = 1 + flipped_count * Fraction(str(combo_multiplier))
    return math.floor(attack_power * multiplier)


def is_defeated(health: int) -> bool:
    # health is never clamped, so it can go below zero
    return health <= 0
