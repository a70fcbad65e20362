"""Random knapsack instance generators."""

from __future__ import annotations

import random
from typing import Optional

from knapsacksolver.instance import Instance, InstanceBuilder


def generate_u(
        number_of_items: int,
        maximum_weight: int,
        maximum_profit: int,
        capacity_ratio: float,
        rng: Optional[random.Random] = None) -> Instance:
    """Generate an instance with uniformly distributed weights and profits."""
    if rng is None:
        rng = random.Random()
    builder = InstanceBuilder()
    weight_max = 0
    weight_sum = 0
    for _ in range(number_of_items):
        weight = rng.randint(1, maximum_weight)
        profit = rng.randint(1, maximum_profit)
        builder.add_item(profit, weight)
        weight_max = max(weight_max, weight)
        weight_sum += weight
    builder.set_capacity(max(weight_max, int(capacity_ratio * weight_sum)))
    return builder.build()