"""Knapsack instances and the builders that create them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

PROFIT_MAX = 2**63 - 1
"""Largest profit value the solvers are allowed to handle."""


@dataclass(frozen=True)
class Item:
    """An item with its profit, weight and profit-to-weight ratio."""

    profit: int
    weight: int
    efficiency: float = 0.0


@dataclass(frozen=True)
class Instance:
    """A 0-1 knapsack instance; create it with an :class:`InstanceBuilder`."""

    capacity: int = 0
    items: tuple[Item, ...] = ()
    highest_item_profit: int = 0
    highest_item_weight: int = 0
    total_item_profit: int = 0
    total_item_weight: int = 0
    highest_efficiency_item_id: int = -1

    @property
    def number_of_items(self) -> int:
        return len(self.items)

    def item(self, item_id: int) -> Item:
        """Return the item with the given id."""
        if item_id < 0:
            raise IndexError(f"Invalid item id {item_id}.")
        return self.items[item_id]

    def format(self, verbosity_level: int = 1) -> str:
        """Return a human readable description of the instance."""
        lines: list[str] = []
        if verbosity_level >= 1:
            ratio = _ratio(self.total_item_weight, self.capacity)
            lines += [
                f"Number of items:      {self.number_of_items}",
                f"Capacity:             {self.capacity}",
                f"Highest item profit:  {self.highest_item_profit}",
                f"Highest item weight:  {self.highest_item_weight}",
                f"Total item profit:    {self.total_item_profit}",
                f"Total item weight:    {self.total_item_weight}",
                f"Weight ratio:         {ratio:g}",
            ]
        if verbosity_level >= 2:
            lines += [
                "",
                f"{'Item':>12}{'Weight':>12}{'Profit':>24}{'Eff.':>16}",
                f"{'----':>12}{'------':>12}{'------':>24}{'----':>16}",
            ]
            lines += [
                f"{item_id:>12}{item.weight:>12}{item.profit:>24}{item.efficiency:>16g}"
                for item_id, item in enumerate(self.items)
            ]
        return "".join(line + "\n" for line in lines)

    def write(self, instance_path: str) -> None:
        """Write the instance in the standard format."""
        try:
            with open(instance_path, "w") as file:
                file.write(f"{self.number_of_items} {self.capacity}\n")
                for item in self.items:
                    file.write(f"{item.profit} {item.weight}\n")
        except OSError as error:
            raise OSError(f'Unable to open file "{instance_path}".') from error


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan if numerator == 0 else math.inf
    return numerator / denominator


def _div(numerator: float, denominator: float) -> float:
    """Floating-point division where dividing by zero gives an infinity."""
    if denominator == 0:
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class _Tokens:
    """Whitespace separated tokens of a text, read one at a time."""

    def __init__(self, text: str):
        self._tokens: Iterator[str] = iter(text.split())

    def next_str(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ValueError("Unexpected end of file.") from None

    def next_int(self) -> int:
        return int(self.next_str())


def _split_header(text: str, count: int) -> tuple[list[str], list[str]]:
    """Read ``count`` tokens, then drop the rest of the line they end on.

    Return the tokens and the lines that follow.
    """
    lines = text.splitlines()
    tokens: list[str] = []
    for index, line in enumerate(lines):
        tokens.extend(line.split())
        if len(tokens) >= count:
            return tokens[:count], lines[index + 1:]
    raise ValueError("Unexpected end of file.")


def _finalize(capacity: int, items: Iterable[tuple[int, int]]) -> Instance:
    """Check the data of an instance and compute its statistics."""
    items = list(items)
    if capacity < 0:
        raise ValueError("The knapsack capacity must be positive.")
    for profit, weight in items:
        if profit <= 0:
            raise ValueError("Items must have strictly positive profits.")
        if weight <= 0:
            raise ValueError("Items must have strictly positive weights.")
        if weight > capacity:
            raise ValueError(
                "The weight of an item must be smaller than the knapsack capacity..")

    built = tuple(Item(profit, weight, profit / weight) for profit, weight in items)
    highest_efficiency_item_id = max(
        range(len(built)), key=lambda item_id: built[item_id].efficiency, default=-1)
    return Instance(
        capacity=capacity,
        items=built,
        highest_item_profit=max((item.profit for item in built), default=0),
        highest_item_weight=max((item.weight for item in built), default=0),
        total_item_profit=sum(item.profit for item in built),
        total_item_weight=sum(item.weight for item in built),
        highest_efficiency_item_id=highest_efficiency_item_id,
    )


class InstanceBuilder:
    """Collects the capacity and items of an instance, then builds it."""

    def __init__(self) -> None:
        self._capacity = 0
        self._items: list[tuple[int, int]] = []

    def set_capacity(self, capacity: int) -> None:
        self._capacity = capacity

    def add_item(self, profit: int, weight: int) -> None:
        self._items.append((profit, weight))

    def read(self, instance_path: str, format: str = "") -> None:
        """Read an instance file in one of the supported formats."""
        try:
            with open(instance_path) as file:
                text = file.read()
        except OSError as error:
            raise OSError(f'Unable to open file "{instance_path}".') from error

        readers: dict[str, Callable[[str], None]] = {
            "": self._read_standard,
            "standard": self._read_standard,
            "pisinger": self._read_pisinger,
            "jooken": self._read_jooken,
            "subset_sum_standard": self._read_subset_sum_standard,
        }
        reader = readers.get(format)
        if reader is None:
            raise ValueError(f'Unknown instance format "{format}".')
        reader(text)

    def _read_standard(self, text: str) -> None:
        tokens = _Tokens(text)
        number_of_items = tokens.next_int()
        self.set_capacity(tokens.next_int())
        for _ in range(number_of_items):
            profit = tokens.next_int()
            weight = tokens.next_int()
            self.add_item(profit, weight)

    def _read_pisinger(self, text: str) -> None:
        header, lines = _split_header(text, 9)
        number_of_items = int(header[2])
        self.set_capacity(int(header[4]))
        if len(lines) < number_of_items:
            raise ValueError("Unexpected end of file.")
        for line in lines[:number_of_items]:
            fields = line.split(",")
            self.add_item(int(fields[1]), int(fields[2]))

    def _read_jooken(self, text: str) -> None:
        tokens = _Tokens(text)
        number_of_items = tokens.next_int()
        for _ in range(number_of_items):
            tokens.next_int()
            profit = tokens.next_int()
            weight = tokens.next_int()
            self.add_item(profit, weight)
        self.set_capacity(tokens.next_int())

    def _read_subset_sum_standard(self, text: str) -> None:
        tokens = _Tokens(text)
        number_of_items = tokens.next_int()
        self.set_capacity(tokens.next_int())
        for _ in range(number_of_items):
            weight = tokens.next_int()
            self.add_item(weight, weight)

    def build(self) -> Instance:
        """Check the collected data and return the instance."""
        return _finalize(self._capacity, self._items)


class InstanceFromFloatProfitsBuilder:
    """Builds an instance from real-valued profits scaled to integers."""

    def __init__(self) -> None:
        self._capacity = 0
        self._profits: list[float] = []
        self._weights: list[int] = []

    def set_capacity(self, capacity: int) -> None:
        self._capacity = capacity

    def add_item(self, profit: float, weight: int) -> None:
        if math.isnan(profit):
            raise ValueError("Item profits must not be NaN.")
        self._profits.append(profit)
        self._weights.append(weight)

    def build(self) -> Instance:
        """Scale the profits by a power of two and return the instance."""
        if not self._weights:
            return Instance(capacity=self._capacity)

        multiplier = self._multiplier()
        profits: list[int] = []
        for profit_double in self._profits:
            profit = _round_half_away(profit_double * multiplier)
            profits.append(1 if profit == 0 else profit)
        return _finalize(self._capacity, zip(profits, self._weights))

    def _multiplier(self) -> float:
        # The scaled total profit, the scaled profits multiplied by the
        # largest weight and the bounds must all stay below PROFIT_MAX.
        profits: Sequence[float] = self._profits
        limit = _div(float(PROFIT_MAX), sum(profits))

        highest_item_profit = max(0.0, max(profits))
        highest_item_weight = max(0, max(self._weights))
        if highest_item_weight <= 0:
            raise ValueError("Items must have strictly positive weights.")
        highest_possible_item_profit = PROFIT_MAX // highest_item_weight
        limit = min(limit, _div(highest_possible_item_profit, highest_item_profit))

        for profit in profits:
            limit = min(limit, _div(_div(float(PROFIT_MAX), self._capacity), profit))

        if not (math.isfinite(limit) and limit > 0):
            raise ValueError("Unable to scale the item profits.")

        multiplier = 1.0
        while 2 * multiplier < limit:
            multiplier *= 2
        while multiplier > limit:
            multiplier /= 2
        return multiplier