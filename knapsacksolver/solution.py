"""Solutions of knapsack instances."""

from __future__ import annotations

from typing import Any

from knapsacksolver.instance import Instance, _split_header, _Tokens


def _ratio_text(numerator: int, denominator: int) -> str:
    if denominator == 0:
        return f"{numerator} / {denominator}"
    return f"{numerator} / {denominator} ({100 * numerator / denominator:.2f}%)"


class Solution:
    """A subset of the items of an instance."""

    def __init__(self, instance: Instance):
        self._instance = instance
        self._contains = [False] * instance.number_of_items
        self._number_of_items = 0
        self._weight = 0
        self._profit = 0

    @property
    def instance(self) -> Instance:
        return self._instance

    @property
    def number_of_items(self) -> int:
        return self._number_of_items

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def profit(self) -> int:
        return self._profit

    @property
    def objective_value(self) -> int:
        return self._profit

    @property
    def feasible(self) -> bool:
        return self._weight <= self._instance.capacity

    @property
    def item_ids(self) -> list[int]:
        """Ids of the items in the solution, in increasing order."""
        return [item_id for item_id, inside in enumerate(self._contains) if inside]

    def copy(self) -> Solution:
        other = Solution(self._instance)
        other._contains = list(self._contains)
        other._number_of_items = self._number_of_items
        other._weight = self._weight
        other._profit = self._profit
        return other

    def contains(self, item_id: int) -> bool:
        return self._contains[item_id]

    def add(self, item_id: int) -> None:
        item = self._instance.item(item_id)
        self._contains[item_id] = True
        self._number_of_items += 1
        self._weight += item.weight
        self._profit += item.profit

    def remove(self, item_id: int) -> None:
        item = self._instance.item(item_id)
        self._contains[item_id] = False
        self._number_of_items -= 1
        self._weight -= item.weight
        self._profit -= item.profit

    def fill(self) -> None:
        """Add every item of the instance."""
        for item_id in range(self._instance.number_of_items):
            self.add(item_id)

    def write(self, certificate_path: str) -> None:
        """Write the solution as a certificate; an empty path writes nothing."""
        if not certificate_path:
            return
        try:
            with open(certificate_path, "w") as file:
                file.write(f"{self._number_of_items}\n")
                for item_id in self.item_ids:
                    file.write(f"{item_id}\n")
        except OSError as error:
            raise OSError(f'Unable to open file "{certificate_path}".') from error

    def format(self, verbosity_level: int = 1) -> str:
        """Return a human readable description of the solution."""
        lines: list[str] = []
        if verbosity_level >= 1:
            lines += [
                "Number of items:  "
                + _ratio_text(self._number_of_items, self._instance.number_of_items),
                "Weight:           " + _ratio_text(self._weight, self._instance.capacity),
                f"Profit:           {self._profit}",
                f"Feasible:         {int(self.feasible)}",
            ]
        if verbosity_level >= 2:
            lines += ["", f"{'Item':>12}", f"{'----':>12}"]
            lines += [f"{item_id:>12}" for item_id in self.item_ids]
        return "".join(line + "\n" for line in lines)

    def to_json(self) -> dict[str, Any]:
        return {
            "NumberOfItems": self._number_of_items,
            "Feasible": self.feasible,
            "Weight": self._weight,
            "Profit": self._profit,
        }


def read_solution(
        instance: Instance,
        certificate_path: str = "",
        certificate_format: str = "standard") -> Solution:
    """Read a certificate file; an empty path gives an empty solution."""
    solution = Solution(instance)
    if not certificate_path:
        return solution
    try:
        with open(certificate_path) as file:
            text = file.read()
    except OSError as error:
        raise OSError(f'Unable to open file "{certificate_path}".') from error

    if certificate_format == "standard":
        tokens = _Tokens(text)
        for _ in range(tokens.next_int()):
            solution.add(tokens.next_int())
    elif certificate_format == "pisinger":
        _, lines = _split_header(text, 9)
        if len(lines) < instance.number_of_items:
            raise ValueError("Unexpected end of file.")
        for item_id, line in enumerate(lines[:instance.number_of_items]):
            if int(line.split(",")[3]):
                solution.add(item_id)
    else:
        raise ValueError(f'Unknown certificate format "{certificate_format}".')
    return solution