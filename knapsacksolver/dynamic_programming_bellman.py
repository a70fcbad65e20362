"""Bellman dynamic programming algorithms for the knapsack problem."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from knapsacksolver.algorithm_formatter import AlgorithmFormatter, Output, Parameters
from knapsacksolver.instance import Instance, Item
from knapsacksolver.solution import Solution


def _add_item(values: list[int], item: Item) -> list[int]:
    """Table of best profits per capacity after allowing one more item."""
    weight, profit = item.weight, item.profit
    return values[:weight] + [
        max(without, previous + profit)
        for without, previous in zip(values[weight:], values)]


def _array_values(
        items: Sequence[Item],
        capacity: int,
        needs_to_end: Callable[[], bool]) -> list[int]:
    values = [0] * (capacity + 1)
    for item in items:
        if needs_to_end():
            break
        values = _add_item(values, item)
    return values


def _all_items_fit(
        instance: Instance, formatter: AlgorithmFormatter, output: Output) -> bool:
    if instance.total_item_weight > instance.capacity:
        return False
    solution = Solution(instance)
    solution.fill()
    formatter.update_solution(solution, "all items fit (solution)")
    formatter.update_bound(output.value, "all items fit (bound)")
    formatter.end()
    return True


def dynamic_programming_bellman_array(
        instance: Instance, parameters: Optional[Parameters] = None) -> Output:
    """Compute the optimal value with a single array; no solution is kept."""
    parameters = parameters or Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - array - no solution")
    formatter.print_header()

    capacity = instance.capacity
    values = [0] * (capacity + 1)
    for item_id, item in enumerate(instance.items):
        if parameters.needs_to_end():
            formatter.end()
            return output
        values = _add_item(values, item)
        if output.value < values[capacity]:
            formatter.update_value(values[capacity], f"it {item_id}")

    formatter.update_bound(output.value, "algorithm end")
    formatter.end()
    return output


def dynamic_programming_bellman_array_parallel(
        instance: Instance, parameters: Optional[Parameters] = None) -> Output:
    """Compute the optimal value by solving two halves of the items concurrently."""
    parameters = parameters or Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman parallel - array - only value")
    formatter.print_header()

    if _all_items_fit(instance, formatter, output):
        return output

    capacity = instance.capacity
    middle = (instance.number_of_items - 1) // 2 + 1
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(
            _array_values, instance.items[:middle], capacity, parameters.needs_to_end)
        values_2 = _array_values(
            instance.items[middle:], capacity, parameters.needs_to_end)
        values_1 = future.result()
    if parameters.needs_to_end():
        formatter.end()
        return output

    optimal_value = max(
        first + second for first, second in zip(values_1, reversed(values_2)))

    formatter.update_value(optimal_value, "algorithm end (value)")
    formatter.update_bound(output.value, "algorithm end (bound)")
    formatter.end()
    return output


def dynamic_programming_bellman_rec(
        instance: Instance, parameters: Optional[Parameters] = None) -> Output:
    """Compute the states reachable from the last state by memoized recursion."""
    parameters = parameters or Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - recursive - only value")
    formatter.print_header()

    items = instance.items
    memo: dict[tuple[int, int], int] = {}

    def value(item_id: int, weight: int) -> int:
        return 0 if item_id < 0 else memo[(item_id, weight)]

    stack = [(instance.number_of_items - 1, instance.capacity)]
    while stack:
        if parameters.needs_to_end():
            formatter.end()
            return output
        state = stack[-1]
        item_id, weight = state
        if item_id < 0 or state in memo:
            stack.pop()
            continue
        item = items[item_id]
        fits = item.weight <= weight
        dependencies = [(item_id - 1, weight)]
        if fits:
            dependencies.append((item_id - 1, weight - item.weight))
        missing = [dep for dep in dependencies if dep[0] >= 0 and dep not in memo]
        if missing:
            stack.extend(missing)
            continue
        best = value(item_id - 1, weight)
        if fits:
            best = max(best, item.profit + value(item_id - 1, weight - item.weight))
        memo[state] = best
        stack.pop()

    optimal_value = value(instance.number_of_items - 1, instance.capacity)
    formatter.update_value(optimal_value, "algorithm end (value)")
    formatter.update_bound(output.value, "algorithm end (bound)")

    solution = Solution(instance)
    weight = instance.capacity
    for item_id in reversed(range(instance.number_of_items)):
        if value(item_id, weight) != value(item_id - 1, weight):
            weight -= items[item_id].weight
            solution.add(item_id)
    formatter.update_solution(solution, "algorithm end (solution)")

    formatter.end()
    return output


def dynamic_programming_bellman_array_all(
        instance: Instance, parameters: Optional[Parameters] = None) -> Output:
    """Store the whole table and retrieve an optimal solution from it."""
    parameters = parameters or Parameters()
    output = Output(instance)
    formatter = AlgorithmFormatter(parameters, output)
    formatter.start("Dynamic programming - Bellman - array - store all states")
    formatter.print_header()

    capacity = instance.capacity
    rows = [[0] * (capacity + 1)]
    for item_id, item in enumerate(instance.items):
        if parameters.needs_to_end():
            formatter.end()
            return output
        rows.append(_add_item(rows[-1], item))
        if output.value < rows[-1][capacity]:
            formatter.update_value(rows[-1][capacity], f"it {item_id}")

    formatter.update_bound(output.value, "algorithm end (bound)")

    solution = Solution(instance)
    weight = capacity
    for item_id in reversed(range(instance.number_of_items)):
        if rows[item_id + 1][weight] != rows[item_id][weight]:
            weight -= instance.items[item_id].weight
            solution.add(item_id)
    formatter.update_solution(solution, "algorithm end (solution)")

    formatter.end()
    return output