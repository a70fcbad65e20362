# knapsacksolver

Exact algorithms for the 0-1 knapsack problem, all based on Bellman dynamic
programming, together with instance readers and writers, solution
certificates, a random instance generator and a progress report printed while
an algorithm runs.

## Installation

```
pip install .
```

## Command line

```
knapsacksolver --input instance.txt --algorithm dynamic-programming-bellman-array-all \
    --certificate solution.txt --output output.json --verbosity-level 1
```

Options:

- `-i`, `--input` (required): the instance file.
- `-f`, `--format`: input format, one of `standard` (the default),
  `pisinger`, `jooken` or `subset_sum_standard`.
- `-a`, `--algorithm`: the algorithm to run (see below); the default is
  `dynamic-programming-bellman-array-part`.
- `-o`, `--output`: JSON file receiving the parameters, every intermediate
  output and the final output.
- `-c`, `--certificate`: file receiving the best solution found.
- `-e`, `--only-write-at-the-end`: write the JSON and certificate files only
  when the algorithm finishes; otherwise they are rewritten at each
  improvement.
- `-t`, `--time-limit`: time limit in seconds.
- `-v`, `--verbosity-level`: `0` prints nothing, `1` (the default) prints
  the instance summary, a progress table and the final statistics, `2` also
  lists every item and the chosen items.
- `--partial-solution-size`: number of items tracked per pass by
  `dynamic-programming-bellman-array-part` (default 64).
- `--initial-solution`: a certificate file in the standard format; it is
  read and checked against the instance.
- `-s`, `--seed`: accepted; none of the algorithms is randomized.

The command returns exit status 1 when the arguments cannot be parsed.
It can also be started with `python -m knapsacksolver.cli`.

Algorithms:

| Name | Returns a solution |
| --- | --- |
| `dynamic-programming-bellman-array` | no, value and bound only |
| `dynamic-programming-bellman-array-parallel` | no, value and bound only |
| `dynamic-programming-bellman-rec` | yes |
| `dynamic-programming-bellman-array-all` | yes |
| `dynamic-programming-bellman-array-one` | yes |
| `dynamic-programming-bellman-array-part` | yes |
| `dynamic-programming-bellman-array-rec` | yes |

## File formats

A standard instance file holds the number of items and the capacity, then
one `profit weight` pair per item. A certificate holds the number of chosen
items followed by their indices, one per line. `Instance.write` and
`Solution.write` produce these formats; `read_solution` reads certificates in
the `standard` and `pisinger` formats.

## Library

```python
from knapsacksolver.instance import InstanceBuilder
from knapsacksolver.algorithm_formatter import Parameters
from knapsacksolver.dynamic_programming_bellman import dynamic_programming_bellman_array_all

builder = InstanceBuilder()
builder.set_capacity(10)
builder.add_item(10, 5)
builder.add_item(7, 4)
builder.add_item(8, 6)
instance = builder.build()

output = dynamic_programming_bellman_array_all(instance, Parameters(verbosity_level=0))
print(output.value, output.bound)
print(output.solution.item_ids)
```

Modules:

- `knapsacksolver.instance`: `Item`, `Instance`, `InstanceBuilder` (reads
  files with `read(path, format)`, checks the data in `build()` and raises
  `ValueError` on invalid instances) and `InstanceFromFloatProfitsBuilder`,
  which scales real-valued profits to integers by a power of two.
- `knapsacksolver.solution`: `Solution` and `read_solution`.
- `knapsacksolver.algorithm_formatter`: `Parameters` (verbosity level, time
  limit, JSON recording, a callback called on each improvement, the output
  stream), `Output` (`value`, `bound`, `solution`, optimality gaps,
  `write_json_output`) and `AlgorithmFormatter`.
- `knapsacksolver.dynamic_programming_bellman`:
  `dynamic_programming_bellman_array`,
  `dynamic_programming_bellman_array_parallel`,
  `dynamic_programming_bellman_rec` and
  `dynamic_programming_bellman_array_all`.
- `knapsacksolver.dynamic_programming_bellman_part`:
  `dynamic_programming_bellman_array_one`,
  `dynamic_programming_bellman_array_part` (with
  `DynamicProgrammingBellmanArrayPartParameters`) and
  `dynamic_programming_bellman_array_rec`; their outputs also count
  `number_of_iterations`.
- `knapsacksolver.generator`: `generate_u(number_of_items, maximum_weight,
  maximum_profit, capacity_ratio, rng)` builds an instance with uniformly
  drawn weights and profits, using an optional `random.Random`.
- `knapsacksolver.cli`: `main(argv=None)` and `run(instance, args)`.

Until an algorithm proves a bound, `Output.bound` holds `2**63 - 1`.

## What is not included

Only the Bellman dynamic programming algorithms are provided. There is no
greedy heuristic, no Dantzig upper bound, no primal-dual (core-based)
algorithm and no state-list variant, and there are no subset-sum or
multiple-choice subset-sum solvers. The generator is available from Python
only; there is no command for it.

## Tests

```
pip install .[test]
pytest
```