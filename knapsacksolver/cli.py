"""Command line interface for the knapsack solvers."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence

from knapsacksolver.algorithm_formatter import Output, Parameters
from knapsacksolver.dynamic_programming_bellman import (
    dynamic_programming_bellman_array,
    dynamic_programming_bellman_array_all,
    dynamic_programming_bellman_array_parallel,
    dynamic_programming_bellman_rec,
)
from knapsacksolver.dynamic_programming_bellman_part import (
    DynamicProgrammingBellmanArrayPartParameters,
    dynamic_programming_bellman_array_one,
    dynamic_programming_bellman_array_part,
    dynamic_programming_bellman_array_rec,
)
from knapsacksolver.instance import Instance, InstanceBuilder
from knapsacksolver.solution import read_solution

DEFAULT_ALGORITHM = "dynamic-programming-bellman-array-part"

_SOLVERS: dict[str, Callable[[Instance, Parameters], Output]] = {
    "dynamic-programming-bellman-rec": dynamic_programming_bellman_rec,
    "dynamic-programming-bellman-array": dynamic_programming_bellman_array,
    "dynamic-programming-bellman-array-parallel":
        dynamic_programming_bellman_array_parallel,
    "dynamic-programming-bellman-array-all": dynamic_programming_bellman_array_all,
    "dynamic-programming-bellman-array-one": dynamic_programming_bellman_array_one,
    "dynamic-programming-bellman-array-rec": dynamic_programming_bellman_array_rec,
}


def _read_args(parameters: Parameters, args: argparse.Namespace) -> None:
    if args.time_limit is not None:
        parameters.time_limit = args.time_limit
    if args.verbosity_level is not None:
        parameters.verbosity_level = args.verbosity_level
    parameters.json_output = True
    if not args.only_write_at_the_end:
        json_output_path = args.output
        certificate_path = args.certificate

        def write_files(output: Output) -> None:
            output.write_json_output(json_output_path)
            output.solution.write(certificate_path)

        parameters.new_solution_callback = write_files


def run(instance: Instance, args: argparse.Namespace) -> Output:
    """Run the algorithm selected by the parsed arguments."""
    read_solution(instance, args.initial_solution)
    algorithm = args.algorithm or DEFAULT_ALGORITHM

    if algorithm == "dynamic-programming-bellman-array-part":
        part_parameters = DynamicProgrammingBellmanArrayPartParameters()
        _read_args(part_parameters, args)
        if args.partial_solution_size is not None:
            part_parameters.partial_solution_size = args.partial_solution_size
        return dynamic_programming_bellman_array_part(instance, part_parameters)

    solver = _SOLVERS.get(algorithm)
    if solver is None:
        raise ValueError(f'Unknown algorithm "{algorithm}".')
    parameters = Parameters()
    _read_args(parameters, args)
    return solver(instance, parameters)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knapsacksolver", description="Solve a knapsack instance.")
    parser.add_argument("-a", "--algorithm", help="set algorithm")
    parser.add_argument("-i", "--input", required=True,
                        help="set input file (required)")
    parser.add_argument("-f", "--format", default="",
                        help="set input file format (default: standard)")
    parser.add_argument("-o", "--output", default="", help="set JSON output file")
    parser.add_argument("--initial-solution", default="")
    parser.add_argument("-c", "--certificate", default="", help="set certificate file")
    parser.add_argument("-s", "--seed", type=int, default=0, help="set seed")
    parser.add_argument("-t", "--time-limit", type=float,
                        help="set time limit in seconds")
    parser.add_argument("-v", "--verbosity-level", type=int, help="set verbosity level")
    parser.add_argument("-e", "--only-write-at-the-end", action="store_true",
                        help="only write output and certificate files at the end")
    parser.add_argument("--partial-solution-size", type=int,
                        help="set partial solution size")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read an instance, solve it and write the requested files."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        return 1

    builder = InstanceBuilder()
    builder.read(args.input, args.format)
    instance = builder.build()

    output = run(instance, args)

    output.write_json_output(args.output)
    output.solution.write(args.certificate)
    return 0


if __name__ == "__main__":
    sys.exit(main())