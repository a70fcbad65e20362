"""Bellman dynamic programming algorithms for the 0-1 knapsack problem."""

__version__ = "0.1.0"