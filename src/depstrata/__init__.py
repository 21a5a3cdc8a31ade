"""depstrata: dependency graph and hierarchy reports for npm package trees."""

__version__ = "0.1.0"
