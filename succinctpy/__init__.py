"""Succinct data structures: broadword tricks, select directories, Elias-Fano, gamma vectors, balanced parentheses and excess range-minimum queries."""

__version__ = "0.1.0"
__all__ = [
    "broadword",
    "util",
    "mapper",
    "darray",
    "elias_fano",
    "gamma_vector",
    "bp_vector",
    "rmq",
]