"""Aggregation helpers.

This package turns raw census rows into the two signed percentage series of a
population pyramid. Everything here is pure: no I/O, no logging, no state.
"""
