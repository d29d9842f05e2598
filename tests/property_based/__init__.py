"""
Property-based tests for mazeforge.

Uses the Hypothesis framework to check the structural guarantees of
generated levels across many grid sizes and random streams.
"""
