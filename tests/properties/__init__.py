"""
Property-based testing using Hypothesis.

Modules:
    test_payoff_properties: payoff, barrier knockout and discounting invariants
"""
