# tests/property/__init__.py
"""Property-based tests for NodeQuiz.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: Compatibility rules, cycle detection, scoring and hint invariants
"""
