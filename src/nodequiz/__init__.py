"""
NodeQuiz: reconstruct the hidden wiring of node-based workflows.

A puzzle engine where a typed workflow graph has some of its connections
(and sometimes nodes) hidden, and every player move is checked against the
node schema catalogue and the hidden answer set.
"""

__version__ = "0.1.0"
