"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from typing import NewType

NodeID = NewType("NodeID", str)
"""Node identifier, unique within one workflow (e.g., 'c0d5a7e2-noise')"""

EdgeID = NewType("EdgeID", str)
"""Edge identifier, unique within one workflow"""

PortName = NewType("PortName", str)
"""Input or output port name on a node schema (e.g., 'positive_conditioning')"""

NodeTypeName = NewType("NodeTypeName", str)
"""Schema catalogue key of an invocation node (e.g., 'denoise_latents')"""

QuizID = NewType("QuizID", str)
"""Quiz identifier as declared in the quiz file"""

EdgeKey = NewType("EdgeKey", str)
"""Identity key 'source:sourceHandle->target:targetHandle' of a connection"""
