"""Port type compatibility rules.

Decides whether an output port of one node may feed an input port of
another. The policy is a fixed, ordered rule table; the first rule that
decides wins and there is no backtracking.

Direction matters: ``is_compatible(a, b)`` asks whether ``a`` can feed
``b``, which is not the same question as ``is_compatible(b, a)``.
"""

from __future__ import annotations

from typing import Final

from nodequiz.contracts.enums import Cardinality
from nodequiz.contracts.workflow import FieldType

ANY_FIELD: Final = "AnyField"
COLLECTION_ITEM_FIELD: Final = "CollectionItemField"
COLLECTION_FIELD: Final = "CollectionField"
INTEGER_FIELD: Final = "IntegerField"
FLOAT_FIELD: Final = "FloatField"
STRING_FIELD: Final = "StringField"

# (source cardinality, target cardinality) pairs that may be wired.
# SINGLE -> COLLECTION is deliberately absent.
_CARDINALITY_PAIRS: Final = frozenset(
    {
        (Cardinality.SINGLE, Cardinality.SINGLE),
        (Cardinality.COLLECTION, Cardinality.COLLECTION),
        (Cardinality.COLLECTION, Cardinality.SINGLE_OR_COLLECTION),
        (Cardinality.SINGLE_OR_COLLECTION, Cardinality.SINGLE_OR_COLLECTION),
        (Cardinality.SINGLE, Cardinality.SINGLE_OR_COLLECTION),
    }
)

# Implicit widening between differently named primitives (source -> target)
_COERCIONS: Final = frozenset(
    {
        (INTEGER_FIELD, FLOAT_FIELD),
        (INTEGER_FIELD, STRING_FIELD),
        (FLOAT_FIELD, STRING_FIELD),
    }
)


def types_equal(first: FieldType, second: FieldType) -> bool:
    """Check whether two port types are the same type, honouring aliases.

    Types are compared on their alias-free form. A type also equals another
    when its ``original_type`` matches the other side (or both originals match).
    """
    first_clean = first.stripped()
    second_clean = second.stripped()

    if first_clean == second_clean:
        return True

    first_original = first.original_type.stripped() if first.original_type is not None else None
    second_original = second.original_type.stripped() if second.original_type is not None else None

    if second_original is not None and first_clean == second_original:
        return True
    if first_original is not None and first_original == second_clean:
        return True
    return first_original is not None and second_original is not None and first_original == second_original


def cardinality_matches(source: FieldType, target: FieldType) -> bool:
    """Check the cardinality gate for a source feeding a target."""
    return (source.cardinality, target.cardinality) in _CARDINALITY_PAIRS


def is_compatible(source: FieldType, target: FieldType) -> bool:
    """Check if a value of type ``source`` may be wired into a port of type ``target``.

    Rules, in order:
    1. Equal types (aliases honoured) are compatible
    2. Batch mismatch is incompatible
    3. AnyField target accepts anything; AnyField source feeds anything
       (its concrete type is resolved when the workflow runs)
    4. CollectionItemField source feeds any non-COLLECTION target;
       a SINGLE source feeds a CollectionItemField target
    5. Same name into a SINGLE_OR_COLLECTION target, whatever the source cardinality
    6. Generic CollectionField source feeds any non-SINGLE target;
       a COLLECTION source feeds a generic CollectionField target
    7. Otherwise cardinalities must pass the gate, then the names must
       match or be one of the int->float, int->string, float->string widenings
    """
    if types_equal(source, target):
        return True

    if source.batch != target.batch:
        return False

    if target.name == ANY_FIELD:
        return True

    if source.name == ANY_FIELD:
        return True

    if source.name == COLLECTION_ITEM_FIELD and target.cardinality != Cardinality.COLLECTION:
        return True

    if source.cardinality == Cardinality.SINGLE and target.name == COLLECTION_ITEM_FIELD:
        return True

    if target.cardinality == Cardinality.SINGLE_OR_COLLECTION and source.name == target.name:
        return True

    if source.name == COLLECTION_FIELD and target.cardinality != Cardinality.SINGLE:
        return True

    if target.name == COLLECTION_FIELD and source.cardinality == Cardinality.COLLECTION:
        return True

    if not cardinality_matches(source, target):
        return False

    if source.name == target.name:
        return True

    return (source.name, target.name) in _COERCIONS
