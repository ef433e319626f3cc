"""Single-connection legality check.

Composes node lookup, the schema catalogue, port type compatibility and
cycle detection into one decision. Checks run in a fixed order and stop at
the first failure, so the reported error is always the most basic one.
"""

from __future__ import annotations

from nodequiz.contracts.results import EdgeCheckResult
from nodequiz.contracts.workflow import EdgeProposal, WorkflowGraph
from nodequiz.core.catalogue import SchemaCatalogue, SchemaFound, SchemaUnknown
from nodequiz.core.compatibility import is_compatible
from nodequiz.core.cycles import would_create_cycle
from nodequiz.core.logging import get_logger

logger = get_logger(__name__)

SELF_CONNECTION = "Cannot connect a node to itself"
NODE_NOT_FOUND = "Source or target node not found"
NOT_INVOCATION = "Can only connect invocation nodes"
DIRECT_INPUT = "This input does not accept connections"
CYCLE = "This connection would create a cycle"


def validate_edge(
    workflow: WorkflowGraph,
    catalogue: SchemaCatalogue,
    proposal: EdgeProposal,
) -> EdgeCheckResult:
    """Decide whether a proposed connection is legal in a workflow.

    Order of checks:
    1. Self-connection
    2. Both endpoints exist and are invocation nodes
    3. Both node types are in the catalogue; if either is unknown the
       connection is accepted without further checks (permissive mode)
    4. The named output and input ports exist
    5. The input port accepts connections
    6. The port types are compatible
    7. The connection doesn't close a cycle over the workflow's existing
       connection edges

    Args:
        workflow: Workflow the connection would be added to
        catalogue: Node schema catalogue
        proposal: Endpoints and handles of the connection

    Returns:
        EdgeCheckResult, with the error message of the first failed check
    """
    result = _check(workflow, catalogue, proposal)
    logger.debug(
        "edge_checked",
        edge_key=proposal.key,
        valid=result.valid,
        reason=result.error,
    )
    return result


def _check(workflow: WorkflowGraph, catalogue: SchemaCatalogue, proposal: EdgeProposal) -> EdgeCheckResult:
    if proposal.source_node == proposal.target_node:
        return EdgeCheckResult.rejected(SELF_CONNECTION)

    source = workflow.get_node(proposal.source_node)
    target = workflow.get_node(proposal.target_node)
    if source is None or target is None:
        return EdgeCheckResult.rejected(NODE_NOT_FOUND)
    if not source.is_invocation or not target.is_invocation:
        return EdgeCheckResult.rejected(NOT_INVOCATION)

    match catalogue.lookup(source.node_type), catalogue.lookup(target.node_type):
        case SchemaFound(schema=source_schema), SchemaFound(schema=target_schema):
            pass
        case (SchemaUnknown(), _) | (_, SchemaUnknown()):
            return EdgeCheckResult.ok()

    source_port = source_schema.outputs.get(proposal.source_handle)
    if source_port is None:
        return EdgeCheckResult.rejected(f"Output field '{proposal.source_handle}' not found on source node")
    target_port = target_schema.inputs.get(proposal.target_handle)
    if target_port is None:
        return EdgeCheckResult.rejected(f"Input field '{proposal.target_handle}' not found on target node")

    if not target_port.accepts_connections:
        return EdgeCheckResult.rejected(DIRECT_INPUT)

    if not is_compatible(source_port.type, target_port.type):
        return EdgeCheckResult.rejected(
            f"Type mismatch: {source_port.type.describe()} cannot connect to {target_port.type.describe()}"
        )

    if would_create_cycle(
        workflow.node_ids(),
        workflow.connection_edges(),
        proposal.source_node,
        proposal.target_node,
    ):
        return EdgeCheckResult.rejected(CYCLE)

    return EdgeCheckResult.ok()
