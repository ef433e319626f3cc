"""Pydantic models for workflows, node schemas and quizzes.

These are the read-only inputs of every engine call. They parse the camelCase
JSON of quiz files and schema catalogues (``sourceHandle``, ``originalType``,
``hiddenEdges``...) and also accept the snake_case field names, so tests and
callers can build them directly.

TRUST BOUNDARY: quiz files and player submissions are external data and are
validated here. Once parsed, the engine treats them as trusted: it does not
re-check that edges reference existing nodes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nodequiz.contracts.enums import Cardinality, EdgeKind, InputMode, NodeKind, QuizDifficulty
from nodequiz.contracts.types import EdgeID, EdgeKey, NodeID, NodeTypeName, PortName, QuizID

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


def edge_key(source: str, source_handle: str | None, target: str, target_handle: str | None) -> EdgeKey:
    """Build the identity key of a connection, independent of its edge id."""
    return EdgeKey(f"{source}:{source_handle}->{target}:{target_handle}")


# =============================================================================
# Node schema catalogue
# =============================================================================


class FieldType(BaseModel):
    """Data type of a port.

    ``original_type`` names the type this one aliases. Two differently named
    types are equal when one side's original matches the other side.
    """

    model_config = _FROZEN

    name: str
    cardinality: Cardinality = Cardinality.SINGLE
    batch: bool = False
    original_type: FieldType | None = Field(default=None, alias="originalType")

    def stripped(self) -> FieldType:
        """Return this type without its alias."""
        if self.original_type is None:
            return self
        return self.model_copy(update={"original_type": None})

    def describe(self) -> str:
        """Human-readable form used in error messages, e.g. 'IntegerField (SINGLE)'."""
        return f"{self.name} ({self.cardinality})"


class NodePort(BaseModel):
    """A named input or output slot on a node schema."""

    model_config = _FROZEN

    name: PortName
    title: str = ""
    description: str = ""
    type: FieldType
    input_mode: InputMode = Field(default=InputMode.CONNECTION, alias="input")
    required: bool = True

    @property
    def accepts_connections(self) -> bool:
        return self.input_mode != InputMode.DIRECT


class NodeSchema(BaseModel):
    """Catalogue entry describing the ports of one node type."""

    model_config = _FROZEN

    type: NodeTypeName
    title: str = ""
    description: str = ""
    version: str = "1.0.0"
    category: str = ""
    inputs: dict[str, NodePort] = Field(default_factory=dict)
    outputs: dict[str, NodePort] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _port_names_from_keys(cls, data: Any) -> Any:
        """Let catalogue files omit a port's name when it equals its key."""
        if not isinstance(data, dict):
            return data
        filled = dict(data)
        for side in ("inputs", "outputs"):
            ports = filled.get(side)
            if isinstance(ports, dict):
                filled[side] = {key: {"name": key, **port} if isinstance(port, dict) else port for key, port in ports.items()}
        return filled


# =============================================================================
# Workflow graph
# =============================================================================


class Position(BaseModel):
    model_config = _FROZEN

    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """Payload of a workflow node.

    Invocation nodes carry their schema key in ``type``; notes nodes carry
    ``"notes"``. Anything else in the payload (field values, cache flags) is
    kept but never interpreted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str | None = None
    type: str | None = None
    label: str = ""
    notes: str = ""


class GraphNode(BaseModel):
    """A node placed on the workflow canvas."""

    model_config = _FROZEN

    id: NodeID
    kind: NodeKind = Field(alias="type")
    data: NodeData = Field(default_factory=NodeData)
    position: Position = Field(default_factory=Position)

    @property
    def is_invocation(self) -> bool:
        return self.kind == NodeKind.INVOCATION

    @property
    def node_type(self) -> NodeTypeName | None:
        """Schema catalogue key, or None for annotation nodes."""
        if not self.is_invocation or self.data.type is None:
            return None
        return NodeTypeName(self.data.type)

    @property
    def display_label(self) -> str:
        """User label, falling back to the node type name."""
        return self.data.label or (self.data.type or "")


class GraphEdge(BaseModel):
    """A directed edge between two workflow nodes.

    Connection (``default``) edges join an output port of ``source`` to an
    input port of ``target`` and must name both handles.
    """

    model_config = _FROZEN

    id: EdgeID
    kind: EdgeKind = Field(default=EdgeKind.DEFAULT, alias="type")
    source: NodeID
    target: NodeID
    source_handle: PortName | None = Field(default=None, alias="sourceHandle")
    target_handle: PortName | None = Field(default=None, alias="targetHandle")
    hidden: bool = False

    @model_validator(mode="after")
    def _connection_edges_name_handles(self) -> GraphEdge:
        if self.kind == EdgeKind.DEFAULT and (not self.source_handle or not self.target_handle):
            raise ValueError(f"Connection edge '{self.id}' requires sourceHandle and targetHandle")
        return self

    @property
    def is_connection(self) -> bool:
        return self.kind == EdgeKind.DEFAULT

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.source, self.source_handle, self.target, self.target_handle)


class WorkflowGraph(BaseModel):
    """An ordered set of nodes and edges plus the workflow's descriptive metadata."""

    model_config = _FROZEN

    id: str | None = None
    name: str = ""
    author: str = ""
    description: str = ""
    version: str = ""
    contact: str = ""
    tags: str = ""
    notes: str = ""
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    exposed_fields: list[dict[str, Any]] = Field(default_factory=list, alias="exposedFields")
    meta: dict[str, Any] = Field(default_factory=dict)

    @field_validator("nodes")
    @classmethod
    def _unique_node_ids(cls, v: list[GraphNode]) -> list[GraphNode]:
        ids = [n.id for n in v]
        if len(ids) != len(set(ids)):
            dupes = {i for i in ids if ids.count(i) > 1}
            raise ValueError(f"Duplicate node ids: {sorted(dupes)}")
        return v

    def get_node(self, node_id: str) -> GraphNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def get_edge(self, edge_id: str) -> GraphEdge | None:
        return next((e for e in self.edges if e.id == edge_id), None)

    def node_ids(self) -> list[NodeID]:
        return [n.id for n in self.nodes]

    def connection_edges(self) -> list[GraphEdge]:
        """Edges of kind ``default``, in workflow order."""
        return [e for e in self.edges if e.is_connection]

    def invocation_types(self) -> list[NodeTypeName]:
        """Distinct schema keys of invocation nodes, in first-seen order."""
        seen: dict[NodeTypeName, None] = {}
        for node in self.nodes:
            if node.node_type is not None:
                seen.setdefault(node.node_type, None)
        return list(seen)


# =============================================================================
# Quizzes and player input
# =============================================================================


class Quiz(BaseModel):
    """A workflow together with the edges (and nodes) hidden from the player.

    ``hidden_edges`` and ``hidden_nodes`` keep the order of the quiz file.
    Hints and player node resolution both depend on that order.
    """

    model_config = _FROZEN

    id: QuizID
    name: str
    description: str = ""
    difficulty: QuizDifficulty = QuizDifficulty.EASY
    workflow: WorkflowGraph
    hidden_edges: list[EdgeID] = Field(default_factory=list, alias="hiddenEdges")
    hidden_nodes: list[NodeID] = Field(default_factory=list, alias="hiddenNodes")

    def hidden_answer_edges(self) -> list[GraphEdge]:
        """Hidden connection edges, in workflow order."""
        hidden = set(self.hidden_edges)
        return [e for e in self.workflow.connection_edges() if e.id in hidden]


class PlayerNodeMapping(BaseModel):
    """A node the player added, identified only by its declared type."""

    model_config = _FROZEN

    id: NodeID
    node_type: NodeTypeName = Field(alias="nodeType")


class EdgeProposal(BaseModel):
    """A single connection the player wants to make."""

    model_config = _FROZEN

    source_node: NodeID = Field(alias="sourceNode")
    source_handle: PortName = Field(alias="sourceHandle")
    target_node: NodeID = Field(alias="targetNode")
    target_handle: PortName = Field(alias="targetHandle")

    @classmethod
    def from_edge(cls, edge: GraphEdge) -> EdgeProposal:
        return cls(
            source_node=edge.source,
            source_handle=edge.source_handle or PortName(""),
            target_node=edge.target,
            target_handle=edge.target_handle or PortName(""),
        )

    @property
    def key(self) -> EdgeKey:
        return edge_key(self.source_node, self.source_handle, self.target_node, self.target_handle)


class Submission(BaseModel):
    """A full set of proposed edges plus the player's added nodes."""

    model_config = _FROZEN

    proposed_edges: list[GraphEdge] = Field(default_factory=list, alias="proposedEdges")
    player_node_mappings: list[PlayerNodeMapping] = Field(default_factory=list, alias="playerNodeMappings")
