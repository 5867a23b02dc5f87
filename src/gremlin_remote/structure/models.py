"""Graph structure models returned by (or sent to) the remote engine.

Elements (vertices, edges and vertex properties) compare by ``id`` only.
Their ``id`` and ``label`` are frozen once built; the property map may be
replaced wholesale with ``set_properties`` once the deserializer has
filled it in.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gremlin_remote.structure.utils import are_equal, stable_hash, summarize


class Property(BaseModel):
    """A key/value pair attached to an edge or used as a meta-property."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any = None

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Property)
            and self.key == other.key
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.key, self.value))

    def __str__(self) -> str:
        return f"p[{self.key}->{summarize(self.value)}]"


class Element(BaseModel):
    """Base for graph objects with an opaque identifier and a label."""

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    id: Any = Field(frozen=True)
    label: str = Field(default="", frozen=True)
    properties: dict[str, Any] = Field(default_factory=dict)

    def set_properties(self, properties: Mapping[str, Any] | None) -> None:
        """Replace the whole property map. Nothing is merged."""
        self.properties = dict(properties or {})

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and self.id == other.id

    def __hash__(self) -> int:
        return stable_hash(self.id)


class VertexProperty(Element):
    """A vertex property: an element with its own id plus key/value semantics.

    The label doubles as the property key. Equality stays id-only, so two
    vertex properties with the same value but different ids are distinct.
    """

    value: Any = Field(default=None, frozen=True)
    properties: dict[str, Property] = Field(default_factory=dict)

    @property
    def key(self) -> str:
        return self.label

    def __str__(self) -> str:
        return f"vp[{self.label}->{summarize(self.value)}]"


class Vertex(Element):
    label: str = Field(default="vertex", frozen=True)
    properties: dict[str, list[VertexProperty]] = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"v[{self.id}]"


class Edge(Element):
    """An edge between two vertices.

    ``out_v`` and ``in_v`` are plain references; the edge does not own
    the vertices and several edges may point at the same instance.
    """

    label: str = Field(default="edge", frozen=True)
    out_v: Vertex | None = Field(default=None, alias="outV", frozen=True)
    in_v: Vertex | None = Field(default=None, alias="inV", frozen=True)
    properties: dict[str, Property] = Field(default_factory=dict)

    def __str__(self) -> str:
        out_id = self.out_v.id if self.out_v is not None else "?"
        in_id = self.in_v.id if self.in_v is not None else "?"
        return f"e[{self.id}][{out_id}-{self.label}->{in_id}]"


class Path(BaseModel):
    """A walk through the graph: step labels parallel to visited objects."""

    labels: list[Any] = Field(default_factory=list, frozen=True)
    objects: list[Any] = Field(default_factory=list, frozen=True)

    @model_validator(mode="after")
    def _check_lengths(self) -> Path:
        if len(self.labels) != len(self.objects):
            raise ValueError(
                f"Path has {len(self.labels)} labels but {len(self.objects)} objects"
            )
        return self

    def __len__(self) -> int:
        return len(self.objects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return False
        if other is self:
            return True
        return are_equal(self.objects, other.objects) and are_equal(self.labels, other.labels)

    def __str__(self) -> str:
        return f"path[{', '.join(str(obj) for obj in self.objects)}]"
