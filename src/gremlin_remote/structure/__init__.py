"""Graph structure models: elements, properties and paths."""

from gremlin_remote.structure.graph import Graph
from gremlin_remote.structure.models import (
    Edge,
    Element,
    Path,
    Property,
    Vertex,
    VertexProperty,
)

__all__ = ["Edge", "Element", "Graph", "Path", "Property", "Vertex", "VertexProperty"]
