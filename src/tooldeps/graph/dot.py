"""Graphviz DOT export of the dependency graph."""

from tooldeps.common.config import Settings
from tooldeps.common.exceptions import InvalidQueryError, ToolNotFoundError
from tooldeps.graph.store import DependencyGraph
from tooldeps.models.tool import ToolNode

# Fill colors per tool type
NODE_COLORS: dict[str, str] = {
    "library": "#e1f5fe",  # light blue
    "cli": "#e8f5e9",  # light green
    "mcp": "#f3e5f5",  # light purple
}
STUB_COLOR = "#eeeeee"
DEFAULT_COLOR = "#ffffff"


def escape_label(label: str) -> str:
    return label.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def quote_id(node_id: str) -> str:
    """Quote a tool id so any id is a distinct, valid DOT identifier."""
    return f'"{escape_label(node_id)}"'


def node_color(node: ToolNode) -> str:
    if node.stub:
        return STUB_COLOR
    return NODE_COLORS.get(node.type.value, DEFAULT_COLOR)


def generate_dot(
    graph: DependencyGraph,
    focus_id: str | None = None,
    max_depth: int | None = None,
    rankdir: str = "LR",
    colored: bool = True,
    settings: Settings | None = None,
) -> str:
    """Render the graph, or the neighborhood of one tool, as DOT.

    Args:
        graph: Graph snapshot.
        focus_id: Only include tools within ``max_depth`` hops of this tool.
        max_depth: Focus radius. Defaults to the configured focus depth.
        rankdir: Layout direction, ``LR`` or ``TB``.
        colored: Fill nodes by tool type.
        settings: Settings supplying the default focus depth. Uses the graph's if not provided.

    Returns:
        DOT source.

    Raises:
        ToolNotFoundError: If ``focus_id`` is not a registered tool.
        InvalidQueryError: If ``rankdir`` or ``max_depth`` is invalid.
    """
    if rankdir not in ("LR", "TB"):
        raise InvalidQueryError(f"Unsupported rankdir: {rankdir}", details={"rankdir": rankdir})

    lines = [
        "digraph tooldeps {",
        f"  rankdir={rankdir};",
        '  node [shape=box fontname="Arial" fontsize=10];',
        '  edge [fontname="Arial" fontsize=9];',
        "",
    ]

    if focus_id is not None:
        if not graph.has_node(focus_id):
            raise ToolNotFoundError(f"Tool '{focus_id}' not found", details={"tool_id": focus_id})
        settings = settings or graph.settings
        depth = settings.graph.default_focus_depth if max_depth is None else max_depth
        if depth < 0:
            raise InvalidQueryError(f"Focus depth must be >= 0, got {depth}", details={"depth": depth})
        included = graph.neighborhood(focus_id, depth)
    else:
        included = set(graph.node_ids())

    if not included:
        lines.append("  // Empty graph - no tools registered")
        lines.append("}")
        return "\n".join(lines)

    lines.append("  // Nodes")
    for node in graph.get_all_nodes():
        if node.id not in included:
            continue
        label = escape_label(f"{node.name}\n({node.type.value})")
        color = node_color(node) if colored else DEFAULT_COLOR
        style = "filled,dashed" if node.stub else "filled"
        emphasis = "2" if node.id == focus_id else "1"
        lines.append(
            f'  {quote_id(node.id)} [label="{label}" style="{style}" fillcolor="{color}" '
            f"penwidth={emphasis} peripheries={emphasis}];"
        )

    lines.append("")
    lines.append("  // Edges")
    for edge in graph.get_all_edges():
        if edge.consumer_id not in included or edge.provider_id not in included:
            continue
        source = quote_id(edge.consumer_id)
        target = quote_id(edge.provider_id)
        # Mutual dependency
        if graph.get_edge(edge.provider_id, edge.consumer_id) is not None:
            lines.append(f'  {source} -> {target} [color="red" style="dashed"];')
        else:
            lines.append(f"  {source} -> {target};")

    lines.append("}")
    return "\n".join(lines)
