"""Prometheus metrics for the dependency graph engine.

Collected in-process; callers that want to expose them can use
prometheus_client's exposition helpers on the default registry.
"""

from prometheus_client import Counter, Gauge, Histogram

# Graph loading metrics
GRAPH_LOADS = Counter(
    "tooldeps_graph_loads_total",
    "Total number of graph snapshots loaded",
)

GRAPH_LOAD_DURATION = Histogram(
    "tooldeps_graph_load_duration_seconds",
    "Time to build a graph snapshot from records",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

GRAPH_NODES = Gauge(
    "tooldeps_graph_nodes",
    "Number of nodes in the most recently loaded graph",
)

GRAPH_EDGES = Gauge(
    "tooldeps_graph_edges",
    "Number of edges in the most recently loaded graph",
)

GRAPH_DANGLING_EDGES = Gauge(
    "tooldeps_graph_dangling_edges",
    "Edges referencing unknown tools in the most recently loaded graph",
)

STUBS_CREATED = Counter(
    "tooldeps_stubs_created_total",
    "Total number of stub nodes synthesized for unregistered providers",
)

# Graph traversal metrics
GRAPH_TRAVERSAL_DURATION = Histogram(
    "tooldeps_graph_traversal_duration_seconds",
    "Graph traversal duration",
    ["operation"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5],
)

GRAPH_TRAVERSAL_NODES = Histogram(
    "tooldeps_graph_traversal_nodes",
    "Number of nodes visited in graph traversal",
    ["operation"],
    buckets=[1, 5, 10, 25, 50, 100, 250, 500, 1000],
)

CYCLES_DETECTED = Counter(
    "tooldeps_cycles_detected_total",
    "Total number of dependency cycles reported",
)
