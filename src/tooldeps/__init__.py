"""tooldeps - Tool Dependency Graph Engine.

Tracks dependencies between the tools of an ecosystem and answers
blast-radius questions: what breaks if a tool changes, what a tool needs,
and how reliable its dependency chain is.
"""

__version__ = "0.1.0"
