"""scope-graph: dependency graph and impact queries over a scope of versioned components."""

__version__ = "0.1.0"
