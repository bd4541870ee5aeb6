"""Graph, path and search primitives used by kspath."""
