"""Shortest and k-shortest path search algorithms."""
