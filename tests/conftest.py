"""Global pytest configuration.

Registers the shared graph fixtures from `tests.lib.algorithms.sample_graphs`
as a plugin so that pytest imports it with assertion rewriting enabled.
"""

from __future__ import annotations

pytest_plugins = ["tests.lib.algorithms.sample_graphs"]
