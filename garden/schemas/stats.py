from __future__ import annotations

# Rendered on the wire as ``[metric, stat, value]``.
StatTuple = tuple[str, str, float]
