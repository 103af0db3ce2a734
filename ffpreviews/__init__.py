"""Top-level ffpreviews package.

Re-exports the subpackages so ``import ffpreviews`` wires up the whole pipeline.
"""

from importlib import import_module as _imp

_SUBPACKAGES = ["api", "compute", "report", "cli"]

for _name in _SUBPACKAGES:
    _imp(f"ffpreviews.{_name}")

__all__ = list(_SUBPACKAGES)
