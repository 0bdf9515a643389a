"""Core configuration flags.

Flags are defined here rather than scattering ``os.getenv`` calls through the
parser, which keeps the pipeline easy to test.
"""

from __future__ import annotations

from .flags import FLAGS, Flags

__all__ = ["FLAGS", "Flags"]
