"""vmcheck: triggered alarm filtering and severity evaluation for vSphere checks."""

__version__ = "0.1.0"
