"""Walk a move script over a cube net, flat or folded."""

__version__ = "0.1.0"
