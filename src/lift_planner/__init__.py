"""lift-planner: strength periodization planning."""

__version__ = "0.1.0"
