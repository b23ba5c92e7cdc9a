"""Context-based fitness and precision of object-centric Petri nets against object-centric event logs."""

__version__ = "0.1.0"