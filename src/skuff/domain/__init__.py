"""Domain layer: entities and the events that act on them.

Everything here is immutable and free of I/O.
"""
