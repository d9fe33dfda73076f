"""skuff: a personal time-tracking log built on an append-only event stream."""

__version__ = "0.3.0"
