"""Star catalog readers, session data, quaternions and date helpers for planning observations."""

__version__ = "0.1.0"