"""Adaptadores de I/O: cliente HTTP del daemon."""
