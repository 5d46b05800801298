"""core/live_api — Pure derived layer over the host object-model accessor.

This package contains zero I/O and never talks to the host directly.
Identifier normalization, property codecs, path index extraction, and the
browser relation walk are deterministic functions of their inputs.

Host-bound facades (``LiveObject``, ``Browser``) live in ingestion/.
"""
