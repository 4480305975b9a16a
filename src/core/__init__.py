"""
Core primitives of the seminorm engine.

Scalars, vector spaces, the Seminorm value type, numerical safeguards,
configuration and JSON contracts. Independent of the lattice, geometry and
continuity layers built on top of it.
"""
