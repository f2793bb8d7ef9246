"""
Environments the swarm lives in.

- bisector_field: 2D plane holding the points, their partners and controls
"""
