"""
Bisector Swarm: points chasing the perpendicular bisectors of their partners

Each point is given two partners and steers toward the line equidistant
from them. No point knows the whole swarm, yet a pattern emerges.
"""

__version__ = "0.1.0"
