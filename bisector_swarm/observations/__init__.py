"""
Watching the swarm.

- visualize: matplotlib presentation of points and heading arrows
"""
