"""
Command line entry points.

- run.py: Build a field from config and watch it swarm
"""
