"""Infrastructure layer: lockfile loading, repo lists, NetworkX graph.

This layer depends on stdlib, the domain model and third-party libs
(NetworkX). It must never import from services, commands, or output.
"""
