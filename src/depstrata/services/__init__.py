"""Service layer: analysis operations returning ServiceResult.

Services may import from domain, infrastructure and output layers.
They must never import from commands.
"""
