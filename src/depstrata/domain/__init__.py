"""Domain layer: package tree model, ownership rules, walk and layering.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
