"""Domain layer — YAML node model, extraction helpers, and records.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, commands, output, or config.
"""
