"""
API layer of the presentation package.

Versioned routers, dependencies and schemas live under ``v1``.
"""
