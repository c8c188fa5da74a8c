"""Domain layer — safe values, escaping, and content conversion.

This layer depends only on the stdlib.
It must never import from plugins, config, or cli at module level.
"""
