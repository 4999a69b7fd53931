"""
dagstats.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "paths",
    "stats",
]
