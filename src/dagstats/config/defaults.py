"""
dagstats.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "parser": {
        # Reject malformed data lines instead of skipping them
        "strict": True,
    },
    "analysis": {
        # Per-node path enumeration limit, 0 = unbounded
        "max_paths": 0,
    },
    "output": {
        "format": "text",
        "depth_precision": 2,
        "ref_precision": 3,
    },
}
