"""sigfetch: download release artifacts and verify their signatures"""

__version__ = "0.1.0"
