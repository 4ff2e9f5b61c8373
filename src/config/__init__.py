"""Configuration package.

``src.config.settings`` reads the environment (and ``.env``) when it is
imported and fails fast without ``ALIGNMENT_API_BASE_URL``, so nothing is
imported here. Entry points import it lazily.
"""

__all__: list[str] = []
