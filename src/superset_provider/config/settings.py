"""
Provider settings read from the environment.
"""
import os
from typing import Optional


class Config:
    @property
    def HOST(self) -> Optional[str]:
        """Superset base URL, e.g. https://superset.example.com."""
        return os.getenv("SUPERSET_HOST")

    @property
    def USERNAME(self) -> Optional[str]:
        return os.getenv("SUPERSET_USERNAME")

    @property
    def PASSWORD(self) -> Optional[str]:
        return os.getenv("SUPERSET_PASSWORD")

    @property
    def TIMEOUT(self) -> float:
        return float(os.getenv("SUPERSET_TIMEOUT", "30"))

    @property
    def DATABASE_CACHE_TTL(self) -> float:
        """Seconds a database listing snapshot stays valid."""
        return float(os.getenv("SUPERSET_DATABASE_CACHE_TTL", "300"))

    @property
    def VERIFY_SSL(self) -> bool:
        val = os.getenv("SUPERSET_VERIFY_SSL", "true").lower()
        return val in ("true", "1", "yes")

settings = Config()
