from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SEED_URL = "https://dummyjson.com/recipes?limit=30"
STORAGE_BACKENDS = ("firestore", "memory")


def _env_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclass
class Settings:
    """Process configuration read from environment variables."""

    port: int = 5000
    frontend_url: str = "http://localhost:5173"
    gcp_project: Optional[str] = None
    recipes_collection: str = "recipes"
    storage_backend: str = "firestore"
    seed_on_startup: bool = True
    seed_url: str = DEFAULT_SEED_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        backend = env.get("RECIPE_STORAGE", "firestore").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported RECIPE_STORAGE '{backend}'. Use one of: {', '.join(STORAGE_BACKENDS)}."
            )

        return cls(
            port=int(env.get("PORT", "5000")),
            frontend_url=env.get("FRONTEND_URL", "http://localhost:5173"),
            gcp_project=env.get("GCP_PROJECT") or None,
            recipes_collection=env.get("RECIPES_COLLECTION", "recipes"),
            storage_backend=backend,
            seed_on_startup=_env_bool(env.get("SEED_ON_STARTUP"), True),
            seed_url=env.get("SEED_URL", DEFAULT_SEED_URL),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


__all__ = ["Settings"]
