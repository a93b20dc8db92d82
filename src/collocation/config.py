from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv

load_dotenv(Path.cwd() / ".env", override=False)


def _env_optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    default_kernel: str = field(default_factory=lambda: os.getenv("COLLOCATION_KERNEL", "triangular"))
    vectorized: bool = field(default_factory=lambda: _env_flag("COLLOCATION_VECTORIZED", True))
    # None means sqrt(machine epsilon) of the data's element type
    singular_rtol: float | None = field(
        default_factory=lambda: _env_optional_float("COLLOCATION_SINGULAR_RTOL")
    )
    n_jobs: int = field(default_factory=lambda: int(os.getenv("COLLOCATION_N_JOBS", "1")))


settings = Settings()

__all__ = ["Settings", "settings"]
