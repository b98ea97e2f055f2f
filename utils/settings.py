"""Environment-driven settings for the Q&A service."""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None:
        return float(default)
    try:
        value = float(raw)
    except ValueError:
        return float(default)
    return max(float(minimum), value)


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read once at application startup.

    Attributes:
        backend_url: Base URL of the remote upload/answer service, or None.
        force_offline: Ignore ``backend_url`` and always use the local stubs.
        request_timeout: httpx timeout for remote calls, in seconds.
        answer_timeout: Lifecycle timeout for one question; 0 disables it.
        simulated_latency: Delay applied by the offline stubs, in seconds.
        fallback_seed: Optional seed for the generic-answer random source.
    """

    backend_url: Optional[str] = None
    force_offline: bool = False
    request_timeout: float = 30.0
    answer_timeout: float = 0.0
    simulated_latency: float = 1.0
    fallback_seed: Optional[int] = None

    @property
    def offline(self) -> bool:
        return self.force_offline or not self.backend_url

    @classmethod
    def from_env(cls) -> "Settings":
        backend_url = (os.getenv("QA_BACKEND_URL") or "").strip() or None
        return cls(
            backend_url=backend_url,
            force_offline=_env_bool("QA_OFFLINE_MODE", False),
            request_timeout=_env_float("QA_REQUEST_TIMEOUT_S", 30.0, minimum=0.1),
            answer_timeout=_env_float("QA_ANSWER_TIMEOUT_S", 0.0),
            simulated_latency=_env_float("QA_SIMULATED_LATENCY_S", 1.0),
            fallback_seed=_env_optional_int("QA_FALLBACK_SEED"),
        )
