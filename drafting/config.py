from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_MODE = "competitive"
DEFAULT_ANALYSIS_TIMEOUT_S = 60
DEFAULT_ANALYSIS_RETRIES = 3


@dataclass(frozen=True)
class EngineConfig:
    default_mode: str
    catalog_path: Optional[Path]
    synergy_rules_path: Optional[Path]


@dataclass(frozen=True)
class AnalysisServiceConfig:
    url: Optional[str]
    api_key: Optional[str]
    timeout_s: int
    retries: int

    @property
    def enabled(self) -> bool:
        return bool(self.url)


def _optional_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def engine_config_from_env() -> EngineConfig:
    return EngineConfig(
        default_mode=os.environ.get("DRAFTING_DEFAULT_MODE", DEFAULT_MODE),
        catalog_path=_optional_path("DRAFTING_CATALOG"),
        synergy_rules_path=_optional_path("DRAFTING_SYNERGY_RULES"),
    )


def analysis_config_from_env() -> AnalysisServiceConfig:
    return AnalysisServiceConfig(
        url=os.environ.get("ANALYSIS_SERVICE_URL") or None,
        api_key=os.environ.get("ANALYSIS_API_KEY") or None,
        timeout_s=_int_env("ANALYSIS_TIMEOUT_S", DEFAULT_ANALYSIS_TIMEOUT_S),
        retries=max(1, _int_env("ANALYSIS_RETRIES", DEFAULT_ANALYSIS_RETRIES)),
    )
