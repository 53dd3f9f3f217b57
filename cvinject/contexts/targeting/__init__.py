"""
Targeting Context

Responsibilities:
- Decides where keywords go in a resume (skills list, bullets, synthetic bullets)
- Enforces anti-stuffing limits (per-run injection cap, one placement per keyword)
- Owns the injection configuration

Owns: Keyword placement, injection phrasing, injection statistics
Never: Parses raw text or produces output bytes
"""

from cvinject.contexts.targeting.config import (
    DEFAULT_CONFIG,
    InjectionConfig,
    load_injection_config,
)
from cvinject.contexts.targeting.keyword_injector import (
    InjectionResult,
    InjectionStats,
    inject_keywords,
)

__all__ = [
    "inject_keywords",
    "InjectionResult",
    "InjectionStats",
    "InjectionConfig",
    "DEFAULT_CONFIG",
    "load_injection_config",
]
