"""
Injection configuration for the Targeting context.

InjectionConfig is an immutable value passed explicitly to inject_keywords().
Defaults live on the dataclass; a YAML file and/or a dict of overrides can be
layered on top with OmegaConf, which also rejects unknown keys and values of
the wrong type.

Examples:
    >>> config = load_injection_config(overrides={"max_total_injections": 8})
    >>> config.max_total_injections
    8
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
CONFIG_PATH_ENV = "CVINJECT_CONFIG_PATH"

DEFAULT_INJECTION_TEMPLATES = [
    "Leveraged {kw} to optimize pipelines, achieving {metric}.",
    "Applied {kw} in Agile sprints for scalable ML solutions.",
    "Demonstrated expertise in {kw} across production deployments.",
    "Implemented {kw} strategies driving {metric} improvement.",
    "Built {kw} frameworks enabling cross-functional delivery.",
    "Orchestrated {kw} initiatives reducing operational overhead by {metric}.",
]

DEFAULT_METRIC_PHRASES = [
    "20% efficiency gain",
    "30% cost reduction",
    "40% faster delivery",
    "25% improvement",
    "15% productivity boost",
    "35% optimization",
    "50% time savings",
    "45% error reduction",
]

SYNTHETIC_BULLET_TEMPLATE = "Implemented {keywords} solutions, achieving {metric}"


@dataclass(frozen=True)
class InjectionConfig:
    """
    Limits and phrasing used by the keyword injector.

    Attributes:
        max_high_prio_skills: High-priority keywords considered for the skills list
        max_total_injections: Hard cap on injections per run (anti-stuffing)
        rotation_enabled: Rotate through injection templates; when False the
            first template is always used
        synthesize_bullets_for_first_entry_only: Only the first role may receive
            a synthetic bullet
        max_synthetic_bullets: Synthetic bullets allowed per run
        keywords_per_synthetic_bullet: Keywords combined into one synthetic bullet
        high_experience_pool_size: High-priority keywords in the experience pool
        medium_experience_pool_size: Medium-priority keywords in the experience pool
        max_rendered_bullets: Bullets per role shown by the renderers
        injection_templates: Phrases with {kw} and optional {metric} placeholders
        metric_phrases: Metric phrases substituted for {metric}
        synthetic_bullet_template: Phrase with {keywords} and {metric} placeholders
    """

    max_high_prio_skills: int = 5
    max_total_injections: int = 15
    rotation_enabled: bool = True
    synthesize_bullets_for_first_entry_only: bool = True
    max_synthetic_bullets: int = 2
    keywords_per_synthetic_bullet: int = 2
    high_experience_pool_size: int = 3
    medium_experience_pool_size: int = 2
    max_rendered_bullets: int = 6
    injection_templates: List[str] = field(
        default_factory=lambda: list(DEFAULT_INJECTION_TEMPLATES)
    )
    metric_phrases: List[str] = field(default_factory=lambda: list(DEFAULT_METRIC_PHRASES))
    synthetic_bullet_template: str = SYNTHETIC_BULLET_TEMPLATE

    def __post_init__(self):
        if self.max_total_injections < 0 or self.max_high_prio_skills < 0:
            raise ValueError("Injection limits must be non-negative")
        if not self.injection_templates:
            raise ValueError("At least one injection template is required")
        if not self.metric_phrases:
            raise ValueError("At least one metric phrase is required")


DEFAULT_CONFIG = InjectionConfig()


def load_injection_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> InjectionConfig:
    """
    Build an InjectionConfig from defaults, an optional YAML file and overrides.

    Layers are merged in order: dataclass defaults, YAML file, overrides.
    When config_path is None the CVINJECT_CONFIG_PATH environment variable is
    used if set.

    Args:
        config_path: YAML file with any subset of InjectionConfig fields
        overrides: Dict with any subset of InjectionConfig fields

    Returns:
        Frozen InjectionConfig

    Raises:
        omegaconf.errors.ConfigKeyError: If a layer contains an unknown key
        omegaconf.errors.ValidationError: If a value has the wrong type
        FileNotFoundError: If config_path does not exist
    """
    if config_path is None and os.getenv(CONFIG_PATH_ENV):
        config_path = Path(os.getenv(CONFIG_PATH_ENV))

    layers = [OmegaConf.structured(InjectionConfig)]
    if config_path is not None:
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Injection config not found: {config_path}")
        layers.append(OmegaConf.load(config_path))
    if overrides:
        layers.append(OmegaConf.create(overrides))

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)
