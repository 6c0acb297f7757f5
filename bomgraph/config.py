"""
Project settings

Merges environment variables (.env) with the settings file
(configs/settings.yaml) into typed settings objects.

Usage:
    from bomgraph.config import get_settings
    settings = get_settings()
    print(settings.cache.score_max_size)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

_config_logger = logging.getLogger(__name__)


@dataclass
class NamespaceSettings:
    """Graph namespaces"""
    base_uri: str = "http://www.jfc.com/tiptop/ontology#"
    hc_uri: str = "http://www.jfc.com/tiptop/hydraulic-cylinder#"


@dataclass
class CacheSettings:
    """Similarity/search cache sizing"""
    score_max_size: int = 10000
    score_ttl_seconds: float = 3600.0   # 1 hour
    result_max_size: int = 100
    result_ttl_seconds: float = 1800.0  # 30 minutes


@dataclass
class ReasonerSettings:
    """External reasoner call settings"""
    type: str = "OWL_RL"
    timeout_seconds: float = 30.0
    rules_path: Path = field(default_factory=lambda: PROJECT_ROOT / "configs" / "reasoning_rules.yaml")


@dataclass
class LoggingSettings:
    """Logging settings"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class PathSettings:
    """Path settings"""
    project_root: Path = field(default_factory=lambda: PROJECT_ROOT)
    configs_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "configs")


@dataclass
class Settings:
    """
    Project-wide settings

    Environment variables take precedence over the settings file.
    """
    namespace: NamespaceSettings = field(default_factory=NamespaceSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    reasoner: ReasonerSettings = field(default_factory=ReasonerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    paths: PathSettings = field(default_factory=PathSettings)


def _load_yaml_settings(settings_path: Path) -> dict:
    """Load the YAML settings file"""
    if not settings_path.exists():
        return {}

    with open(settings_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(settings: Settings) -> None:
    """Apply environment variable overrides

    Invalid values are logged and the file/default value is kept.
    """
    timeout = os.getenv("BOMGRAPH_REASONER_TIMEOUT")
    if timeout:
        try:
            settings.reasoner.timeout_seconds = float(timeout)
        except ValueError:
            _config_logger.warning(
                f"BOMGRAPH_REASONER_TIMEOUT is not a number: {timeout!r} "
                f"(keeping {settings.reasoner.timeout_seconds}s)"
            )

    log_level = os.getenv("BOMGRAPH_LOG_LEVEL")
    if log_level:
        if isinstance(logging.getLevelName(log_level.upper()), int):
            settings.logging.level = log_level.upper()
        else:
            _config_logger.warning(f"BOMGRAPH_LOG_LEVEL is not a valid level: {log_level!r}")


def _create_settings() -> Settings:
    """Build the settings object"""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_config = _load_yaml_settings(PROJECT_ROOT / "configs" / "settings.yaml")

    settings = Settings()

    if "namespace" in yaml_config:
        settings.namespace = NamespaceSettings(**yaml_config["namespace"])

    if "cache" in yaml_config:
        settings.cache = CacheSettings(**yaml_config["cache"])

    if "reasoner" in yaml_config:
        reasoner_config = dict(yaml_config["reasoner"])
        if "rules_path" in reasoner_config:
            rules_path = Path(reasoner_config["rules_path"])
            if not rules_path.is_absolute():
                rules_path = PROJECT_ROOT / rules_path
            reasoner_config["rules_path"] = rules_path
        settings.reasoner = ReasonerSettings(**reasoner_config)

    if "logging" in yaml_config:
        settings.logging = LoggingSettings(**yaml_config["logging"])

    _apply_env_overrides(settings)

    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the settings object (singleton)

    Loaded on first call, cached afterwards.

    Returns:
        Settings: project settings

    Example:
        >>> settings = get_settings()
        >>> settings.cache.result_max_size
        100
    """
    return _create_settings()


def reload_settings() -> Settings:
    """
    Reload settings

    Clears the cache and loads settings again. Mostly for tests.

    Returns:
        Settings: freshly loaded settings
    """
    get_settings.cache_clear()
    return get_settings()


def setup_logging(settings: "Settings" = None) -> None:
    """Configure root logging from settings"""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=settings.logging.format,
    )
