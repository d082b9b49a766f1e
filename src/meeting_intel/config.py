"""
Configuration loader for Meeting Intelligence.
Loads configuration from YAML files and environment variables.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml
import os
from pydantic import BaseModel, field_validator
from zoneinfo import ZoneInfoNotFoundError
import logging

from .core.clock import resolve_timezone

logger = logging.getLogger(__name__)


class MeetingIntelConfig(BaseModel):
    """Main Meeting Intelligence configuration."""

    # Environment
    environment: str = "development"
    debug: bool = True

    # Deployment-wide zone for day/week boundaries (IANA name)
    timezone: str = "UTC"

    # Deadline sweep
    dedup_window_hours: int = 24
    upcoming_window_hours: int = 24
    deadline_sweep_schedule: str = "0 * * * *"  # hourly
    scheduler_enabled: bool = False

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Shared secret for cron-triggered job runs
    cron_api_key: str = ""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8001
    api_prefix: str = "/api"

    # Logging
    log_level: str = "INFO"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            resolve_timezone(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    class Config:
        extra = "allow"


class ConfigLoader:
    """Load and manage Meeting Intelligence configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[MeetingIntelConfig] = None
        self.load()

    def load(self) -> MeetingIntelConfig:
        """Load configuration from YAML and environment variables."""

        # Determine which config file to load
        env = os.getenv("MEETING_INTEL_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        # Load default config first
        default_config = self._load_yaml(self.config_dir / "default.yaml")

        # Override with environment-specific config
        if config_file.exists():
            env_config = self._load_yaml(config_file)
            default_config.update(env_config)
        else:
            logger.warning(f"Config file not found: {config_file}, using defaults")

        # Override with environment variables
        default_config.update(self._load_from_env())
        default_config.setdefault("environment", env)

        self.config = MeetingIntelConfig(**default_config)

        logger.info(f"Configuration loaded (environment: {self.config.environment}, timezone: {self.config.timezone})")

        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except Exception as e:
            logger.error(f"Failed to load YAML config {path}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        if environment := os.getenv("ENVIRONMENT"):
            config["environment"] = environment
        if tz := os.getenv("MEETING_INTEL_TIMEZONE"):
            config["timezone"] = tz
        if log_level := os.getenv("MEETING_INTEL_LOG_LEVEL"):
            config["log_level"] = log_level
        if scheduler := os.getenv("MEETING_INTEL_SCHEDULER"):
            config["scheduler_enabled"] = scheduler.lower() == "true"
        if schedule := os.getenv("MEETING_INTEL_SWEEP_SCHEDULE"):
            config["deadline_sweep_schedule"] = schedule

        # Supabase
        if supabase_url := os.getenv("SUPABASE_URL"):
            config["supabase_url"] = supabase_url
        if supabase_key := os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY"):
            config["supabase_key"] = supabase_key

        if cron_api_key := os.getenv("CRON_API_KEY"):
            config["cron_api_key"] = cron_api_key

        # API configuration
        if api_port := os.getenv("MEETING_INTEL_API_PORT"):
            config["api_port"] = int(api_port)

        return config

    def get(self) -> MeetingIntelConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config

    def reload(self):
        """Reload configuration (useful for development)."""
        logger.info("Reloading configuration...")
        self.load()


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> MeetingIntelConfig:
    """Get the global Meeting Intelligence configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader()
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> MeetingIntelConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()


def reset_config():
    """Drop the cached configuration (tests)."""
    global _global_config_loader
    _global_config_loader = None
