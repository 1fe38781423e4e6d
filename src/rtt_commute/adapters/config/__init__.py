"""Configuration adapters."""

from rtt_commute.adapters.config.app_config import AppConfig
from rtt_commute.adapters.config.tracker_configuration_loader import TrackerConfigurationLoader

__all__ = ["AppConfig", "TrackerConfigurationLoader"]
