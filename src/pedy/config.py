"""Configuration management for the pedy application."""

import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class AppConfig:
    """Application configuration."""
    
    def __init__(self):
        self.log_level = os.getenv('LOG_LEVEL', 'INFO')
        self.debug = os.getenv('DEBUG', 'false').lower() == 'true'
        self.timezone = os.getenv('TIMEZONE', 'America/Sao_Paulo')


class PricingConfig:
    """Checkout pricing configuration."""
    
    def __init__(self):
        # Neighborhood value customers pick when theirs is not listed
        self.other_neighborhood = os.getenv('OTHER_NEIGHBORHOOD', 'outros')
        self.snapshot_dir = os.getenv('SNAPSHOT_DIR', 'data/menus')


def configure_logging(level=None):
    """Apply the configured log level to the root logger."""
    level = level or ('DEBUG' if app_config.debug else app_config.log_level)
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


# Global configuration instances
app_config = AppConfig()
pricing_config = PricingConfig()
