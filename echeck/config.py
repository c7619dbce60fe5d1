"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class EcheckConfig(BaseSettings):
    """Electronic check system configuration"""
    
    # Storage configuration
    storage_backend: str = "sqlite"  # sqlite or memory
    database_path: str = "echeck.db"
    ledger_key: str = "sudaneseElectronicChecks"
    
    # Check issuance configuration
    jurisdiction: str = "Sudan"
    currency_suffix: str = "جنيه سوداني"
    
    # Verification configuration
    verify_signature: bool = False  # Also recompute the signature on verify
    
    # QR configuration
    qr_size: int = 250
    qr_error_correction: str = "H"  # L, M, Q or H
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    class Config:
        env_prefix = "ECHECK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = EcheckConfig()


def get_config() -> EcheckConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> EcheckConfig:
    """Reload configuration from environment"""
    global config
    config = EcheckConfig()
    return config
