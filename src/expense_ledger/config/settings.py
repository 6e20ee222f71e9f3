from dataclasses import dataclass
from pathlib import Path
import json
from typing import Dict, Any

# Package defaults (bundled with code)
PACKAGE_CONFIG_DIR = Path(__file__).parent / "defaults"

# User configs (in the directory the ledger is run from)
USER_CONFIG_DIR = Path.cwd() / "config"

@dataclass
class LedgerSettings:
    """Runtime settings for the ledger"""
    data_file: Path = Path("expenses.dat")
    recent_days: int = 7
    log_level: str = "WARNING"

class ConfigLoader:
    """Load configuration with user overrides"""

    @staticmethod
    def load_config(config_name: str) -> Dict[str, Any]:
        """
        Load config with fallback: user config -> default config

        Args:
            config_name: Name of the config file (e.g., 'ledger.json')

        Raises:
            FileNotFoundError: If no config file was found

        Returns:
            Parsed JSON configuration
        """
        user_config_path = USER_CONFIG_DIR / config_name
        if user_config_path.exists():
            with open(user_config_path) as f:
                return json.load(f)

        default_config_path = PACKAGE_CONFIG_DIR / config_name
        if default_config_path.exists():
            with open(default_config_path) as f:
                return json.load(f)

        raise FileNotFoundError(
            f"Config file '{config_name}' not found in:\n"
            f" - {user_config_path}\n"
            f" - {default_config_path}"
        )

    @staticmethod
    def load_settings(config: Dict[str, Any] | None = None) -> LedgerSettings:
        """
        Build LedgerSettings from 'ledger.json', or from an injected dict.

        Keys missing from the config keep their defaults.
        """
        if config is None:
            try:
                config = ConfigLoader.load_config('ledger.json')
            except FileNotFoundError:
                config = {}

        defaults = LedgerSettings()
        return LedgerSettings(
            data_file=Path(config.get("data_file", defaults.data_file)),
            recent_days=int(config.get("recent_days", defaults.recent_days)),
            log_level=str(config.get("log_level", defaults.log_level)).upper(),
        )
