"""Configuration management for the N-Queens solver and analysis suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize search limits, reporting options and sweep settings.

File format (high-level)
------------------------
- solver_settings: search strategy, per-search time limit, stored-solution cap.
- reporting_settings: print threshold, output directory, run tag, datestamps.
- experiment_settings: board sizes to sweep and timed runs per size.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_solver_settings(self):
        """Return search settings (strategy, time limit, solution cap)."""
        return self.config.get("solver_settings", {})

    def get_reporting_settings(self):
        """Return reporting settings (threshold, output dir, filename policy)."""
        return self.config.get("reporting_settings", {})

    def get_experiment_settings(self):
        """Return sweep settings (board sizes, runs per size)."""
        return self.config.get("experiment_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
