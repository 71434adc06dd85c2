"""
Config Manager

Loads modular YAML files (include: directive), falls back to factory
defaults, and validates the merged document into typed schemas.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from engine.errors import ConfigError
from models.enums import LogCategory, LogLevel
from schemas import ConfigSchema
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Example:
        config = ConfigManager()
        config.load()

        config.engine.fps                  # EngineSchema
        config.players["button"].states    # Dict[str, StateSchema]
    """

    def __init__(
        self,
        config_path="config/config.yaml",
        defaults_path="config/factory_defaults.yaml",
        base_dir: Optional[Path] = None
    ):
        """
        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir is not None else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}
        self.schema: Optional[ConfigSchema] = None

    def load(self) -> ConfigSchema:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat it as a monolithic config
        4. Fallback to factory defaults on read/parse failure
        5. Validate, then apply the engine's logging options

        Raises:
            ConfigError: the merged document does not validate
        """
        full_path = self.base_dir / self.config_path
        try:
            self.data = self._read(full_path)
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config", path=str(full_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read_file(self.base_dir / self.factory_defaults_path)

        self.schema = self.validate(self.data)
        engine = self.schema.engine
        configure_logger(LogLevel[engine.log_level], engine.use_colors)

        log.info(
            "Configuration loaded",
            assets=len(self.schema.assets),
            players=len(self.schema.players),
            fps=engine.fps
        )
        return self.schema

    def _read(self, path: Path) -> Dict:
        main_config = self._read_file(path)
        if "include" in main_config:
            log.info("Using include-based configuration")
            return self._load_with_includes(main_config["include"], path.parent)
        log.info("Using monolithic configuration")
        return main_config

    @staticmethod
    def _read_file(path: Path) -> Dict:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Top-level keys of later files replace earlier ones.
        """
        merged = {}

        for filename in include_list:
            file_data = self._read_file(config_dir / filename)
            if file_data:
                merged.update(file_data)
                log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())))
        return merged

    @staticmethod
    def validate(data: Dict) -> ConfigSchema:
        try:
            return ConfigSchema.model_validate(data)
        except ValidationError as ex:
            for err in ex.errors():
                log.error("Invalid config entry", location=".".join(str(p) for p in err["loc"]), reason=err["msg"])
            raise ConfigError(f"Invalid configuration ({ex.error_count()} errors)") from ex

    # ===== Accessors =====

    def _require(self) -> ConfigSchema:
        if self.schema is None:
            raise RuntimeError("ConfigManager.load() has not been called")
        return self.schema

    @property
    def engine(self):
        return self._require().engine

    @property
    def assets(self):
        return self._require().assets

    @property
    def players(self):
        return self._require().players
