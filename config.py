"""
Central configuration for the BMO games core.
Pydantic models give type-safe settings for the opponent engine, the maze
generator, the terminal front end and logging.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

DIFFICULTIES = ("easy", "medium", "hard")
MAZE_STRATEGIES = ("backtracker", "patterns")


class UISettings(BaseModel):
    """Terminal front end display settings."""

    use_unicode: bool = Field(default=True, description="Draw walls and marks with Unicode glyphs")
    show_indices: bool = Field(default=True, description="Show cell indices on empty board squares")

    @field_validator('use_unicode', 'show_indices', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class EngineSettings(BaseModel):
    """Tic-tac-toe opponent configuration."""

    default_difficulty: str = Field(default="medium", description="Difficulty used when none is given")
    random_move_probability: Dict[str, float] = Field(
        default_factory=lambda: {"easy": 0.7, "medium": 0.3, "hard": 0.0},
        description="Chance per move of skipping the search and playing a random empty cell",
    )
    use_pruning: bool = Field(default=True, description="Enable alpha-beta cutoffs")
    seed: Optional[int] = Field(default=None, description="Seed for the opponent's random source")

    @field_validator('default_difficulty', mode='before')
    @classmethod
    def validate_difficulty(cls, v):
        v_lower = str(v).lower()
        if v_lower not in DIFFICULTIES:
            raise ValueError(f"default_difficulty must be one of {DIFFICULTIES}")
        return v_lower

    @field_validator('random_move_probability')
    @classmethod
    def validate_probabilities(cls, v):
        missing = [d for d in DIFFICULTIES if d not in v]
        if missing:
            raise ValueError(f"random_move_probability is missing {missing}")
        for name, p in v.items():
            if not 0.0 <= float(p) <= 1.0:
                raise ValueError(f"probability for {name!r} must be within [0, 1]")
        return {k: float(p) for k, p in v.items()}


class MazeSettings(BaseModel):
    """Maze generator and maze run configuration."""

    grid_size: int = Field(default=15, ge=5, le=101, description="Odd side length of the square grid")
    strategy: str = Field(default="backtracker", description="Carving strategy: backtracker or patterns")
    total_levels: int = Field(default=10, ge=1, description="Levels in one maze run")
    extra_paths_per_level: int = Field(default=2, ge=0, description="Extra random openings added per level")
    max_extra_paths: int = Field(default=10, ge=0, description="Cap on extra random openings")
    max_generation_attempts: int = Field(default=20, ge=1, description="Lattice regenerations before a repair pass")
    base_time_limit: int = Field(default=300, ge=1, description="Seconds allowed on level 1")
    min_time_limit: int = Field(default=180, ge=1, description="Lower bound for the per-level time limit")
    time_step_per_level: int = Field(default=15, ge=0, description="Seconds removed per level")

    @field_validator('grid_size')
    @classmethod
    def validate_grid_size(cls, v):
        if v % 2 == 0:
            raise ValueError("grid_size must be odd")
        return v

    @field_validator('strategy', mode='before')
    @classmethod
    def validate_strategy(cls, v):
        v_lower = str(v).lower()
        if v_lower not in MAZE_STRATEGIES:
            raise ValueError(f"strategy must be one of {MAZE_STRATEGIES}")
        return v_lower


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="bmo.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class BmoConfig(BaseModel):
    """Main configuration model for the BMO games core."""

    ui: UISettings = Field(default_factory=UISettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    maze: MazeSettings = Field(default_factory=MazeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'BmoConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('BMO_SEED')
        return cls(
            ui=UISettings(
                use_unicode=os.getenv('BMO_UNICODE', 'true').lower() == 'true',
            ),
            engine=EngineSettings(
                default_difficulty=os.getenv('BMO_DIFFICULTY', 'medium'),
                seed=int(seed) if seed else None,
            ),
            maze=MazeSettings(
                grid_size=int(os.getenv('BMO_MAZE_SIZE', '15')),
                strategy=os.getenv('BMO_MAZE_STRATEGY', 'backtracker'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('BMO_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('BMO_LOG_FILE', 'false').lower() == 'true',
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'ui': self.ui.model_dump(),
            'engine': self.engine.model_dump(),
            'maze': self.maze.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'BmoConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            ui=UISettings(**data.get('ui', {})),
            engine=EngineSettings(**data.get('engine', {})),
            maze=MazeSettings(**data.get('maze', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary, re-validating each section."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[BmoConfig] = None


def get_config() -> BmoConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = BmoConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> BmoConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = BmoConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_ui_settings() -> UISettings:
    """Get terminal front end settings."""
    return get_config().ui


def get_engine_settings() -> EngineSettings:
    """Get opponent engine settings."""
    return get_config().engine


def get_maze_settings() -> MazeSettings:
    """Get maze generator settings."""
    return get_config().maze


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by env var BMO_LOG_LEVEL."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    kwargs: Dict[str, Any] = {}
    if settings.log_to_file:
        kwargs["filename"] = settings.log_file_path
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **kwargs,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
