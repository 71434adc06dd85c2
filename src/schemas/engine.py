"""
Engine schemas - top-level config document, engine options and assets
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, Literal, Optional

from models.enums import LogLevel
from schemas.player import PlayerSchema


class EngineSchema(BaseModel):
    """Tick loop and logging options"""
    model_config = ConfigDict(extra="forbid")

    fps: int = Field(60, gt=0, description="Tick rate of the async tick loop")
    log_level: str = Field("INFO", description="DEBUG, INFO, WARN or ERROR")
    use_colors: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def known_level(cls, value):
        name = str(value).upper()
        if name not in LogLevel.__members__:
            raise ValueError(f"unknown log level '{value}'")
        return name


class AssetSchema(BaseModel):
    """Composition bounds of a named asset (decoding happens elsewhere)"""
    model_config = ConfigDict(extra="forbid")

    kind: Literal["LOTTIE", "SVG"] = "LOTTIE"
    frame_start: float = 0.0
    frame_end: Optional[float] = None
    frame_rate: float = Field(30.0, gt=0)
    width: float = Field(100.0, gt=0)
    height: float = Field(100.0, gt=0)
    preload: bool = Field(True, description="False = reserve the handle, load later")

    @field_validator("kind", mode="before")
    @classmethod
    def upper_case(cls, value):
        return str(value).upper()

    @model_validator(mode="after")
    def validate_frames(self):
        if self.kind == "LOTTIE":
            if self.frame_end is None:
                raise ValueError("frame_end is required for LOTTIE assets")
            if self.frame_end <= self.frame_start:
                raise ValueError("frame_end must be greater than frame_start")
        return self


class ConfigSchema(BaseModel):
    """Whole merged configuration document"""
    model_config = ConfigDict(extra="ignore")

    engine: EngineSchema = Field(default_factory=EngineSchema)
    assets: Dict[str, AssetSchema] = Field(default_factory=dict)
    players: Dict[str, PlayerSchema] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_asset_refs(self):
        for name, player in self.players.items():
            refs = [player.asset] + [s.asset for s in player.states.values() if s.asset]
            for ref in refs:
                if ref not in self.assets:
                    raise ValueError(f"player '{name}' references unknown asset '{ref}'")
        return self
