"""
Player schemas - Pydantic models for player/state definitions in YAML
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, List, Literal, Optional, Tuple, Union

from models.enums import TransitionTrigger


class TransformSchema(BaseModel):
    """Entity placement in world space"""
    model_config = ConfigDict(extra="forbid")

    x: float = 0.0
    y: float = 0.0
    rotation: float = Field(0.0, description="Rotation in degrees, counter-clockwise")
    scale: float = Field(1.0, gt=0, description="Uniform scale")


class PlaybackSchema(BaseModel):
    """Playback settings for a state (or the player's defaults)"""
    model_config = ConfigDict(extra="forbid")

    autoplay: bool = True
    direction: Literal["NORMAL", "REVERSE"] = "NORMAL"
    speed: float = Field(1.0, ge=0, description="Speed multiplier, 1.0 is normal speed")
    intermission: float = Field(0.0, ge=0, description="Seconds idle between loops")
    looping: Union[int, Literal["LOOP", "DO_NOT_LOOP"]] = Field(
        "LOOP",
        description="LOOP, DO_NOT_LOOP, or the number of extra loops"
    )
    segments: Optional[Tuple[float, float]] = Field(
        None,
        description="[start, end) frame range; omitted = whole composition"
    )

    @field_validator("direction", "looping", mode="before")
    @classmethod
    def upper_case(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("looping")
    @classmethod
    def non_negative_amount(cls, value):
        if isinstance(value, int) and value < 0:
            raise ValueError("looping amount must be >= 0")
        return value


class TransitionSchema(BaseModel):
    """One transition rule: {trigger: ON_MOUSE_ENTER, state: hover}"""
    model_config = ConfigDict(extra="forbid")

    trigger: str = Field(description="TransitionTrigger name, e.g. ON_AFTER")
    state: str = Field(description="Destination state id")
    secs: Optional[float] = Field(None, ge=0, description="Required for ON_AFTER")

    @field_validator("trigger", mode="before")
    @classmethod
    def known_trigger(cls, value):
        name = str(value).upper()
        if name not in TransitionTrigger.__members__:
            raise ValueError(
                f"unknown trigger '{value}' (expected one of {list(TransitionTrigger.__members__)})"
            )
        return name

    @model_validator(mode="after")
    def validate_secs(self):
        if self.trigger == TransitionTrigger.ON_AFTER.name and self.secs is None:
            raise ValueError("secs is required for ON_AFTER")
        return self


class StateSchema(BaseModel):
    """A named state of a player"""
    model_config = ConfigDict(extra="forbid")

    asset: Optional[str] = Field(None, description="Asset name; omitted = keep the bound asset")
    theme: Dict[str, str] = Field(default_factory=dict, description="Layer name -> hex colour")
    playback: Optional[PlaybackSchema] = None
    reset_playhead_on_transition: bool = False
    reset_playhead_on_start: bool = False
    transitions: List[TransitionSchema] = Field(default_factory=list)


class PlayerSchema(BaseModel):
    """A player entity with its state machine"""
    model_config = ConfigDict(extra="forbid")

    asset: str = Field(description="Asset bound at spawn")
    initial_state: str
    transform: TransformSchema = Field(default_factory=TransformSchema)
    playback: Optional[PlaybackSchema] = Field(None, description="Settings until the first commit")
    states: Dict[str, StateSchema] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_state_graph(self):
        if self.initial_state not in self.states:
            raise ValueError(f"initial_state '{self.initial_state}' is not one of {list(self.states)}")
        for state_id, state in self.states.items():
            for rule in state.transitions:
                if rule.state not in self.states:
                    raise ValueError(
                        f"state '{state_id}' has {rule.trigger} transition to unknown state '{rule.state}'"
                    )
        return self
