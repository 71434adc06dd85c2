"""Engine exceptions"""


class UnknownStateError(KeyError):
    """A state id that is not registered on the player"""

    def __init__(self, state_id: str):
        super().__init__(state_id)
        self.state_id = state_id

    def __str__(self) -> str:
        return f"state not found: '{self.state_id}'"


class InvalidTransitionError(ValueError):
    """A player's state graph references a state that does not exist"""


class UnsupportedAssetError(TypeError):
    """A frame-based rule was evaluated against an asset without frames"""


class ConfigError(ValueError):
    """Player/asset definitions in the YAML config are invalid"""
