"""Exceptions raised at Cart Runner's resource boundaries.

None of these ever reach the player: the component that owns the
resource catches them, logs, and falls back.
"""


class CartRunnerError(Exception):
    """Base class for package errors."""


class AssetError(CartRunnerError):
    """An image or sound could not be loaded."""

    def __init__(self, name: str, path: str, reason: str = "") -> None:
        self.name = name
        self.path = path
        super().__init__(f"Asset '{name}' unavailable ({path}){': ' + reason if reason else ''}")


class MicrophoneUnavailable(CartRunnerError):
    """No input device could be opened."""
