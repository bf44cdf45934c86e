"""Asset loading for Cart Runner."""

from .store import AssetStore, image_manifest

__all__ = ["AssetStore", "image_manifest"]
