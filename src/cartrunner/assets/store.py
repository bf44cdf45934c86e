"""Image assets by logical name.

Every image is loaded by its own one-shot future. A failed load only
removes that one image; painters check for ``None`` and draw a
programmatic fallback instead.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import pygame

from cartrunner.core.exceptions import AssetError

logger = logging.getLogger(__name__)

PRODUCT_COUNT = 15
CONFETTI_FRAMES = 22


def image_manifest(
    product_count: int = PRODUCT_COUNT,
    confetti_frames: int = CONFETTI_FRAMES,
) -> dict[str, str]:
    """Logical name -> path relative to the assets directory."""
    manifest = {
        "cart": "Assets/Cart.png",
        "box": "Assets/Box.png",
        "map": "Assets/Maps_Merged.png",
        "splash": "Assets/Opening.png",
        "win_screen": "Assets/Reference_004.1.png",
        "lose_screen": "Assets/Reference_004.2.png",
        "final_screen": "Assets/SceneProduct.png",
    }
    for i in range(1, product_count + 1):
        ext = "jpeg" if i <= 3 else "png"
        manifest[f"product{i}"] = f"Assets/{i}_Brand.{ext}"
        manifest[f"qr{i}"] = f"Assets/{i}_Qrcode.png"
    for i in range(confetti_frames):
        manifest[f"confetti{i}"] = f"Confetti/{i}.png"
    return manifest


class AssetStore:
    def __init__(self, root: Path, manifest: Optional[dict[str, str]] = None) -> None:
        self.root = Path(root)
        self.manifest = manifest if manifest is not None else image_manifest()
        self._images: dict[str, pygame.Surface] = {}
        self._failed: set[str] = set()

    def image(self, name: str) -> Optional[pygame.Surface]:
        return self._images.get(name)

    @property
    def loaded(self) -> int:
        return len(self._images)

    @property
    def failed(self) -> set[str]:
        return set(self._failed)

    def _load_image(self, name: str, rel_path: str) -> pygame.Surface:
        path = self.root / rel_path
        if not path.exists():
            raise AssetError(name, str(path), "file not found")
        try:
            return pygame.image.load(str(path))
        except pygame.error as e:
            raise AssetError(name, str(path), str(e)) from e

    async def load_all(self) -> None:
        """Load every image concurrently; failures degrade individually."""
        names = list(self.manifest)
        results = await asyncio.gather(
            *(asyncio.to_thread(self._load_image, n, self.manifest[n]) for n in names),
            return_exceptions=True,
        )

        for name, result in zip(names, results):
            if isinstance(result, BaseException):
                self._failed.add(name)
                logger.debug(f"Using fallback for {name}: {result}")
            else:
                # Pixel-format conversion needs the display; keep it off the worker threads
                if pygame.display.get_surface() is not None:
                    result = result.convert_alpha()
                self._images[name] = result

        if self._failed:
            logger.warning(
                f"{len(self._failed)} of {len(names)} images unavailable, using fallbacks"
            )
        logger.info(f"Loaded {self.loaded} images from {self.root}")
