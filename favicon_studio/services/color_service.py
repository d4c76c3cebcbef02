from __future__ import annotations

import numpy as np

from favicon_studio.models.favicon_model import SourceImage

AUTO_COLOR = "auto"

# pixels with lower alpha are ignored when averaging
ALPHA_THRESHOLD = 128


class ColorService:
    def dominant_color(self, source: SourceImage, fallback: str = "#ffffff") -> str:
        """
        Средний цвет непрозрачных пикселей в формате `#rrggbb`.
        Используется как цвет темы манифеста, если он не задан явно.
        """
        arr = np.asarray(source.pil_image.convert("RGBA"), dtype=np.float64)
        if arr.size == 0:
            return fallback
        rgb = arr[..., :3].reshape(-1, 3)
        alpha = arr[..., 3].reshape(-1)
        mask = alpha >= ALPHA_THRESHOLD
        if not mask.any():
            return fallback
        mean = np.clip(np.rint(rgb[mask].mean(axis=0)), 0, 255).astype(np.uint8)
        r, g, b = (int(c) for c in mean)
        return f"#{r:02x}{g:02x}{b:02x}"
