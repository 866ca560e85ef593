import random
from typing import Container, Optional, Sequence

from .constants import COLOR_PALETTE, PRODUCT_ID_PREFIX


class ProductIdFactory:
    """Draws ``p`` + 10 hex digit ids, re-drawing on collision with ``existing``."""

    def __init__(self, rng: Optional[random.Random] = None, prefix: str = PRODUCT_ID_PREFIX):
        self.rng = rng or random.Random()
        self.prefix = prefix

    def __call__(self, existing: Container[str] = ()) -> str:
        while True:
            candidate = f"{self.prefix}{self.rng.getrandbits(40):010x}"
            if candidate not in existing:
                return candidate


class ColorPicker:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        palette: Sequence[str] = COLOR_PALETTE,
    ):
        if not palette:
            raise ValueError("ColorPicker needs a non-empty palette")
        self.rng = rng or random.Random()
        self.palette = tuple(palette)

    def __call__(self) -> str:
        return self.rng.choice(self.palette)
