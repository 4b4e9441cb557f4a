"""
Pixel class - packed RGB color used for pads and screen elements
"""

from typing import Tuple


class Pixel(int):
    """Color that packs RGB into an int, with RGB access and brightness helpers

    Usage:
        pixel = Pixel(255, 0, 0)        # Red
        pixel = Pixel(0xFF0000)         # Red from packed int
        pixel.rgb                       # (255, 0, 0) for pygame drawing
        pixel.scaled(0.35)              # Dimmed version of the same hue
    """

    def __new__(cls, r: int, g: int = None, b: int = None) -> 'Pixel':
        if g is None and b is None:
            return int.__new__(cls, r & 0xFFFFFF)
        if g is None or b is None:
            raise ValueError("Must provide either just int value or all three RGB values")
        return int.__new__(cls, ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF))

    @property
    def r(self) -> int:
        return (self >> 16) & 0xFF

    @property
    def g(self) -> int:
        return (self >> 8) & 0xFF

    @property
    def b(self) -> int:
        return self & 0xFF

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def scaled(self, factor: float) -> 'Pixel':
        """Same hue at factor brightness; channels clamp to 0-255"""
        def channel(value: int) -> int:
            return max(0, min(255, int(round(value * factor))))
        return Pixel(channel(self.r), channel(self.g), channel(self.b))

    def __repr__(self) -> str:
        return f"Pixel(r={self.r}, g={self.g}, b={self.b})"

    def __str__(self) -> str:
        return f"Pixel({self.r}, {self.g}, {self.b})"


BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)
