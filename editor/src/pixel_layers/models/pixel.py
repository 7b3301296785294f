"""
Pixel Layers - Pixel Domain Model

Canonical RGBA colour value for the entire package.
Every colour read from or written to a layer flows through this class.
"""

from typing import Iterable, List, Optional, Tuple


class Pixel:
    """Immutable RGBA colour with float channels.

    Channels are conceptually normalized to [0, 1] but are NOT clamped:
    callers may pass out-of-range values and the blend formula defines what
    happens to them. Clamping only happens at the 8-bit conversion boundary
    (to_rgba255, to_hex, to_qcolor).
    """

    __slots__ = ('_r', '_g', '_b', '_a')

    def __init__(self, r: float, g: float, b: float, a: float = 1.0):
        """Direct construction from float channel values.

        Args:
            r: Red component
            g: Green component
            b: Blue component
            a: Alpha component (default opaque)
        """
        self._r = float(r)
        self._g = float(g)
        self._b = float(b)
        self._a = float(a)

    @property
    def r(self) -> float:
        """Red component - READ ONLY"""
        return self._r

    @property
    def g(self) -> float:
        """Green component - READ ONLY"""
        return self._g

    @property
    def b(self) -> float:
        """Blue component - READ ONLY"""
        return self._b

    @property
    def a(self) -> float:
        """Alpha component - READ ONLY"""
        return self._a

    # ========================================
    # Output Methods
    # ========================================

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to (r, g, b, a) float tuple"""
        return (self._r, self._g, self._b, self._a)

    def to_rgba255(self) -> List[int]:
        """Convert to RGBA uint8 list [0-255], clamping out-of-range channels.

        Returns:
            List of [r, g, b, a] in 0-255 range
        """
        return [_channel_to_255(c) for c in self.to_tuple()]

    def to_hex(self) -> str:
        """Convert to hex colour string: #RRGGBBAA"""
        r, g, b, a = self.to_rgba255()
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"

    def to_qcolor(self):
        """Convert to PyQt5 QColor object.

        Returns:
            QColor: Qt colour object for UI rendering
        """
        from PyQt5.QtGui import QColor
        r, g, b, a = self.to_rgba255()
        return QColor(r, g, b, a)

    def is_transparent(self) -> bool:
        """True when alpha is zero (colour channels are ignored)"""
        return self._a == 0.0

    # ========================================
    # Static Factory Methods
    # ========================================

    @staticmethod
    def clear() -> 'Pixel':
        """Fully transparent pixel (0, 0, 0, 0)"""
        return Pixel(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_tuple(values: Iterable[float]) -> 'Pixel':
        """Create Pixel from an (r, g, b) or (r, g, b, a) sequence.

        Args:
            values: Three or four float channels; alpha defaults to 1.0

        Returns:
            Pixel object

        Raises:
            ValueError: If the sequence does not have 3 or 4 items
        """
        channels = [float(v) for v in values]
        if len(channels) == 3:
            channels.append(1.0)
        if len(channels) != 4:
            raise ValueError(f"Expected 3 or 4 channels, got {len(channels)}")
        return Pixel(*channels)

    @staticmethod
    def from_rgba255(r: int, g: int, b: int, a: int = 255) -> 'Pixel':
        """Create Pixel from RGBA uint8 values (0-255)"""
        return Pixel(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @staticmethod
    def from_hex(hex_string: str) -> Optional['Pixel']:
        """Create Pixel from #RRGGBB or #RRGGBBAA (leading # optional).

        Returns:
            Pixel object if parse succeeds, None otherwise
        """
        if not isinstance(hex_string, str):
            return None

        hex_string = hex_string.lstrip('#')
        if len(hex_string) not in (6, 8):
            return None

        try:
            parts = [int(hex_string[i:i + 2], 16) for i in range(0, len(hex_string), 2)]
        except ValueError:
            return None
        return Pixel.from_rgba255(*parts)

    # ========================================
    # Equality and Hashing
    # ========================================

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __iter__(self):
        """Allow tuple unpacking: r, g, b, a = pixel"""
        return iter(self.to_tuple())

    def __repr__(self) -> str:
        return f"Pixel({self._r:g}, {self._g:g}, {self._b:g}, {self._a:g})"


def _channel_to_255(value: float) -> int:
    return max(0, min(255, int(round(value * 255))))
