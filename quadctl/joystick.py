"""Layout of the wireless remote's 40-byte data block."""

import struct
from dataclasses import dataclass, field, fields

_BUTTONS = (
    "r1", "l1", "start", "select", "r2", "l2", "f1", "f2",
    "a", "b", "x", "y", "up", "right", "down", "left",
)

_LAYOUT = struct.Struct("<2sH5f16s")


@dataclass
class KeySwitch:
    """Sixteen button flags, bit 0 (R1) to bit 15 (left)."""

    r1: bool = False
    l1: bool = False
    start: bool = False
    select: bool = False
    r2: bool = False
    l2: bool = False
    f1: bool = False
    f2: bool = False
    a: bool = False
    b: bool = False
    x: bool = False
    y: bool = False
    up: bool = False
    right: bool = False
    down: bool = False
    left: bool = False

    @classmethod
    def from_value(cls, value):
        """Decode the 16-bit button word."""
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"button word must fit in 16 bits, got {value}")
        return cls(**{name: bool(value >> bit & 1) for bit, name in enumerate(_BUTTONS)})

    def to_value(self):
        """Encode the flags as the 16-bit button word."""
        return sum(1 << bit for bit, name in enumerate(_BUTTONS) if getattr(self, name))


@dataclass
class RockerBtnData:
    """Decoded remote data: header, buttons and five analog axes."""

    head: bytes = b"\x00\x00"
    btn: KeySwitch = field(default_factory=KeySwitch)
    lx: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    l2: float = 0.0
    ly: float = 0.0
    idle: bytes = bytes(16)

    SIZE = _LAYOUT.size

    @classmethod
    def from_bytes(cls, data):
        """Decode exactly 40 bytes."""
        raw = bytes(data)
        if len(raw) != _LAYOUT.size:
            raise ValueError(f"expected {_LAYOUT.size} bytes, got {len(raw)}")
        head, btn, lx, rx, ry, l2, ly, idle = _LAYOUT.unpack(raw)
        return cls(head, KeySwitch.from_value(btn), lx, rx, ry, l2, ly, idle)

    def to_bytes(self):
        """Encode as 40 bytes."""
        if len(self.head) != 2 or len(self.idle) != 16:
            raise ValueError("head must be 2 bytes and idle 16 bytes")
        return _LAYOUT.pack(
            bytes(self.head), self.btn.to_value(),
            self.lx, self.rx, self.ry, self.l2, self.ly, bytes(self.idle),
        )


assert [f.name for f in fields(KeySwitch)] == list(_BUTTONS)