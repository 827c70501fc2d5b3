"""Packed little-endian messages exchanged with the robot's motion controller."""

import struct
from dataclasses import dataclass, field

HIGHLEVEL = 0xEE
LOWLEVEL = 0xFF
TRIGGERLEVEL = 0xF0
POS_STOP_F = 2.146e9
VEL_STOP_F = 16000.0


def _zeros(count, value=0):
    return field(default_factory=lambda: [value] * count)


def _many(cls, count):
    return field(default_factory=lambda: [cls() for _ in range(count)])


class _Packed:
    """Base of messages whose wire form is described by ``_LAYOUT``.

    Each layout entry is ``(attribute, spec)`` where ``spec`` is a struct
    format character, a nested message class, ``(char, count)`` for a list
    of scalars, ``("s", count)`` for raw bytes, or ``(cls, count)`` for a
    list of nested messages.
    """

    _LAYOUT = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._STRUCT = struct.Struct("<" + cls._format())
        cls.SIZE = cls._STRUCT.size

    @classmethod
    def _format(cls):
        parts = []
        for _, spec in cls._LAYOUT:
            if isinstance(spec, str):
                parts.append(spec)
            elif isinstance(spec, type):
                parts.append(spec._format())
            else:
                kind, count = spec
                if isinstance(kind, type):
                    parts.append(kind._format() * count)
                else:
                    parts.append(f"{count}{kind}")
        return "".join(parts)

    def _values(self):
        for name, spec in self._LAYOUT:
            value = getattr(self, name)
            if isinstance(spec, str):
                yield value
            elif isinstance(spec, type):
                yield from value._values()
            else:
                kind, count = spec
                if len(value) != count:
                    raise ValueError(
                        f"{type(self).__name__}.{name} needs {count} items, got {len(value)}"
                    )
                if kind == "s":
                    yield bytes(value)
                elif isinstance(kind, type):
                    for item in value:
                        yield from item._values()
                else:
                    yield from value

    @classmethod
    def _take(cls, values):
        kwargs = {}
        for name, spec in cls._LAYOUT:
            if isinstance(spec, str):
                kwargs[name] = next(values)
            elif isinstance(spec, type):
                kwargs[name] = spec._take(values)
            else:
                kind, count = spec
                if kind == "s":
                    kwargs[name] = next(values)
                elif isinstance(kind, type):
                    kwargs[name] = [kind._take(values) for _ in range(count)]
                else:
                    kwargs[name] = [next(values) for _ in range(count)]
        return cls(**kwargs)

    def to_bytes(self):
        """Encode in the packed wire format."""
        try:
            return self._STRUCT.pack(*self._values())
        except struct.error as exc:
            raise ValueError(f"cannot encode {type(self).__name__}: {exc}") from exc

    @classmethod
    def from_bytes(cls, data):
        """Decode exactly ``SIZE`` bytes."""
        raw = bytes(data)
        if len(raw) != cls.SIZE:
            raise ValueError(f"{cls.__name__} needs {cls.SIZE} bytes, got {len(raw)}")
        return cls._take(iter(cls._STRUCT.unpack(raw)))


@dataclass
class BmsCmd(_Packed):
    """Battery command; ``off`` = 0xA5 switches the battery off."""

    off: int = 0
    reserve: list = _zeros(3)

    _LAYOUT = (("off", "B"), ("reserve", ("B", 3)))


@dataclass
class BmsState(_Packed):
    """Battery status: charge in percent, current in mA, cell voltages in mV."""

    version_h: int = 0
    version_l: int = 0
    bms_status: int = 0
    soc: int = 0
    current: int = 0
    cycle: int = 0
    bq_ntc: list = _zeros(2)
    mcu_ntc: list = _zeros(2)
    cell_vol: list = _zeros(10)

    _LAYOUT = (
        ("version_h", "B"),
        ("version_l", "B"),
        ("bms_status", "B"),
        ("soc", "B"),
        ("current", "i"),
        ("cycle", "H"),
        ("bq_ntc", ("b", 2)),
        ("mcu_ntc", ("b", 2)),
        ("cell_vol", ("H", 10)),
    )


@dataclass
class Cartesian(_Packed):
    """A point or velocity in three dimensions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    _LAYOUT = (("x", "f"), ("y", "f"), ("z", "f"))


@dataclass
class IMU(_Packed):
    """IMU reading: quaternion (w, x, y, z), rad/s, m/s^2 and roll-pitch-yaw."""

    quaternion: list = _zeros(4, 0.0)
    gyroscope: list = _zeros(3, 0.0)
    accelerometer: list = _zeros(3, 0.0)
    rpy: list = _zeros(3, 0.0)
    temperature: int = 0

    _LAYOUT = (
        ("quaternion", ("f", 4)),
        ("gyroscope", ("f", 3)),
        ("accelerometer", ("f", 3)),
        ("rpy", ("f", 3)),
        ("temperature", "b"),
    )


@dataclass
class LED(_Packed):
    """Foot LED brightness, 0..255 per channel."""

    r: int = 0
    g: int = 0
    b: int = 0

    _LAYOUT = (("r", "B"), ("g", "B"), ("b", "B"))


@dataclass
class MotorState(_Packed):
    """Feedback of one motor."""

    mode: int = 0
    q: float = 0.0
    dq: float = 0.0
    ddq: float = 0.0
    tau_est: float = 0.0
    q_raw: float = 0.0
    dq_raw: float = 0.0
    ddq_raw: float = 0.0
    temperature: int = 0
    reserve: list = _zeros(2)

    _LAYOUT = (
        ("mode", "B"),
        ("q", "f"),
        ("dq", "f"),
        ("ddq", "f"),
        ("tau_est", "f"),
        ("q_raw", "f"),
        ("dq_raw", "f"),
        ("ddq_raw", "f"),
        ("temperature", "b"),
        ("reserve", ("I", 2)),
    )


@dataclass
class MotorCmd(_Packed):
    """Command to one motor: target angle, velocity, torque and gains."""

    mode: int = 0
    q: float = 0.0
    dq: float = 0.0
    tau: float = 0.0
    kp: float = 0.0
    kd: float = 0.0
    reserve: list = _zeros(3)

    _LAYOUT = (
        ("mode", "B"),
        ("q", "f"),
        ("dq", "f"),
        ("tau", "f"),
        ("kp", "f"),
        ("kd", "f"),
        ("reserve", ("I", 3)),
    )


_HEADER = (
    ("head", ("B", 2)),
    ("level_flag", "B"),
    ("frame_reserve", "B"),
    ("sn", ("I", 2)),
    ("version", ("I", 2)),
    ("band_width", "H"),
)


@dataclass
class LowState(_Packed):
    """Low-level feedback of the whole robot."""

    head: list = _zeros(2)
    level_flag: int = 0
    frame_reserve: int = 0
    sn: list = _zeros(2)
    version: list = _zeros(2)
    band_width: int = 0
    imu: IMU = field(default_factory=IMU)
    motor_state: list = _many(MotorState, 20)
    bms: BmsState = field(default_factory=BmsState)
    foot_force: list = _zeros(4)
    foot_force_est: list = _zeros(4)
    tick: int = 0
    wireless_remote: bytes = bytes(40)
    reserve: int = 0
    crc: int = 0

    _LAYOUT = _HEADER + (
        ("imu", IMU),
        ("motor_state", (MotorState, 20)),
        ("bms", BmsState),
        ("foot_force", ("h", 4)),
        ("foot_force_est", ("h", 4)),
        ("tick", "I"),
        ("wireless_remote", ("s", 40)),
        ("reserve", "I"),
        ("crc", "I"),
    )

    def to_bytes(self):
        """Encode the low-level state in its wire format."""
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data):
        """Decode a low-level state of exactly ``SIZE`` bytes."""
        return super().from_bytes(data)


@dataclass
class LowCmd(_Packed):
    """Low-level command to the whole robot."""

    head: list = _zeros(2)
    level_flag: int = 0
    frame_reserve: int = 0
    sn: list = _zeros(2)
    version: list = _zeros(2)
    band_width: int = 0
    motor_cmd: list = _many(MotorCmd, 20)
    bms: BmsCmd = field(default_factory=BmsCmd)
    wireless_remote: bytes = bytes(40)
    reserve: int = 0
    crc: int = 0

    _LAYOUT = _HEADER + (
        ("motor_cmd", (MotorCmd, 20)),
        ("bms", BmsCmd),
        ("wireless_remote", ("s", 40)),
        ("reserve", "I"),
        ("crc", "I"),
    )

    def to_bytes(self):
        """Encode the low-level command in its wire format."""
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data):
        """Decode a low-level command of exactly ``SIZE`` bytes."""
        return super().from_bytes(data)


@dataclass
class HighState(_Packed):
    """High-level feedback: gait, odometry and foot positions."""

    head: list = _zeros(2)
    level_flag: int = 0
    frame_reserve: int = 0
    sn: list = _zeros(2)
    version: list = _zeros(2)
    band_width: int = 0
    imu: IMU = field(default_factory=IMU)
    motor_state: list = _many(MotorState, 20)
    bms: BmsState = field(default_factory=BmsState)
    foot_force: list = _zeros(4)
    foot_force_est: list = _zeros(4)
    mode: int = 0
    progress: float = 0.0
    gait_type: int = 0
    foot_raise_height: float = 0.0
    position: list = _zeros(3, 0.0)
    body_height: float = 0.0
    velocity: list = _zeros(3, 0.0)
    yaw_speed: float = 0.0
    range_obstacle: list = _zeros(4, 0.0)
    foot_position2body: list = _many(Cartesian, 4)
    foot_speed2body: list = _many(Cartesian, 4)
    wireless_remote: bytes = bytes(40)
    reserve: int = 0
    crc: int = 0

    _LAYOUT = _HEADER + (
        ("imu", IMU),
        ("motor_state", (MotorState, 20)),
        ("bms", BmsState),
        ("foot_force", ("h", 4)),
        ("foot_force_est", ("h", 4)),
        ("mode", "B"),
        ("progress", "f"),
        ("gait_type", "B"),
        ("foot_raise_height", "f"),
        ("position", ("f", 3)),
        ("body_height", "f"),
        ("velocity", ("f", 3)),
        ("yaw_speed", "f"),
        ("range_obstacle", ("f", 4)),
        ("foot_position2body", (Cartesian, 4)),
        ("foot_speed2body", (Cartesian, 4)),
        ("wireless_remote", ("s", 40)),
        ("reserve", "I"),
        ("crc", "I"),
    )

    def to_bytes(self):
        """Encode the high-level state in its wire format."""
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data):
        """Decode a high-level state of exactly ``SIZE`` bytes."""
        return super().from_bytes(data)


@dataclass
class HighCmd(_Packed):
    """High-level command.

    ``mode``: 0 idle, 1 force stand, 2 velocity walking, 3 position walking,
    4 path mode, 5 stand down, 6 stand up, 7 damping, 8 recovery stand,
    9 backflip, 10 jump yaw, 11 straight hand, 12 dance1, 13 dance2.
    ``gait_type``: 0 idle, 1 trot, 2 trot running, 3 climb stair, 4 trot obstacle.
    """

    head: list = _zeros(2)
    level_flag: int = 0
    frame_reserve: int = 0
    sn: list = _zeros(2)
    version: list = _zeros(2)
    band_width: int = 0
    mode: int = 0
    gait_type: int = 0
    speed_level: int = 0
    foot_raise_height: float = 0.0
    body_height: float = 0.0
    position: list = _zeros(2, 0.0)
    euler: list = _zeros(3, 0.0)
    velocity: list = _zeros(2, 0.0)
    yaw_speed: float = 0.0
    bms: BmsCmd = field(default_factory=BmsCmd)
    led: list = _many(LED, 4)
    wireless_remote: bytes = bytes(40)
    reserve: int = 0
    crc: int = 0

    _LAYOUT = _HEADER + (
        ("mode", "B"),
        ("gait_type", "B"),
        ("speed_level", "B"),
        ("foot_raise_height", "f"),
        ("body_height", "f"),
        ("position", ("f", 2)),
        ("euler", ("f", 3)),
        ("velocity", ("f", 2)),
        ("yaw_speed", "f"),
        ("bms", BmsCmd),
        ("led", (LED, 4)),
        ("wireless_remote", ("s", 40)),
        ("reserve", "I"),
        ("crc", "I"),
    )

    def to_bytes(self):
        """Encode the high-level command in its wire format."""
        return super().to_bytes()

    @classmethod
    def from_bytes(cls, data):
        """Decode a high-level command of exactly ``SIZE`` bytes."""
        return super().from_bytes(data)


HIGH_CMD_LENGTH = HighCmd.SIZE
HIGH_STATE_LENGTH = HighState.SIZE


@dataclass
class UDPState:
    """Counters of the UDP link."""

    total_count: int = 0
    send_count: int = 0
    recv_count: int = 0
    send_error: int = 0
    flag_error: int = 0
    recv_crc_error: int = 0
    recv_lose_error: int = 0