"""Enumerations shared across the controller."""

from enum import Enum, auto


class CtrlPlatform(Enum):
    """Where the controller runs."""

    GAZEBO = auto()
    REALROBOT = auto()


class RobotType(Enum):
    """Supported robot models."""

    A1 = auto()
    Go1 = auto()


class UserCommand(Enum):
    """Commands a user can issue from a command panel."""

    NONE = auto()
    START = auto()  # trotting
    L2_A = auto()  # fixed stand
    L2_B = auto()  # passive
    L2_X = auto()  # free stand
    L1_X = auto()  # balance test
    L1_A = auto()  # swing test
    L1_Y = auto()  # step test


class FrameType(Enum):
    """Reference frame of a position or velocity."""

    BODY = auto()
    HIP = auto()
    GLOBAL = auto()


class WaveStatus(Enum):
    """Mode of the gait wave generator."""

    STANCE_ALL = auto()
    SWING_ALL = auto()
    WAVE_ALL = auto()


class FSMMode(Enum):
    """Whether the state machine is running a state or switching."""

    NORMAL = auto()
    CHANGE = auto()


class FSMStateName(Enum):
    """Names of the controller's states."""

    INVALID = auto()
    PASSIVE = auto()
    FIXEDSTAND = auto()
    FREESTAND = auto()
    TROTTING = auto()
    BALANCETEST = auto()
    SWINGTEST = auto()
    STEPTEST = auto()