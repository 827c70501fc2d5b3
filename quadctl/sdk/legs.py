"""Robot models, leg and joint numbering, and joint angle limits."""

from dataclasses import dataclass
from enum import Enum, auto

# Leg indices.
FR = 0
FL = 1
RR = 2
RL = 3

# Joint indices within a leg.
HIP = 0
THIGH = 1
CALF = 2

LEG_COUNT = 4
JOINTS_PER_LEG = 3


class LeggedType(Enum):
    """Robot models known to the communication layer."""

    Aliengo = auto()
    A1 = auto()
    Go1 = auto()
    B1 = auto()


class HighLevelType(Enum):
    """Flavour of high-level control."""

    Basic = auto()
    Sport = auto()


@dataclass(frozen=True)
class JointLimits:
    """Allowed joint angles of one robot model, in radians."""

    hip_max: float
    hip_min: float
    thigh_max: float
    thigh_min: float
    calf_max: float
    calf_min: float

    def for_joint(self, joint):
        """Return ``(minimum, maximum)`` for a joint index (hip, thigh or calf)."""
        if joint == HIP:
            return self.hip_min, self.hip_max
        if joint == THIGH:
            return self.thigh_min, self.thigh_max
        if joint == CALF:
            return self.calf_min, self.calf_max
        raise ValueError(f"joint must be within 0..{JOINTS_PER_LEG - 1}, got {joint}")


_LIMITS = {
    LeggedType.A1: JointLimits(
        hip_max=0.802,  # 46 degree
        hip_min=-0.802,  # -46 degree
        thigh_max=4.19,  # 240 degree
        thigh_min=-1.05,  # -60 degree
        calf_max=-0.916,  # -52.5 degree
        calf_min=-2.7,  # -154.5 degree
    ),
    LeggedType.Aliengo: JointLimits(
        hip_max=1.047,  # 60 degree
        hip_min=-0.873,  # -50 degree
        thigh_max=3.927,  # 225 degree
        thigh_min=-0.524,  # -30 degree
        calf_max=-0.611,  # -35 degree
        calf_min=-2.775,  # -159 degree
    ),
    LeggedType.Go1: JointLimits(
        hip_max=1.047,  # 60 degree
        hip_min=-1.047,  # -60 degree
        thigh_max=2.966,  # 170 degree
        thigh_min=-0.663,  # -38 degree
        calf_max=-0.837,  # -48 degree
        calf_min=-2.721,  # -156 degree
    ),
}


def joint_limits(legged_type):
    """Joint angle limits of a robot model.

    Raises ValueError for a model whose limits are not known.
    """
    try:
        return _LIMITS[legged_type]
    except KeyError:
        raise ValueError(f"no joint limits known for {legged_type}") from None


def joint_index(leg, joint):
    """Motor index (0..11) of ``joint`` on ``leg``."""
    if not 0 <= leg < LEG_COUNT:
        raise ValueError(f"leg must be within 0..{LEG_COUNT - 1}, got {leg}")
    if not 0 <= joint < JOINTS_PER_LEG:
        raise ValueError(f"joint must be within 0..{JOINTS_PER_LEG - 1}, got {joint}")
    return JOINTS_PER_LEG * leg + joint