"""High-level command sequence: body poses, stand down/up, then walking."""

from quadctl.sdk.comm import HIGHLEVEL, HighCmd

_SCHEDULED_FIELDS = (
    "mode",
    "gait_type",
    "speed_level",
    "foot_raise_height",
    "body_height",
    "euler",
    "velocity",
    "yaw_speed",
    "reserve",
)

# (start, end, settings) for start < motiontime < end.
_SCHEDULE = (
    (0, 1000, {"mode": 1, "euler": [-0.3, 0.0, 0.0]}),
    (1000, 2000, {"mode": 1, "euler": [0.3, 0.0, 0.0]}),
    (2000, 3000, {"mode": 1, "euler": [0.0, -0.2, 0.0]}),
    (3000, 4000, {"mode": 1, "euler": [0.0, 0.2, 0.0]}),
    (4000, 5000, {"mode": 1, "euler": [0.0, 0.0, -0.2]}),
    (5000, 6000, {"mode": 1, "euler": [0.0, 0.0, 0.2]}),
    (6000, 7000, {"mode": 1, "body_height": -0.2}),
    (7000, 8000, {"mode": 1, "body_height": 0.1}),
    (8000, 9000, {"mode": 1, "body_height": 0.0}),
    (9000, 11000, {"mode": 5}),
    (11000, 13000, {"mode": 6}),
    (13000, 14000, {"mode": 0}),
    (
        14000,
        18000,
        {
            "mode": 2,
            "gait_type": 2,
            "velocity": [0.4, 0.0],
            "yaw_speed": 2.0,
            "foot_raise_height": 0.1,
        },
    ),
    (18000, 20000, {"mode": 0, "velocity": [0.0, 0.0]}),
    (
        20000,
        24000,
        {"mode": 2, "gait_type": 1, "velocity": [0.2, 0.0], "body_height": 0.1},
    ),
    (24000, float("inf"), {"mode": 1}),
)


def walk_command(motiontime):
    """High-level command scheduled for ``motiontime`` (in milliseconds).

    Outside every window, including the exact window boundaries, the robot
    idles in its default stand.
    """
    cmd = HighCmd(level_flag=HIGHLEVEL)
    for start, end, settings in _SCHEDULE:
        if start < motiontime < end:
            for name, value in settings.items():
                setattr(cmd, name, list(value) if isinstance(value, list) else value)
    return cmd


class WalkDemo:
    """Steps through :func:`walk_command`, two milliseconds per cycle."""

    dt = 0.002

    def __init__(self, log=print):
        self.cmd = HighCmd(level_flag=HIGHLEVEL)
        self.log = log
        self.motiontime = 0

    def step(self, state):
        """Advance one cycle from the received high-level ``state``; return the command."""
        self.motiontime += 2
        self.log(f"{self.motiontime}   {state.imu.quaternion[2]:f}")
        scheduled = walk_command(self.motiontime)
        for name in _SCHEDULED_FIELDS:
            setattr(self.cmd, name, getattr(scheduled, name))
        return self.cmd