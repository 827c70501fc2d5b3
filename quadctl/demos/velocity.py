"""Low-level velocity control of the front-right thigh joint.

After a settling period the thigh follows a sinusoidal speed command with
the motor's position loop off and a damping gain on velocity.
"""

import math

from quadctl.sdk.comm import LOWLEVEL, POS_STOP_F, LowCmd
from quadctl.sdk.legs import FL, FR, HIP, RL, RR, THIGH, joint_index

_FR_1 = joint_index(FR, THIGH)

_HIP_GRAVITY_TAU = {
    joint_index(FR, HIP): -0.65,
    joint_index(FL, HIP): 0.65,
    joint_index(RR, HIP): -0.65,
    joint_index(RL, HIP): 0.65,
}

START_CYCLE = 500
SPEED_AMPLITUDE = 2.0
PROTECT_AFTER = 10


class VelocityDemo:
    """Produces one low-level command per control cycle.

    ``protect`` is an optional power-protection check ``(cmd, state) -> int``
    run after the first ten cycles; a negative result aborts with
    :class:`RuntimeError`.
    """

    dt = 0.002

    def __init__(self, protect=None):
        self.cmd = LowCmd(level_flag=LOWLEVEL)
        self.protect = protect
        self.tpi = 0
        self.motiontime = 0

    def step(self, state):
        """Advance one cycle from the received ``state`` and return the command."""
        self.motiontime += 1

        for motor_id, tau in _HIP_GRAVITY_TAU.items():
            self.cmd.motor_cmd[motor_id].tau = tau

        if self.motiontime >= START_CYCLE:
            speed = SPEED_AMPLITUDE * math.sin(3 * math.pi * self.tpi / 1500.0)
            motor = self.cmd.motor_cmd[_FR_1]
            motor.q = POS_STOP_F
            motor.dq = speed
            motor.kp = 0.0
            motor.kd = 4.0
            motor.tau = 0.0
            self.tpi += 1

        if self.motiontime > PROTECT_AFTER:
            if self.protect is not None and self.protect(self.cmd, state) < 0:
                raise RuntimeError("power protection triggered")

        return self.cmd