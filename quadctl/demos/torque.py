"""Low-level torque control of the front-right thigh joint.

After a settling period the thigh is driven by a clamped PD torque law
toward zero angle, with the motor's own position and velocity loops off.
"""

from quadctl.sdk.comm import LOWLEVEL, POS_STOP_F, VEL_STOP_F, LowCmd
from quadctl.sdk.legs import FL, FR, HIP, RL, RR, THIGH, joint_index

_FR_1 = joint_index(FR, THIGH)

_HIP_GRAVITY_TAU = {
    joint_index(FR, HIP): -0.65,
    joint_index(FL, HIP): 0.65,
    joint_index(RR, HIP): -0.65,
    joint_index(RL, HIP): 0.65,
}

START_CYCLE = 500
TORQUE_LIMIT = 5.0


class TorqueDemo:
    """Produces one low-level command per control cycle.

    ``protect`` is an optional power-protection check ``(cmd, state) -> int``
    run every cycle; a negative result aborts with :class:`RuntimeError`.
    """

    dt = 0.002

    def __init__(self, protect=None):
        self.cmd = LowCmd(level_flag=LOWLEVEL)
        self.protect = protect
        self.motiontime = 0

    def step(self, state):
        """Advance one cycle from the received ``state`` and return the command."""
        self.motiontime += 1

        for motor_id, tau in _HIP_GRAVITY_TAU.items():
            self.cmd.motor_cmd[motor_id].tau = tau

        if self.motiontime >= START_CYCLE:
            thigh = state.motor_state[_FR_1]
            torque = (0 - thigh.q) * 10.0 + (0 - thigh.dq) * 1.0
            torque = min(max(torque, -TORQUE_LIMIT), TORQUE_LIMIT)

            motor = self.cmd.motor_cmd[_FR_1]
            motor.q = POS_STOP_F
            motor.dq = VEL_STOP_F
            motor.kp = 0.0
            motor.kd = 0.0
            motor.tau = torque

        if self.protect is not None and self.protect(self.cmd, state) < 0:
            raise RuntimeError("power protection triggered")

        return self.cmd