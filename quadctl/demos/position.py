"""Low-level position control of the front-right leg.

The leg first records its starting pose, then moves to a middle pose
with moderate gains, and finally swings the calf joint along a sine wave.
"""

import math

from quadctl.sdk.comm import LOWLEVEL, LowCmd
from quadctl.sdk.legs import CALF, FL, FR, HIP, RL, RR, THIGH, joint_index

_FR_0 = joint_index(FR, HIP)
_FR_1 = joint_index(FR, THIGH)
_FR_2 = joint_index(FR, CALF)

# Gravity compensation torques on the hip joints.
_HIP_GRAVITY_TAU = {
    joint_index(FR, HIP): -0.65,
    joint_index(FL, HIP): 0.65,
    joint_index(RR, HIP): -0.65,
    joint_index(RL, HIP): 0.65,
}

SIN_MID_Q = (0.0, 1.2, -2.0)
RECORD_END = 10
APPROACH_END = 400
APPROACH_STEPS = 200.0


def joint_linear_interpolation(init_pos, target_pos, rate):
    """Blend from ``init_pos`` to ``target_pos``; ``rate`` is clamped to [0, 1]."""
    rate = min(max(rate, 0.0), 1.0)
    return init_pos * (1 - rate) + target_pos * rate


class PositionDemo:
    """Produces one low-level command per control cycle.

    ``protect`` is an optional power-protection check ``(cmd, state) -> int``;
    a negative result aborts with :class:`RuntimeError`. ``position_limit`` is
    an optional ``(cmd) -> None`` hook that clips the command to joint limits.
    Both run only after the first ten cycles.
    """

    dt = 0.002

    def __init__(self, protect=None, position_limit=None, log=print):
        self.cmd = LowCmd(level_flag=LOWLEVEL)
        self.protect = protect
        self.position_limit = position_limit
        self.log = log
        self.q_init = [0.0, 0.0, 0.0]
        self.q_des = [0.0, 0.0, 0.0]
        self.kp = [0.0, 0.0, 0.0]
        self.kd = [0.0, 0.0, 0.0]
        self.rate_count = 0
        self.sin_count = 0
        self.motiontime = 0

    def step(self, state):
        """Advance one cycle from the received ``state`` and return the command."""
        self.motiontime += 1
        fr_thigh = state.motor_state[_FR_1]
        self.log(f"{self.motiontime}  {fr_thigh.q:f}  {fr_thigh.dq:f}")

        for motor_id, tau in _HIP_GRAVITY_TAU.items():
            self.cmd.motor_cmd[motor_id].tau = tau

        if 0 <= self.motiontime < RECORD_END:
            self.q_init = [float(state.motor_state[m].q) for m in (_FR_0, _FR_1, _FR_2)]

        if RECORD_END <= self.motiontime < APPROACH_END:
            self.rate_count += 1
            rate = self.rate_count / APPROACH_STEPS
            self.kp = [5.0, 5.0, 5.0]
            self.kd = [1.0, 1.0, 1.0]
            self.q_des = [
                joint_linear_interpolation(init, mid, rate)
                for init, mid in zip(self.q_init, SIN_MID_Q)
            ]

        if self.motiontime >= APPROACH_END:
            self.sin_count += 1
            sin_joint2 = -0.6 * math.sin(1.8 * math.pi * self.sin_count / 1000.0)
            self.q_des = [SIN_MID_Q[0], SIN_MID_Q[1], SIN_MID_Q[2] + sin_joint2]

        for motor_id, q, kp, kd, tau in zip(
            (_FR_0, _FR_1, _FR_2), self.q_des, self.kp, self.kd, (-0.65, 0.0, 0.0)
        ):
            motor = self.cmd.motor_cmd[motor_id]
            motor.q = q
            motor.dq = 0.0
            motor.kp = kp
            motor.kd = kd
            motor.tau = tau

        if self.motiontime > RECORD_END:
            if self.position_limit is not None:
                self.position_limit(self.cmd)
            if self.protect is not None and self.protect(self.cmd, state) < 0:
                raise RuntimeError("power protection triggered")

        return self.cmd