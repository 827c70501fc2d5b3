"""Joint-level commands sent to the twelve motors."""

import math
from dataclasses import dataclass, field

import numpy as np

from quadctl.mathtools import saturation

_MOTOR_COUNT = 12
_LEG_COUNT = 4


@dataclass
class MotorCmd:
    """Command for one motor."""

    mode: int = 0
    q: float = 0.0
    dq: float = 0.0
    tau: float = 0.0
    kp: float = 0.0
    kd: float = 0.0


def _leg_motors(leg_id):
    if not 0 <= leg_id < _LEG_COUNT:
        raise ValueError(f"leg_id must be within 0..{_LEG_COUNT - 1}, got {leg_id}")
    return range(3 * leg_id, 3 * leg_id + 3)


def _as_vector(values, size):
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size != size:
        raise ValueError(f"expected {size} elements, got {arr.size}")
    return arr


@dataclass
class LowlevelCmd:
    """Commands for all twelve motors, three per leg."""

    motor_cmd: list = field(default_factory=lambda: [MotorCmd() for _ in range(_MOTOR_COUNT)])

    def _legs(self, leg_id):
        return range(_LEG_COUNT) if leg_id is None else (leg_id,)

    def _set_gains(self, leg_id, gains):
        for leg in self._legs(leg_id):
            for motor_id, (kp, kd) in zip(_leg_motors(leg), gains):
                motor = self.motor_cmd[motor_id]
                motor.mode = 10
                motor.kp = kp
                motor.kd = kd

    def set_q(self, q):
        """Set the target angle of every motor from a 12-vector."""
        for motor, value in zip(self.motor_cmd, _as_vector(q, _MOTOR_COUNT)):
            motor.q = float(value)

    def set_leg_q(self, leg_id, q):
        """Set the target angles of one leg."""
        for motor_id, value in zip(_leg_motors(leg_id), _as_vector(q, 3)):
            self.motor_cmd[motor_id].q = float(value)

    def set_qd(self, qd):
        """Set the target velocity of every motor from a 12-vector."""
        for motor, value in zip(self.motor_cmd, _as_vector(qd, _MOTOR_COUNT)):
            motor.dq = float(value)

    def set_leg_qd(self, leg_id, qd):
        """Set the target velocities of one leg."""
        for motor_id, value in zip(_leg_motors(leg_id), _as_vector(qd, 3)):
            self.motor_cmd[motor_id].dq = float(value)

    def set_tau(self, tau, torque_limit=(-50.0, 50.0)):
        """Set every motor's torque, clamped to ``torque_limit``.

        Raises ValueError if any torque is NaN.
        """
        values = _as_vector(tau, _MOTOR_COUNT)
        if any(math.isnan(v) for v in values):
            raise ValueError("set_tau received NaN")
        for motor, value in zip(self.motor_cmd, values):
            motor.tau = float(saturation(float(value), torque_limit))

    def set_zero_dq(self, leg_id=None):
        """Zero the target velocity of one leg, or of all legs."""
        for leg in self._legs(leg_id):
            for motor_id in _leg_motors(leg):
                self.motor_cmd[motor_id].dq = 0.0

    def set_zero_tau(self, leg_id):
        """Zero the torque of one leg."""
        for motor_id in _leg_motors(leg_id):
            self.motor_cmd[motor_id].tau = 0.0

    def set_sim_stance_gain(self, leg_id):
        """Stance gains tuned for the simulator."""
        self._set_gains(leg_id, [(180, 8), (180, 8), (300, 15)])

    def set_real_stance_gain(self, leg_id):
        """Stance gains tuned for the real robot."""
        self._set_gains(leg_id, [(60, 5), (40, 4), (80, 7)])

    def set_zero_gain(self, leg_id=None):
        """Zero gains for one leg, or for all legs."""
        self._set_gains(leg_id, [(0, 0)] * 3)

    def set_stable_gain(self, leg_id=None):
        """Small damping gains for one leg, or for all legs."""
        self._set_gains(leg_id, [(0.8, 0.8)] * 3)

    def set_swing_gain(self, leg_id):
        """Gains for a swinging leg."""
        self._set_gains(leg_id, [(3, 2)] * 3)