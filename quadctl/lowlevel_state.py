"""Feedback from the motors and the IMU."""

from dataclasses import dataclass, field

import numpy as np

from quadctl.enums import UserCommand
from quadctl.interface import UserValue
from quadctl.mathtools import quat_to_rot_mat, rot_mat_to_rpy
from quadctl.mathtypes import vec12_to_vec34


@dataclass
class MotorState:
    """Feedback of one motor."""

    mode: int = 0
    q: float = 0.0
    dq: float = 0.0
    ddq: float = 0.0
    tau_est: float = 0.0


@dataclass
class IMU:
    """Inertial measurement: quaternion (w, x, y, z), gyroscope, accelerometer."""

    quaternion: list = field(default_factory=lambda: [0.0] * 4)
    gyroscope: list = field(default_factory=lambda: [0.0] * 3)
    accelerometer: list = field(default_factory=lambda: [0.0] * 3)

    def rot_mat(self):
        """Body-to-world rotation matrix."""
        return quat_to_rot_mat(self.quat())

    def acc(self):
        """Acceleration in the body frame."""
        return np.array(self.accelerometer, dtype=float)

    def gyro(self):
        """Angular velocity in the body frame."""
        return np.array(self.gyroscope, dtype=float)

    def quat(self):
        """Orientation quaternion as (w, x, y, z)."""
        return np.array(self.quaternion, dtype=float)


@dataclass
class LowlevelState:
    """Full low-level state of the robot and the user's input."""

    imu: IMU = field(default_factory=IMU)
    motor_state: list = field(default_factory=lambda: [MotorState() for _ in range(12)])
    user_cmd: UserCommand = UserCommand.NONE
    user_value: UserValue = field(default_factory=UserValue)

    def q(self):
        """Joint angles as a 3x4 matrix, one column per leg."""
        return vec12_to_vec34([m.q for m in self.motor_state])

    def qd(self):
        """Joint velocities as a 3x4 matrix, one column per leg."""
        return vec12_to_vec34([m.dq for m in self.motor_state])

    def rot_mat(self):
        """Body-to-world rotation matrix."""
        return self.imu.rot_mat()

    def acc(self):
        """Acceleration in the body frame."""
        return self.imu.acc()

    def gyro(self):
        """Angular velocity in the body frame."""
        return self.imu.gyro()

    def acc_global(self):
        """Acceleration in the world frame."""
        return self.rot_mat() @ self.acc()

    def gyro_global(self):
        """Angular velocity in the world frame."""
        return self.rot_mat() @ self.gyro()

    def yaw(self):
        """Yaw angle of the body."""
        return float(rot_mat_to_rpy(self.rot_mat())[2])

    def d_yaw(self):
        """Yaw rate in the world frame."""
        return float(self.gyro_global()[2])

    def set_q(self, q):
        """Overwrite the joint angles from a 12-vector."""
        values = np.asarray(q, dtype=float).reshape(-1)
        if values.size != 12:
            raise ValueError(f"expected 12 elements, got {values.size}")
        for motor, value in zip(self.motor_state, values):
            motor.q = float(value)