import math

import numpy as np
import pytest

from quadctl.enums import UserCommand
from quadctl.lowlevel_state import IMU, LowlevelState, MotorState
from quadctl.mathtools import rotz
from quadctl.mathtypes import vec12_to_vec34


def _yaw_state(theta):
    state = LowlevelState()
    state.imu.quaternion = [math.cos(theta / 2), 0.0, 0.0, math.sin(theta / 2)]
    return state


def test_defaults():
    state = LowlevelState()
    assert state.user_cmd is UserCommand.NONE
    assert len(state.motor_state) == 12
    assert state.motor_state[0] == MotorState()


def test_zero_quaternion_gives_identity():
    np.testing.assert_allclose(IMU().rot_mat(), np.eye(3))


def test_set_q_round_trip_through_q():
    state = LowlevelState()
    values = np.arange(12.0)
    state.set_q(values)
    np.testing.assert_allclose(state.q(), vec12_to_vec34(values))
    assert state.q()[2, 1] == values[5]


def test_set_q_rejects_wrong_size():
    with pytest.raises(ValueError):
        LowlevelState().set_q([1.0, 2.0, 3.0])


def test_qd_columns_are_legs():
    state = LowlevelState()
    for i, motor in enumerate(state.motor_state):
        motor.dq = float(i) * 2
    qd = state.qd()
    assert qd.shape == (3, 4)
    np.testing.assert_allclose(qd[:, 3], [18.0, 20.0, 22.0])


def test_imu_vectors():
    imu = IMU(quaternion=[1.0, 0.0, 0.0, 0.0], gyroscope=[0.1, 0.2, 0.3], accelerometer=[1.0, 2.0, 3.0])
    np.testing.assert_allclose(imu.quat(), [1.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(imu.gyro(), [0.1, 0.2, 0.3])
    np.testing.assert_allclose(imu.acc(), [1.0, 2.0, 3.0])


def test_yaw_matches_quaternion_rotation():
    state = _yaw_state(0.7)
    assert state.yaw() == pytest.approx(0.7)
    np.testing.assert_allclose(state.rot_mat(), rotz(0.7), atol=1e-12)


def test_global_vectors_are_rotated():
    theta = 0.4
    state = _yaw_state(theta)
    state.imu.accelerometer = [1.0, 0.0, 9.8]
    state.imu.gyroscope = [0.2, -0.1, 0.5]
    np.testing.assert_allclose(state.acc_global(), rotz(theta) @ state.acc(), atol=1e-12)
    np.testing.assert_allclose(state.gyro_global(), rotz(theta) @ state.gyro(), atol=1e-12)
    assert state.d_yaw() == pytest.approx(0.5)
    assert np.linalg.norm(state.acc_global()) == pytest.approx(np.linalg.norm(state.acc()))