import pytest

from quadctl.demos.torque import START_CYCLE, TORQUE_LIMIT, TorqueDemo
from quadctl.sdk.comm import POS_STOP_F, VEL_STOP_F, LowState


def _state(q=0.0, dq=0.0):
    state = LowState()
    state.motor_state[1].q = q
    state.motor_state[1].dq = dq
    return state


def _run(demo, state, steps):
    cmd = None
    for _ in range(steps):
        cmd = demo.step(state)
    return cmd


def test_idle_before_start():
    demo = TorqueDemo()
    cmd = _run(demo, _state(q=1.0), START_CYCLE - 1)
    assert cmd.motor_cmd[1].tau == 0.0
    assert cmd.motor_cmd[0].tau == pytest.approx(-0.65)
    assert cmd.motor_cmd[3].tau == pytest.approx(0.65)


def test_motor_loops_disabled_after_start():
    demo = TorqueDemo()
    cmd = _run(demo, _state(q=0.1), START_CYCLE)
    motor = cmd.motor_cmd[1]
    assert motor.q == POS_STOP_F
    assert motor.dq == VEL_STOP_F
    assert motor.kp == 0.0
    assert motor.kd == 0.0


def test_torque_clamped():
    demo = TorqueDemo()
    assert _run(demo, _state(q=1.0), START_CYCLE).motor_cmd[1].tau == -TORQUE_LIMIT
    demo = TorqueDemo()
    assert _run(demo, _state(q=-1.0), START_CYCLE).motor_cmd[1].tau == TORQUE_LIMIT


def test_torque_is_odd_in_state():
    up = _run(TorqueDemo(), _state(q=0.1, dq=0.2), START_CYCLE).motor_cmd[1].tau
    down = _run(TorqueDemo(), _state(q=-0.1, dq=-0.2), START_CYCLE).motor_cmd[1].tau
    assert up == pytest.approx(-down)
    assert -TORQUE_LIMIT < up < 0


def test_zero_state_gives_zero_torque():
    cmd = _run(TorqueDemo(), _state(), START_CYCLE)
    assert cmd.motor_cmd[1].tau == 0.0


def test_protection_runs_every_cycle():
    demo = TorqueDemo(protect=lambda cmd, state: -1)
    with pytest.raises(RuntimeError):
        demo.step(_state())
    assert demo.motiontime == 1