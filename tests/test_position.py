import pytest

from quadctl.demos.position import PositionDemo, SIN_MID_Q, joint_linear_interpolation
from quadctl.sdk.comm import LOWLEVEL, LowState


def _state(q0=0.3, q1=0.4, q2=-1.0):
    state = LowState()
    state.motor_state[0].q = q0
    state.motor_state[1].q = q1
    state.motor_state[2].q = q2
    return state


def _run(demo, state, steps):
    cmd = None
    for _ in range(steps):
        cmd = demo.step(state)
    return cmd


def test_interpolation_endpoints():
    assert joint_linear_interpolation(1.5, -2.0, 0.0) == 1.5
    assert joint_linear_interpolation(1.5, -2.0, 1.0) == -2.0


def test_interpolation_clamps_rate():
    assert joint_linear_interpolation(1.5, -2.0, 7.0) == -2.0
    assert joint_linear_interpolation(1.5, -2.0, -3.0) == 1.5


def test_interpolation_midpoint():
    assert joint_linear_interpolation(1.0, 3.0, 0.5) == pytest.approx(2.0)


def test_gravity_compensation_and_level():
    demo = PositionDemo(log=lambda _msg: None)
    cmd = demo.step(_state())
    assert cmd.level_flag == LOWLEVEL
    assert cmd.motor_cmd[0].tau == pytest.approx(-0.65)
    assert cmd.motor_cmd[3].tau == pytest.approx(0.65)
    assert cmd.motor_cmd[6].tau == pytest.approx(-0.65)
    assert cmd.motor_cmd[9].tau == pytest.approx(0.65)


def test_records_initial_pose():
    demo = PositionDemo(log=lambda _msg: None)
    _run(demo, _state(0.3, 0.4, -1.0), 5)
    assert demo.q_init == pytest.approx([0.3, 0.4, -1.0])


def test_approach_starts_near_initial_pose():
    demo = PositionDemo(log=lambda _msg: None)
    cmd = _run(demo, _state(0.3, 0.4, -1.0), 10)
    assert demo.rate_count == 1
    for motor_id, init, mid in zip(range(3), (0.3, 0.4, -1.0), SIN_MID_Q):
        q = cmd.motor_cmd[motor_id].q
        assert min(init, mid) <= q <= max(init, mid)
        assert abs(q - init) < abs(q - mid)
    assert cmd.motor_cmd[0].kp == 5.0
    assert cmd.motor_cmd[2].kd == 1.0


def test_reaches_middle_pose():
    demo = PositionDemo(log=lambda _msg: None)
    cmd = _run(demo, _state(), 300)
    assert [cmd.motor_cmd[m].q for m in range(3)] == pytest.approx(list(SIN_MID_Q))
    assert cmd.motor_cmd[0].dq == 0.0


def test_sine_phase_moves_only_calf():
    demo = PositionDemo(log=lambda _msg: None)
    cmd = _run(demo, _state(), 400)
    assert demo.sin_count == 1
    assert cmd.motor_cmd[0].q == SIN_MID_Q[0]
    assert cmd.motor_cmd[1].q == SIN_MID_Q[1]
    assert SIN_MID_Q[2] - 0.6 <= cmd.motor_cmd[2].q < SIN_MID_Q[2]


def test_protection_only_after_ten_cycles():
    calls = []

    def protect(cmd, state):
        calls.append(1)
        return -1

    demo = PositionDemo(protect=protect, log=lambda _msg: None)
    _run(demo, _state(), 10)
    assert calls == []
    with pytest.raises(RuntimeError):
        demo.step(_state())


def test_position_limit_hook_called():
    seen = []
    demo = PositionDemo(position_limit=seen.append, log=lambda _msg: None)
    cmd = _run(demo, _state(), 12)
    assert seen == [cmd, cmd]


def test_logs_each_cycle():
    lines = []
    demo = PositionDemo(log=lines.append)
    _run(demo, _state(), 3)
    assert len(lines) == 3
    assert lines[2].startswith("3  ")