# quadctl

Building blocks for controlling four-legged robots: rotation and
homogeneous-transform helpers, low-level motor command and sensor state
messages, wireless-remote decoding, the binary wire format of the
robot's motion-controller messages, and small motion demos that turn a
received state into the next command.

Everything works on plain Python objects and NumPy arrays, so it can be
used in simulation, in offline analysis of recorded data, or as the
message layer of a controller.

## What is inside

| Module | Contents |
| --- | --- |
| `quadctl.enums` | `CtrlPlatform`, `RobotType`, `UserCommand`, `FrameType`, `WaveStatus`, `FSMMode`, `FSMStateName` |
| `quadctl.mathtypes` | `vec12_to_vec34`, `vec34_to_vec12` for per-leg vector layouts |
| `quadctl.mathtools` | `saturation`, `kill_zero_offset`, `inv_normalize`, `window_func`, running mean/covariance (`update_average`, `update_covariance`, `update_avg_cov`, `AvgCov`), rotations (`rotx`, `roty`, `rotz`, `skew`, `rpy_to_rot_mat`, `rot_mat_to_rpy`, `quat_to_rot_mat`, `rot_mat_to_exp`) and homogeneous transforms (`homo_matrix`, `homo_matrix_inverse`, `homo_vec`, `no_homo_vec`) |
| `quadctl.timing` | `get_system_time` (microseconds), `get_time_second`, `absolute_wait` |
| `quadctl.interface` | `UserValue`, `CmdPanel`, and the abstract `IOInterface` for robot I/O |
| `quadctl.lowlevel_cmd` | `MotorCmd`, `LowlevelCmd` with joint targets, torques and gain presets |
| `quadctl.lowlevel_state` | `MotorState`, `IMU`, `LowlevelState` with joint, attitude and yaw accessors |
| `quadctl.joystick` | `KeySwitch` and `RockerBtnData` for the 40-byte wireless remote block |
| `quadctl.plot` | `Curve`, `Plot`, `PyPlot` for recording time series and showing them with matplotlib |
| `quadctl.sdk.legs` | `LeggedType`, `HighLevelType`, `JointLimits`, `joint_limits`, `joint_index`, leg and joint index constants |
| `quadctl.sdk.comm` | packed `LowState`, `LowCmd`, `HighState`, `HighCmd` and their parts, plus `UDPState` counters |
| `quadctl.demos` | `PositionDemo`, `TorqueDemo`, `VelocityDemo`, `WalkDemo`, `JoystickMonitor` |

## Examples

### Rotations and transforms

```python
import numpy as np
from quadctl.mathtools import rpy_to_rot_mat, rot_mat_to_rpy, homo_matrix, homo_matrix_inverse

rot = rpy_to_rot_mat(0.1, -0.2, 0.3)
roll, pitch, yaw = rot_mat_to_rpy(rot)

pose = homo_matrix(np.array([0.1, 0.0, 0.3]), rot)
identity = pose @ homo_matrix_inverse(pose)
```

`homo_matrix` also accepts a `(w, x, y, z)` quaternion in place of the
rotation matrix.

### Per-leg vectors

Twelve joint values are stored leg after leg, three joints each.
`vec12_to_vec34` turns them into a 3×4 matrix with one column per leg,
and `vec34_to_vec12` turns them back. Both raise `ValueError` on a
wrongly sized input.

```python
import numpy as np
from quadctl.mathtypes import vec12_to_vec34, vec34_to_vec12

stand = np.tile([0.0, 0.67, -1.3], 4)
per_leg = vec12_to_vec34(stand)
assert np.allclose(vec34_to_vec12(per_leg), stand)
```

### Running statistics

`update_avg_cov` returns the new `(cov, exp)` pair. `AvgCov` keeps them
for you, ignores the first `wait_count` samples and prints the scaled
mean (and covariance unless `avg_only`) every `show_period` samples.

### Building a motor command

```python
import numpy as np
from quadctl.lowlevel_cmd import LowlevelCmd

cmd = LowlevelCmd()
cmd.set_q(np.tile([0.0, 0.67, -1.3], 4))
for leg in range(4):
    cmd.set_real_stance_gain(leg)
cmd.set_tau(np.zeros(12), (-50.0, 50.0))
```

`set_tau` clamps every torque to the limits with `saturation` and raises
`ValueError` if any torque is NaN.

### Reading sensor state

```python
from quadctl.lowlevel_state import LowlevelState

state = LowlevelState()
state.imu.quaternion = [1.0, 0.0, 0.0, 0.0]
heading = state.yaw()
joint_positions = state.q()      # 3x4, one column per leg
```

### Wire formats

Each structure in `quadctl.sdk.comm` packs to and from its exact
little-endian byte layout; `SIZE` gives its length, and `from_bytes`
raises `ValueError` for data of any other length.

```python
from quadctl.sdk.comm import LowCmd

packet = LowCmd().to_bytes()
decoded = LowCmd.from_bytes(packet)
assert len(packet) == LowCmd.SIZE
```

### Wireless remote

```python
from quadctl.joystick import RockerBtnData

data = RockerBtnData.from_bytes(bytes(40))
pressed_a = data.btn.a
```

### Joint limits

```python
from quadctl.sdk.legs import FL, THIGH, LeggedType, joint_index, joint_limits

limits = joint_limits(LeggedType.Go1)
thigh_min, thigh_max = limits.for_joint(THIGH)
front_left_thigh = joint_index(FL, THIGH)
```

`joint_limits` knows `A1`, `Aliengo` and `Go1` and raises `ValueError`
for other models.

### Demo controllers

The demos are step functions: give them the latest received state and
they return the command to send. They can be driven from a simulator, a
recorded log or your own transport loop.

```python
from quadctl.demos.torque import TorqueDemo
from quadctl.sdk.comm import LowState

demo = TorqueDemo()
state = LowState()
for _ in range(1000):
    command = demo.step(state)
```

`PositionDemo`, `TorqueDemo`, `VelocityDemo` and `JoystickMonitor` take
an optional `protect(cmd, state)` callable; in the first three a
negative result raises `RuntimeError`. `WalkDemo` produces high-level
commands, and `walk_command(motiontime)` gives the scripted command for
any point of its timeline. `JoystickMonitor` decodes the remote block of
a state with `read_key_data` and reports the left stick while button A
is held.

## What it does not do

- It has no transport: nothing here opens a socket or runs the control
  loop. `IOInterface` is an abstract base you implement yourself.
- It has no power or joint-limit protection of its own; the demos only
  call the `protect` and `position_limit` hooks you pass in.
- `quadctl.sdk.comm` describes one revision of the message layout only.
- There is no state machine, gait generator, estimator or balance
  controller, and no command-line program.

## Requirements

Python 3.10 or later, NumPy and matplotlib. Tests use pytest
(`pip install quadctl[test]`).