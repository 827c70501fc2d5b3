"""Watches the wireless remote data carried in the low-level state."""

from quadctl.joystick import RockerBtnData
from quadctl.sdk.comm import LOWLEVEL, LowCmd


def read_key_data(state):
    """Decode the remote block of a low-level ``state``."""
    return RockerBtnData.from_bytes(bytes(state.wireless_remote)[: RockerBtnData.SIZE])


class JoystickMonitor:
    """Reports the left stick's x value while button A is held.

    ``protect`` is an optional power-protection check ``(cmd, state) -> int``
    run every cycle; its result is not acted on.
    """

    dt = 0.002

    def __init__(self, protect=None, log=print):
        self.cmd = LowCmd(level_flag=LOWLEVEL)
        self.protect = protect
        self.log = log
        self.key_data = RockerBtnData()
        self.motiontime = 0

    def step(self, state):
        """Advance one cycle from the received ``state`` and return the command."""
        self.motiontime += 1
        self.key_data = read_key_data(state)
        if self.key_data.btn.a:
            self.log(f"The key A is pressed, and the value of lx is {self.key_data.lx:g}")
        if self.protect is not None:
            self.protect(self.cmd, state)
        return self.cmd