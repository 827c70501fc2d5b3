import pytest

from quadctl.enums import UserCommand
from quadctl.interface import CmdPanel, IOInterface, UserValue


class _RecordingIO(IOInterface):
    def __init__(self, cmd_panel=None):
        super().__init__(cmd_panel)
        self.calls = []

    def send_recv(self, cmd, state):
        self.calls.append((cmd, state))


def test_user_value_defaults_to_zero():
    value = UserValue()
    assert (value.lx, value.ly, value.rx, value.ry, value.L2) == (0, 0, 0, 0, 0)


def test_user_value_set_zero():
    value = UserValue(lx=0.5, ly=-0.5, rx=0.25, ry=1.0, L2=0.75)
    value.set_zero()
    assert value == UserValue()


def test_cmd_panel_starts_with_no_command():
    panel = CmdPanel()
    assert panel.user_cmd is UserCommand.NONE
    assert panel.user_value == UserValue()


def test_cmd_panel_set_passive():
    panel = CmdPanel()
    panel.user_cmd = UserCommand.START
    panel.set_passive()
    assert panel.user_cmd is UserCommand.L2_B


def test_cmd_panel_set_zero():
    panel = CmdPanel()
    panel.user_value.lx = 0.5
    panel.user_value.ry = -0.5
    panel.set_zero()
    assert panel.user_value == UserValue()


def test_io_interface_is_abstract():
    with pytest.raises(TypeError):
        IOInterface()


def test_io_interface_forwards_to_panel():
    panel = CmdPanel()
    io = _RecordingIO(panel)
    panel.user_value.ly = 0.5
    io.zero_cmd_panel()
    assert panel.user_value.ly == 0
    io.set_passive()
    assert panel.user_cmd is UserCommand.L2_B


def test_io_interface_default_panel_set_passive():
    io = _RecordingIO()
    assert io.cmd_panel.user_cmd is UserCommand.NONE
    io.cmd_panel.user_value.rx = 0.75
    io.zero_cmd_panel()
    assert io.cmd_panel.user_value == UserValue()
    io.set_passive()
    assert io.cmd_panel.user_cmd is UserCommand.L2_B