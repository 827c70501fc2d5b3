"""User command panel and the abstract robot I/O interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from quadctl.enums import UserCommand


@dataclass
class UserValue:
    """Analog stick and trigger values from a command panel."""

    lx: float = 0.0
    ly: float = 0.0
    rx: float = 0.0
    ry: float = 0.0
    L2: float = 0.0

    def set_zero(self):
        """Reset every value to zero."""
        self.lx = 0.0
        self.ly = 0.0
        self.rx = 0.0
        self.ry = 0.0
        self.L2 = 0.0


class CmdPanel:
    """Source of user commands and stick values."""

    def __init__(self):
        self.user_cmd = UserCommand.NONE
        self.user_value = UserValue()

    def set_passive(self):
        """Request the passive state."""
        self.user_cmd = UserCommand.L2_B

    def set_zero(self):
        """Zero the stick values."""
        self.user_value.set_zero()


class IOInterface(ABC):
    """Exchanges commands and state with a robot or a simulator."""

    def __init__(self, cmd_panel=None):
        self.cmd_panel = cmd_panel if cmd_panel is not None else CmdPanel()

    @abstractmethod
    def send_recv(self, cmd, state):
        """Send ``cmd`` and fill ``state`` with the latest feedback."""

    def zero_cmd_panel(self):
        """Zero the command panel's stick values."""
        self.cmd_panel.set_zero()

    def set_passive(self):
        """Ask the command panel for the passive state."""
        self.cmd_panel.set_passive()