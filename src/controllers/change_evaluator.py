"""
ChangeEvaluator - decides per frame whether the device needs a write

    Audio / AudioRaw -> always
    Door             -> never (the door controller owns the output)
    AutoPilot        -> after pulling the autopilot colour into the target
    anything else    -> target differs from last pushed
"""

from audio.analyser_interface import IAudioAnalyser
from animations.autopilot import AutoPilot
from controllers.light_output import LightOutput
from controllers.mode_state_machine import ModeStateMachine
from models.color import ColorState
from models.enums import ControllerMode
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)


class ChangeEvaluator:

    def __init__(
        self,
        modes: ModeStateMachine,
        colors: ColorState,
        output: LightOutput,
        autopilot: AutoPilot,
        audio: IAudioAnalyser,
    ):
        self.modes = modes
        self.colors = colors
        self.output = output
        self.autopilot = autopilot
        self.audio = audio

    def has_changed(self) -> bool:
        mode = self.modes.get_mode()

        if mode.is_audio:
            return True
        if mode is ControllerMode.DOOR:
            return False
        if mode is ControllerMode.AUTO_PILOT:
            self.colors.target = self.autopilot.scheduler.state

        return self.colors.is_dirty()

    async def apply(self) -> None:
        """Write the frame's colour according to the current mode"""
        if self.modes.get_mode() is ControllerMode.AUDIO:
            color = self.audio.get_rgb()
            if await self.output.try_push(color):
                self.colors.target = color
            return

        await self.output.push(self.colors.target)

    async def evaluate(self) -> bool:
        """One frame: returns True if something was written"""
        if not self.has_changed():
            return False
        await self.apply()
        return True
