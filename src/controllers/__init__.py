from .light_output import LightOutput
from .mode_state_machine import ModeStateMachine
from .door_transition_controller import DoorTransitionController
from .change_evaluator import ChangeEvaluator
from .light_controller import LightController

__all__ = [
    'LightOutput',
    'ModeStateMachine',
    'DoorTransitionController',
    'ChangeEvaluator',
    'LightController',
]
