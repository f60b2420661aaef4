from .door_sensor import DoorSensor

__all__ = ["DoorSensor"]
