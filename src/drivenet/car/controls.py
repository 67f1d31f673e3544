"""
Controls - Driving flags read by the car each tick.

Provides:
- ControlsType: who drives the car
- Controls: forward/left/right/reverse flags
"""

from dataclasses import dataclass
from enum import Enum


class ControlsType(Enum):
    """Source of a car's control flags."""
    AI = "AI"          # Network outputs drive the car
    KEYS = "KEYS"      # External input source sets the flags
    DUMMY = "DUMMY"    # Constant forward-only traffic
    
    @classmethod
    def parse(cls, value: "ControlsType | str") -> "ControlsType":
        """Convert a name to a ControlsType.
        
        Unknown names map to KEYS, i.e. externally controlled.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.KEYS


@dataclass
class Controls:
    """Control flags for one car.
    
    Forward and reverse may both be set; the car then applies both
    accelerations in the same tick.
    """
    forward: bool = False
    left: bool = False
    right: bool = False
    reverse: bool = False
    
    @classmethod
    def for_type(cls, controls_type: ControlsType | str) -> "Controls":
        """Create the initial controls for a car type."""
        controls_type = ControlsType.parse(controls_type)
        controls = cls()
        if controls_type is ControlsType.DUMMY:
            controls.forward = True
        return controls
    
    def set(
        self,
        forward: bool | None = None,
        left: bool | None = None,
        right: bool | None = None,
        reverse: bool | None = None,
    ) -> None:
        """Update the given flags, leaving the others unchanged."""
        if forward is not None:
            self.forward = bool(forward)
        if left is not None:
            self.left = bool(left)
        if right is not None:
            self.right = bool(right)
        if reverse is not None:
            self.reverse = bool(reverse)
    
    def reset(self) -> None:
        """Release all flags."""
        self.forward = False
        self.left = False
        self.right = False
        self.reverse = False
    
    def as_tuple(self) -> tuple[bool, bool, bool, bool]:
        """Flags in (forward, left, right, reverse) order."""
        return (self.forward, self.left, self.right, self.reverse)
