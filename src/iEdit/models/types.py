"""Parameter snapshots consumed by a pipeline run."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from numbers import Real
from typing import Any

from ..config import ADJUSTMENT_RANGES, DEFAULT_ADJUSTMENTS, ROTATION_STEP_DEGREES, VALID_ROTATIONS
from ..errors import InvalidParameterError


def _check_range(name: str, value: Any, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidParameterError(name, value, f"{name} must be a number, got {value!r}")
    numeric = float(value)
    if math.isnan(numeric) or numeric < low or numeric > high:
        raise InvalidParameterError(name, value, f"{name}={value!r} is outside [{low:g}, {high:g}]")


@dataclass(frozen=True, slots=True)
class AdjustmentParameters:
    """Photometric settings for one pipeline run.

    ``brightness``, ``contrast`` and ``saturation`` are percentages where
    ``100`` is the identity; ``blur`` is a radius in pixels where ``0`` is the
    identity.  Values are never clamped here: :meth:`validate` rejects anything
    outside the slider domain so that upstream bugs surface instead of being
    silently corrected.
    """

    brightness: float = DEFAULT_ADJUSTMENTS["brightness"]
    contrast: float = DEFAULT_ADJUSTMENTS["contrast"]
    saturation: float = DEFAULT_ADJUSTMENTS["saturation"]
    blur: float = DEFAULT_ADJUSTMENTS["blur"]

    def validate(self) -> None:
        for field in fields(self):
            low, high = ADJUSTMENT_RANGES[field.name]
            _check_range(field.name, getattr(self, field.name), low, high)

    @property
    def is_identity(self) -> bool:
        return all(getattr(self, name) == default for name, default in DEFAULT_ADJUSTMENTS.items())

    @property
    def has_colour_change(self) -> bool:
        return (
            self.brightness != DEFAULT_ADJUSTMENTS["brightness"]
            or self.contrast != DEFAULT_ADJUSTMENTS["contrast"]
            or self.saturation != DEFAULT_ADJUSTMENTS["saturation"]
        )

    def with_value(self, name: str, value: float) -> "AdjustmentParameters":
        """Return a copy with *name* replaced by *value*."""

        if name not in ADJUSTMENT_RANGES:
            raise InvalidParameterError(name, value, f"Unknown adjustment: {name!r}")
        return replace(self, **{name: value})

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class TransformState:
    """Geometric settings: clockwise rotation plus two mirror flags."""

    rotation: int = 0
    flip_horizontal: bool = False
    flip_vertical: bool = False

    def validate(self) -> None:
        rotation = self.rotation
        if isinstance(rotation, bool) or not isinstance(rotation, Real):
            raise InvalidParameterError("rotation", rotation, f"rotation must be an integer, got {rotation!r}")
        numeric = float(rotation)
        if not numeric.is_integer() or int(numeric) % ROTATION_STEP_DEGREES != 0:
            raise InvalidParameterError(
                "rotation", rotation, f"rotation={rotation!r} is not a multiple of {ROTATION_STEP_DEGREES}"
            )

    def normalised(self) -> "TransformState":
        """Return the equivalent state with rotation folded into ``[0, 360)``."""

        self.validate()
        return replace(self, rotation=int(float(self.rotation)) % 360)

    @property
    def rotate_steps(self) -> int:
        """Number of clockwise quarter turns in ``0..3``."""

        return (int(float(self.rotation)) // ROTATION_STEP_DEGREES) % 4

    @property
    def is_identity(self) -> bool:
        return self.rotate_steps == 0 and not self.flip_horizontal and not self.flip_vertical

    def rotated(self) -> "TransformState":
        return replace(self, rotation=VALID_ROTATIONS[(self.rotate_steps + 1) % len(VALID_ROTATIONS)])

    def toggled_horizontal(self) -> "TransformState":
        return replace(self, flip_horizontal=not self.flip_horizontal)

    def toggled_vertical(self) -> "TransformState":
        return replace(self, flip_vertical=not self.flip_vertical)
