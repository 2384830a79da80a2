from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from gpxtrack.utils.errors import InvalidCoordinatesError


class FixType(Enum):
    """GPS receiver positioning mode reported in a trackpoint's <fix>."""
    THREE_D = "3d"
    DGPS = "dgps"
    UNKNOWN = "unknown"

    @classmethod
    def from_text(cls, text):
        # Exact, case-sensitive match: "3D" is UNKNOWN.
        if text == "3d":
            return cls.THREE_D
        if text == "dgps":
            return cls.DGPS
        return cls.UNKNOWN


@dataclass(frozen=True)
class Trackpoint:
    """Class representing one timestamped GPS fix."""
    latitude: float
    longitude: float
    timestamp: datetime
    elevation: float = 0.0
    fix: FixType = FixType.UNKNOWN

    def __post_init__(self):
        # 0.0 is the unset marker for both coordinates.
        if self.latitude == 0.0 or self.longitude == 0.0:
            raise InvalidCoordinatesError(
                f"invalid coordinates (lat={self.latitude}, lon={self.longitude})"
            )

    def to_dict(self):
        return {
            'lat': self.latitude,
            'lon': self.longitude,
            'elevation': self.elevation,
            'time': self.timestamp.isoformat(),
            'fix': self.fix.value,
        }
