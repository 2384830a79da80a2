"""In-memory result of a GPX load."""

import numpy as np


class SealedCollectionError(RuntimeError):
    pass


class TrackCollection:
    """
    Ordered trackpoints of one GPX document, flattened across tracks and
    segments in document order.

    The collection only grows while a load is running; once sealed it is
    read-only.
    """

    def __init__(self):
        self._points = []
        self._sealed = False
        self.track_count = 0

    def append(self, point):
        if self._sealed:
            raise SealedCollectionError("track collection is read-only")
        self._points.append(point)

    def start_track(self):
        if self._sealed:
            raise SealedCollectionError("track collection is read-only")
        self.track_count += 1

    def seal(self):
        self._sealed = True
        return self

    @property
    def sealed(self):
        return self._sealed

    @property
    def points(self):
        return tuple(self._points)

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def to_array(self):
        """Return points as an Nx3 array [lon, lat, elevation]."""
        if not self._points:
            return np.empty((0, 3), dtype=np.float64)
        return np.asarray(
            [(p.longitude, p.latitude, p.elevation) for p in self._points],
            dtype=np.float64,
        )

    def bounds(self):
        """Bounding box of all points, or None for an empty collection."""
        if not self._points:
            return None
        coords = self.to_array()
        west, south = coords[:, :2].min(axis=0)
        east, north = coords[:, :2].max(axis=0)
        return {
            'north': float(north),
            'south': float(south),
            'east': float(east),
            'west': float(west),
        }

    def to_dict(self):
        return {
            'track_count': self.track_count,
            'point_count': len(self._points),
            'points': [p.to_dict() for p in self._points],
            'bounds': self.bounds(),
        }
