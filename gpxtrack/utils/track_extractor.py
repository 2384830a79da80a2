"""Trackpoint and track extraction from a parsed GPX tree."""

from dataclasses import dataclass

from gpxtrack.utils.coercers import parse_float, parse_timestamp, to_float
from gpxtrack.utils.errors import FormatError, InvalidCoordinatesError
from gpxtrack.utils.track_collection import TrackCollection
from gpxtrack.utils.trackpoint import FixType, Trackpoint
from gpxtrack.utils.xml_walker import attribute, children, first_child, is_gpx_root, text_of


UNNAMED_TRACK = "<unnamed>"

TRACK_STARTED = "track_started"
TRACK_FINISHED = "track_finished"
SUMMARY = "summary"


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notification emitted while walking a document."""
    kind: str
    track_index: int = 0
    track_name: str = ""
    point_count: int = 0
    track_count: int = 0

    def to_dict(self):
        return {
            'kind': self.kind,
            'track_index': self.track_index,
            'track_name': self.track_name,
            'point_count': self.point_count,
            'track_count': self.track_count,
        }


def console_progress(event):
    """Progress sink printing the familiar console lines."""
    if event.kind == TRACK_STARTED:
        print(f"[INFO] reading track: {event.track_name} ... ", end="", flush=True)
    elif event.kind == TRACK_FINISHED:
        print("done")
    elif event.kind == SUMMARY:
        print(
            f"[INFO] found {event.track_count} tracks, "
            f"containing {event.point_count} trackpoints"
        )


def extract_trackpoint(node, lenient=False):
    """
    Build one Trackpoint from a <trkpt> element.

    Checks run in a fixed order and the first failure is raised: missing
    lat/lon, missing <time>, zero (unset) coordinates, malformed timestamp.

    Args:
        node: The <trkpt> element
        lenient: Coerce malformed numbers to 0.0 instead of raising

    Returns:
        Trackpoint
    """
    lat_text = attribute(node, 'lat')
    lon_text = attribute(node, 'lon')
    if lat_text is None or lon_text is None:
        raise FormatError("missing coordinate attributes in trackpoint")

    time_node = first_child(node, 'time')
    if time_node is None:
        raise FormatError("missing timestamp in trackpoint")

    coerce = to_float if lenient else parse_float
    lat = coerce(lat_text)
    lon = coerce(lon_text)
    # 0.0 doubles as the unset marker, so the origin is rejected too.
    if lat == 0.0 or lon == 0.0:
        raise InvalidCoordinatesError(
            f"invalid coordinates in trackpoint (lat={lat_text!r}, lon={lon_text!r})"
        )

    timestamp = parse_timestamp(text_of(time_node))

    ele_node = first_child(node, 'ele')
    elevation = coerce(text_of(ele_node)) if ele_node is not None else 0.0

    fix_node = first_child(node, 'fix')
    fix = FixType.from_text(text_of(fix_node)) if fix_node is not None else FixType.UNKNOWN

    return Trackpoint(
        latitude=lat,
        longitude=lon,
        timestamp=timestamp,
        elevation=elevation,
        fix=fix,
    )


def track_name(trk_node):
    name_node = first_child(trk_node, 'name')
    if name_node is None:
        return UNNAMED_TRACK
    return text_of(name_node) or UNNAMED_TRACK


def _emit(progress, event):
    if progress is not None:
        progress(event)


def extract_tracks(root, progress=None, lenient=False):
    """
    Walk gpx/trk/trkseg/trkpt and collect every trackpoint in document order.

    Any failing trackpoint aborts the whole document; no partial collection is
    returned.

    Args:
        root: Root element of the parsed document
        progress: Optional callable receiving ProgressEvent instances
        lenient: Passed through to extract_trackpoint

    Returns:
        TrackCollection: Sealed collection of all trackpoints
    """
    if not is_gpx_root(root):
        raise FormatError("unrecognized format (root element is not 'gpx')")

    collection = TrackCollection()
    for trk_node in children(root, 'trk'):
        collection.start_track()
        index = collection.track_count
        name = track_name(trk_node)
        _emit(progress, ProgressEvent(TRACK_STARTED, track_index=index, track_name=name))

        before = len(collection)
        for segment in children(trk_node, 'trkseg'):
            for trkpt_node in children(segment, 'trkpt'):
                collection.append(extract_trackpoint(trkpt_node, lenient=lenient))

        _emit(progress, ProgressEvent(
            TRACK_FINISHED,
            track_index=index,
            track_name=name,
            point_count=len(collection) - before,
        ))

    _emit(progress, ProgressEvent(
        SUMMARY,
        point_count=len(collection),
        track_count=collection.track_count,
    ))
    return collection.seal()
