"""GPX file loading: bounded read, parse, and trackpoint extraction."""

from gpxtrack.utils.app_config import get_lenient_numbers
from gpxtrack.utils.errors import LoadError
from gpxtrack.utils.file_loader import MAX_FILE_SIZE, load_file_bytes
from gpxtrack.utils.track_extractor import extract_tracks
from gpxtrack.utils.xml_walker import parse_document


def load_gpx_bytes(data, progress=None, lenient=None):
    """
    Extract all trackpoints from in-memory GPX content.

    Args:
        data: Raw GPX document bytes
        progress: Optional ProgressEvent sink
        lenient: Legacy numeric coercion; None reads GPXTRACK_LENIENT_NUMBERS

    Returns:
        TrackCollection
    """
    if lenient is None:
        lenient = get_lenient_numbers()
    root = parse_document(data)
    return extract_tracks(root, progress=progress, lenient=lenient)


def load_gpx_file(path, progress=None, lenient=None, max_size=MAX_FILE_SIZE):
    """
    Load a GPX file from disk into a TrackCollection.

    Raises a LoadError subclass naming `path` on any failure; nothing is
    returned for a partially valid file.
    """
    try:
        data = load_file_bytes(path, max_size=max_size)
        return load_gpx_bytes(data, progress=progress, lenient=lenient)
    except LoadError as exc:
        raise exc.with_path(str(path))
