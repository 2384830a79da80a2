import unittest
from datetime import datetime

from lxml import etree

from helpers import gpx, trk, trkpt

from gpxtrack.utils.errors import CoercionError, ErrorKind, FormatError, InvalidCoordinatesError
from gpxtrack.utils.track_extractor import (
    SUMMARY,
    TRACK_FINISHED,
    TRACK_STARTED,
    UNNAMED_TRACK,
    extract_tracks,
    extract_trackpoint,
)
from gpxtrack.utils.trackpoint import FixType, Trackpoint
from gpxtrack.utils.xml_walker import parse_document


def point_node(xml):
    return etree.fromstring(xml)


class ExtractTrackpointTests(unittest.TestCase):
    def test_full_point(self):
        point = extract_trackpoint(point_node(trkpt(ele="120.3", fix="dgps")))
        self.assertEqual(point.latitude, 45.5)
        self.assertEqual(point.longitude, 7.6)
        self.assertEqual(point.elevation, 120.3)
        self.assertEqual(point.timestamp, datetime(2023, 5, 1, 10, 15, 30))
        self.assertEqual(point.fix, FixType.DGPS)

    def test_defaults_when_optional_children_absent(self):
        point = extract_trackpoint(point_node(trkpt()))
        self.assertEqual(point.elevation, 0.0)
        self.assertEqual(point.fix, FixType.UNKNOWN)

    def test_fix_mapping_is_exact(self):
        cases = {"3d": FixType.THREE_D, "dgps": FixType.DGPS, "foo": FixType.UNKNOWN,
                 "3D": FixType.UNKNOWN, "DGPS": FixType.UNKNOWN, "": FixType.UNKNOWN}
        for text, expected in cases.items():
            point = extract_trackpoint(point_node(trkpt(fix=text)))
            self.assertEqual(point.fix, expected, text)

    def test_missing_lat_or_lon(self):
        for node in [trkpt(lat=None), trkpt(lon=None), trkpt(lat=None, lon=None)]:
            with self.assertRaises(FormatError) as ctx:
                extract_trackpoint(point_node(node))
            self.assertIn("missing coordinate attributes", str(ctx.exception))

    def test_missing_time(self):
        with self.assertRaises(FormatError) as ctx:
            extract_trackpoint(point_node(trkpt(time=None)))
        self.assertIn("missing timestamp", str(ctx.exception))

    def test_missing_coordinates_reported_before_missing_time(self):
        with self.assertRaises(FormatError) as ctx:
            extract_trackpoint(point_node(trkpt(lat=None, time=None)))
        self.assertIn("missing coordinate attributes", str(ctx.exception))

    def test_zero_coordinates_rejected(self):
        for node in [trkpt(lat="0.0"), trkpt(lon="0.0"), trkpt(lat="0", lon="0")]:
            with self.assertRaises(InvalidCoordinatesError) as ctx:
                extract_trackpoint(point_node(node))
            self.assertEqual(ctx.exception.kind, ErrorKind.SEMANTIC)

    def test_negative_zero_coordinate_rejected(self):
        with self.assertRaises(InvalidCoordinatesError):
            extract_trackpoint(point_node(trkpt(lat="-0.0")))

    def test_underscored_coordinate_is_malformed(self):
        with self.assertRaises(CoercionError):
            extract_trackpoint(point_node(trkpt(lat="4_5.5")))

    def test_zero_coordinates_reported_before_bad_timestamp(self):
        with self.assertRaises(InvalidCoordinatesError):
            extract_trackpoint(point_node(trkpt(lat="0.0", time="garbage")))

    def test_malformed_coordinate_strict(self):
        with self.assertRaises(CoercionError):
            extract_trackpoint(point_node(trkpt(lat="north")))

    def test_malformed_coordinate_lenient_hits_zero_check(self):
        with self.assertRaises(InvalidCoordinatesError):
            extract_trackpoint(point_node(trkpt(lat="north")), lenient=True)

    def test_malformed_elevation(self):
        with self.assertRaises(CoercionError):
            extract_trackpoint(point_node(trkpt(ele="high")))
        point = extract_trackpoint(point_node(trkpt(ele="high")), lenient=True)
        self.assertEqual(point.elevation, 0.0)

    def test_malformed_timestamp(self):
        with self.assertRaises(CoercionError):
            extract_trackpoint(point_node(trkpt(time="not a time")))

    def test_direct_construction_enforces_non_zero_coordinates(self):
        when = datetime(2023, 5, 1, 10, 15, 30)
        for lat, lon in [(0.0, 7.6), (45.5, 0.0), (0.0, 0.0)]:
            with self.assertRaises(InvalidCoordinatesError):
                Trackpoint(lat, lon, when)
        self.assertEqual(Trackpoint(45.5, 7.6, when).latitude, 45.5)

    def test_trackpoint_is_immutable(self):
        point = extract_trackpoint(point_node(trkpt()))
        with self.assertRaises(AttributeError):
            point.latitude = 1.0


class ExtractTracksTests(unittest.TestCase):
    def test_points_flattened_in_document_order(self):
        doc = gpx(
            trk([trkpt(lat="1.0"), trkpt(lat="2.0")], [trkpt(lat="3.0")], name="Morning"),
            trk([trkpt(lat="4.0")]),
        )
        collection = extract_tracks(parse_document(doc))
        self.assertEqual([p.latitude for p in collection], [1.0, 2.0, 3.0, 4.0])
        self.assertEqual(collection.track_count, 2)
        self.assertTrue(collection.sealed)

    def test_bare_document_without_namespace(self):
        collection = extract_tracks(parse_document(gpx(trk([trkpt()]), namespaced=False)))
        self.assertEqual(len(collection), 1)

    def test_elements_outside_track_hierarchy_ignored(self):
        doc = (
            b'<gpx><wpt lat="1.0" lon="1.0"><time>2023-05-01T10:15:30</time></wpt>'
            b'<trk><trkseg><trkpt lat="1.0" lon="2.0"><time>2023-05-01T10:15:30</time></trkpt>'
            b'<extensions/></trkseg></trk>'
            b'<rte><rtept lat="5.0" lon="5.0"/></rte></gpx>'
        )
        collection = extract_tracks(parse_document(doc))
        self.assertEqual(len(collection), 1)

    def test_empty_document(self):
        collection = extract_tracks(parse_document(gpx()))
        self.assertEqual(len(collection), 0)
        self.assertEqual(collection.track_count, 0)

    def test_one_bad_point_aborts_everything(self):
        doc = gpx(trk([trkpt(), trkpt(time=None), trkpt()]))
        with self.assertRaises(FormatError):
            extract_tracks(parse_document(doc))

    def test_root_gate(self):
        root = etree.fromstring(b"<notgpx><trk/></notgpx>")
        with self.assertRaises(FormatError):
            extract_tracks(root)

    def test_progress_events(self):
        events = []
        doc = gpx(trk([trkpt(), trkpt()], name="Ridge"), trk([trkpt()]))
        extract_tracks(parse_document(doc), progress=events.append)

        self.assertEqual(
            [e.kind for e in events],
            [TRACK_STARTED, TRACK_FINISHED, TRACK_STARTED, TRACK_FINISHED, SUMMARY],
        )
        self.assertEqual(events[0].track_name, "Ridge")
        self.assertEqual(events[1].point_count, 2)
        self.assertEqual(events[2].track_name, UNNAMED_TRACK)
        self.assertEqual(events[2].track_index, 2)
        self.assertEqual(events[4].track_count, 2)
        self.assertEqual(events[4].point_count, 3)

    def test_no_summary_when_load_fails(self):
        events = []
        doc = gpx(trk([trkpt(lat="0.0")], name="Broken"))
        with self.assertRaises(InvalidCoordinatesError):
            extract_tracks(parse_document(doc), progress=events.append)
        self.assertEqual([e.kind for e in events], [TRACK_STARTED])


if __name__ == "__main__":
    unittest.main()
