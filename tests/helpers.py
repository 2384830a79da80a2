"""GPX snippets shared by the test suites."""

GPX_NS = "http://www.topografix.com/GPX/1/1"


def trkpt(lat="45.5", lon="7.6", time="2023-05-01T10:15:30", ele=None, fix=None):
    attrs = []
    if lat is not None:
        attrs.append(f'lat="{lat}"')
    if lon is not None:
        attrs.append(f'lon="{lon}"')
    body = ""
    if ele is not None:
        body += f"<ele>{ele}</ele>"
    if time is not None:
        body += f"<time>{time}</time>"
    if fix is not None:
        body += f"<fix>{fix}</fix>"
    return f"<trkpt {' '.join(attrs)}>{body}</trkpt>"


def trk(*segments, name=None):
    name_xml = f"<name>{name}</name>" if name is not None else ""
    segs = "".join(f"<trkseg>{''.join(points)}</trkseg>" for points in segments)
    return f"<trk>{name_xml}{segs}</trk>"


def gpx(*tracks, namespaced=True, root="gpx"):
    xmlns = f' xmlns="{GPX_NS}"' if namespaced else ""
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<{root} version="1.1" creator="tests"{xmlns}>{"".join(tracks)}</{root}>'
    ).encode("utf-8")
