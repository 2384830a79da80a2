"""Thin traversal helpers over an lxml document tree.

Element names are matched on their local part so that documents declaring the
GPX namespace (``xmlns="http://www.topografix.com/GPX/1/1"``) and bare
documents are walked the same way.
"""

from lxml import etree

from gpxtrack.utils.errors import FormatError


ROOT_TAG = "gpx"


def _make_parser():
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )


def local_name(node):
    tag = node.tag
    if not isinstance(tag, str):
        return None
    return etree.QName(tag).localname


def is_gpx_root(node):
    return node is not None and local_name(node) == ROOT_TAG


def parse_document(data):
    """
    Parse raw GPX bytes into an element tree.

    Returns:
        The root element, guaranteed to be named ``gpx``
    """
    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        raise FormatError(f"malformed XML: {exc}")

    if root is None:
        raise FormatError("empty XML document")
    if not is_gpx_root(root):
        raise FormatError(f"unrecognized format (root element '{local_name(root)}')")
    return root


def children(node, name):
    """Yield element children named `name`, in document order."""
    for child in node:
        if local_name(child) == name:
            yield child


def first_child(node, name):
    return next(children(node, name), None)


def attribute(node, name):
    """Return the attribute value, or None when the attribute is absent."""
    return node.get(name)


def text_of(node):
    return (node.text or "").strip()
