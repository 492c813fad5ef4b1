"""
Geometry helpers for polygon checks.

Geometries are GeoJSON in WGS84 (lon, lat). Areas are approximated by
scaling the planar area in square degrees to square metres at the
centroid latitude, which is accurate enough for restoration-scale polygons.
"""
import math

from shapely.geometry import LineString, MultiPolygon, Polygon, shape

EARTH_RADIUS_METERS = 6378137
METERS_PER_DEGREE = EARTH_RADIUS_METERS * math.pi / 180
SQUARE_METERS_PER_HECTARE = 10000


def to_shape(geojson):
    """Build a shapely geometry from a GeoJSON geometry dict."""
    if not isinstance(geojson, dict):
        raise ValueError(f"Expected a GeoJSON object, got {type(geojson).__name__}")
    geometry = shape(geojson)
    if not isinstance(geometry, (Polygon, MultiPolygon)):
        raise ValueError(f"Unsupported geometry type: {geometry.geom_type}")
    return geometry


def polygon_parts(geometry):
    if isinstance(geometry, MultiPolygon):
        return list(geometry.geoms)
    return [geometry]


def iter_rings(geometry):
    """Yield every exterior and interior ring of a (multi)polygon."""
    for polygon in polygon_parts(geometry):
        if polygon.is_empty:
            continue
        yield polygon.exterior
        for interior in polygon.interiors:
            yield interior


def is_simple(geometry) -> bool:
    """True when no ring of the geometry crosses or touches itself."""
    return all(LineString(ring.coords).is_simple for ring in iter_rings(geometry))


def area_hectares(geometry) -> float:
    if geometry.is_empty:
        return 0.0
    latitude = geometry.centroid.y
    square_meters = geometry.area * METERS_PER_DEGREE ** 2 * math.cos(math.radians(latitude))
    return abs(square_meters) / SQUARE_METERS_PER_HECTARE


def _ring_vertices(ring):
    """Ring vertices without the closing point and without repeated points."""
    vertices = []
    for x, y, *_ in ring.coords:
        if vertices and vertices[-1] == (x, y):
            continue
        vertices.append((x, y))
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices.pop()
    return vertices


def vertex_angle(previous, vertex, following) -> float:
    """
    Angle in degrees at `vertex` between the edges to its neighbours.

    Longitudes are scaled by cos(latitude) so the angle is measured on a
    local equirectangular projection.
    """
    scale = math.cos(math.radians(vertex[1]))
    ax = (previous[0] - vertex[0]) * scale
    ay = previous[1] - vertex[1]
    bx = (following[0] - vertex[0]) * scale
    by = following[1] - vertex[1]
    length_a = math.hypot(ax, ay)
    length_b = math.hypot(bx, by)
    if length_a == 0 or length_b == 0:
        return 180.0
    cosine = (ax * bx + ay * by) / (length_a * length_b)
    cosine = max(-1.0, min(1.0, cosine))
    return math.degrees(math.acos(cosine))


def find_spikes(geometry, threshold_degrees):
    """Return [lon, lat] of every vertex whose angle is below the threshold."""
    spikes = []
    for ring in iter_rings(geometry):
        vertices = _ring_vertices(ring)
        if len(vertices) < 3:
            continue
        count = len(vertices)
        for index, vertex in enumerate(vertices):
            previous = vertices[index - 1]
            following = vertices[(index + 1) % count]
            if vertex_angle(previous, vertex, following) < threshold_degrees:
                spikes.append([vertex[0], vertex[1]])
    return spikes
