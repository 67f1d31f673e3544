"""
Intersection - Segment and polygon intersection predicates.

Provides:
- Point and Intersection value types
- Linear interpolation
- Segment/segment intersection with parametric offset
- Polygon/polygon intersection over all edge pairs
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """A point in the road plane."""
    x: float
    y: float


@dataclass(frozen=True)
class Intersection:
    """Crossing of two segments.
    
    ``offset`` is the parametric position along the first segment,
    0 at its start and 1 at its end.
    """
    x: float
    y: float
    offset: float


Segment = Tuple[Point, Point]
Polygon = List[Point]


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate between a and b."""
    return a + (b - a) * t


def segment_intersection(
    a: Point,
    b: Point,
    c: Point,
    d: Point,
) -> Optional[Intersection]:
    """Find the intersection of segments AB and CD.
    
    Touching endpoints count as intersecting. Parallel or collinear
    segments never intersect.
    
    Args:
        a: Start of first segment
        b: End of first segment
        c: Start of second segment
        d: End of second segment
        
    Returns:
        Intersection with offset along AB, or None
    """
    t_top = (d.x - c.x) * (a.y - c.y) - (d.y - c.y) * (a.x - c.x)
    u_top = (c.y - a.y) * (a.x - b.x) - (c.x - a.x) * (a.y - b.y)
    bottom = (d.y - c.y) * (b.x - a.x) - (d.x - c.x) * (b.y - a.y)
    
    if bottom == 0:
        return None
    
    t = t_top / bottom
    u = u_top / bottom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return Intersection(
            x=lerp(a.x, b.x, t),
            y=lerp(a.y, b.y, t),
            offset=t,
        )
    
    return None


def polygons_intersect(poly1: Sequence[Point], poly2: Sequence[Point]) -> bool:
    """Check whether any edge of poly1 crosses any edge of poly2.
    
    Both polygons are treated as closed: the last vertex connects back
    to the first. A two-point sequence therefore acts as a plain segment.
    
    Args:
        poly1: Vertices of first polygon
        poly2: Vertices of second polygon
        
    Returns:
        True if the outlines touch or cross
    """
    n1 = len(poly1)
    n2 = len(poly2)
    for i in range(n1):
        for j in range(n2):
            touch = segment_intersection(
                poly1[i],
                poly1[(i + 1) % n1],
                poly2[j],
                poly2[(j + 1) % n2],
            )
            if touch is not None:
                return True
    return False
