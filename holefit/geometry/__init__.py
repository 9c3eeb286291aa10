from .polygon import (
    Point,
    squared_distance,
    polygon_area,
    polygon_bounds,
    max_squared_extent,
    segments_intersect,
    is_self_intersecting,
    validate_hole,
)
