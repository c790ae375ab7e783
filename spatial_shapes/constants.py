"""Numeric constants shared by the geometry modules."""

import sys

# Mean earth radius (IUGG), in kilometers
EARTH_MEAN_RADIUS_KM = 6371.0087714

KM_TO_MILES = 0.621371192

EARTH_MEAN_RADIUS_MI = EARTH_MEAN_RADIUS_KM * KM_TO_MILES

# Geographic world extent in degrees
GEO_MIN_X = -180.0
GEO_MAX_X = 180.0
GEO_MIN_Y = -90.0
GEO_MAX_Y = 90.0

# Number of fractional digits in canonical shape text
TEXT_PRECISION = 6

# Default planar world: the largest finite extent
PLANAR_MAX = sys.float_info.max

# Relative slack on a circle's radius; points on the edge computed in
# floating point land a few ulps either side of it
EDGE_TOLERANCE = 1e-12
