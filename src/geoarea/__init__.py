"""
geoarea — signed area of geographic polygon rings.

Spherical excess (trapezoid formula) plus the Karney (2011) series
correction for ellipsoids of revolution, with pole-encirclement handling.
"""
