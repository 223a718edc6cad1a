'''
# cornu

Python modules for plane curves: paths between directed points built from
straight lines, circular arcs, cubic Bezier curves and clothoids (Euler or
Cornu spirals), and their conversion into polylines.

Points
------
 - point: Point2d and DirectedPoint2d (position plus heading) value types, and angle helpers.
 - util: argument checking and the NonconvergenceWarning issued by iterative computations.

Curve
-----
Functions and classes for parametric plane curves and the polylines that approximate them.
 - curve.curves: the Curve base class, straight lines (Straight) and circular arcs (Arc).
 - curve.bezier: cubic Bezier curves (BezierCubic).
 - curve.clothoid: clothoids (Clothoid), constructed from two directed points, or from a start point, curvatures and length or clothoid parameter.
 - curve.fit: fit a clothoid between two directed points, degenerating to a straight line or arc where these suffice.
 - curve.spiral: positions along curves of constant sharpness via the Fresnel integrals (using scipy.special).
 - curve.offset: piecewise-linear lateral offsets along a curve (PiecewiseLinearOffset).
 - curve.flatten: convert curves, optionally offset, into polylines with a fixed number of segments or within bounds on deviation and/or angle.
 - curve.geometry: basic algorithms for polyline curves.

'''
