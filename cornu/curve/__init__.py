'''
Curve
-----
Functions and classes for parametric plane curves and the polylines that approximate them.
 - curve.curves: the Curve base class, straight lines (Straight) and circular arcs (Arc).
 - curve.bezier: cubic Bezier curves (BezierCubic).
 - curve.clothoid: clothoids (Clothoid).
 - curve.fit: fit a clothoid between two directed points.
 - curve.spiral: positions along curves of constant sharpness (using scipy.special.fresnel).
 - curve.offset: piecewise-linear lateral offsets along a curve.
 - curve.flatten: convert curves into polylines.
 - curve.geometry: basic algorithms for polyline curves.
 '''
