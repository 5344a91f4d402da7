"""Intersection of two convex bodies that share the ray-shooting interface."""


class BodyIntersection:
    """The set of points that lie in both ``first`` and ``second``.

    Facet ids returned by :meth:`line_positive_intersect` are ``1`` for a hit
    on ``first`` and ``2`` for a hit on ``second``.
    """

    def __init__(self, first, second):
        if first.dimension() != second.dimension():
            raise ValueError(
                f"bodies live in different dimensions: "
                f"{first.dimension()} and {second.dimension()}"
            )
        self.first = first
        self.second = second

    def dimension(self):
        """Dimension of the ambient space."""
        return self.first.dimension()

    def num_of_hyperplanes(self):
        """Always zero: the intersection keeps no explicit facet list."""
        return 0

    def upper_bound_of_hyperplanes(self):
        """Bound used to size distance vectors: the dimension plus one."""
        return self.dimension() + 1

    def is_in(self, p):
        """Whether ``p`` lies in both bodies."""
        return self.first.is_in(p) and self.second.is_in(p)

    def line_intersect(self, r, v):
        """Return ``(upper, lower)`` for the intersection along ``r + t v``."""
        first_upper, first_lower = self.first.line_intersect(r, v)
        second_upper, second_lower = self.second.line_intersect(r, v)
        return min(first_upper, second_upper), max(first_lower, second_lower)

    def line_positive_intersect(self, r, v):
        """Return the first positive hit and the id (1 or 2) of the body it lies on."""
        first_t, _ = self.first.line_positive_intersect(r, v)
        second_t, _ = self.second.line_positive_intersect(r, v)
        if first_t < second_t:
            return first_t, 1
        return second_t, 2

    def line_intersect_coord(self, r, coord):
        """Intersect the line through ``r`` along coordinate axis ``coord``."""
        first_upper, first_lower = self.first.line_intersect_coord(r, coord)
        second_upper, second_lower = self.second.line_intersect_coord(r, coord)
        return min(first_upper, second_upper), max(first_lower, second_lower)

    def shift(self, c):
        """Translate both bodies so that the point ``c`` becomes the origin."""
        self.first.shift(c)
        self.second.shift(c)

    def linear_transform(self, t):
        """Apply the same linear transformation to both bodies."""
        self.first.linear_transform(t)
        self.second.linear_transform(t)

    def get_dists(self, radius):
        """Lower bounds on facet distances, all equal to ``radius``."""
        return [radius] * self.upper_bound_of_hyperplanes()

    def normalize(self):
        """Normalize both bodies."""
        self.first.normalize()
        self.second.normalize()

    def compute_reflection(self, v, p, facet):
        """Reflect ``v`` on the body named by ``facet`` at the boundary point ``p``."""
        body = self.first if facet == 1 else self.second
        return body.compute_reflection(v, p, facet)