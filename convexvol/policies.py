"""Policies that decide what a sampler does with each generated point."""


class PushBackPolicy:
    """Keep every point."""

    def apply(self, points, p):
        """Append ``p`` to ``points``."""
        points.append(p)


class CountingPolicy:
    """Keep and count only the points that fall inside the ball of ``body``.

    ``body`` is a ball-intersect-body object exposing its ball as ``body.ball``.
    """

    def __init__(self, count, body):
        if count < 0:
            raise ValueError("the initial count must be non-negative")
        self.count = count
        self.body = body

    def apply(self, points, p):
        """Append ``p`` and increase the count when ``p`` lies in the ball."""
        if self.body.ball.is_in(p):
            points.append(p)
            self.count += 1