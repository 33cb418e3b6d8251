"""
Apparent retrograde motion of a body as seen from the focus body.
"""
from orrery.snapshot import Snapshot


def relative_position(snap: Snapshot, body_index: int, focus_index: int) -> tuple[float, float]:
    p = snap.positions[body_index]
    c = snap.positions[focus_index]
    return p.x - c.x, p.y - c.y


def is_retrograde(body_index: int, focus_index: int, now: Snapshot, prev: Snapshot) -> bool:
    """
    True when the body moves clockwise around the focus.

    The relative velocity is the finite difference of the true ecliptic relative
    positions at `now` and `prev` (one calendar day earlier), so the result does
    not depend on the view mode. The focus itself is never retrograde.
    """
    if body_index == focus_index:
        return False

    rx, ry = relative_position(now, body_index, focus_index)
    rx_prev, ry_prev = relative_position(prev, body_index, focus_index)

    vx = rx - rx_prev
    vy = ry - ry_prev

    return (rx * vy - ry * vx) < 0
