from __future__ import annotations


def compute_viral_score(view_count: int, subscriber_count: int) -> float:
    """
    Views relative to the owning channel's audience.

      subs > 0          -> views / subs
      subs == 0, views  -> 1.0 (ratio undefined, but the video has traction)
      both zero         -> 0.0
    """
    if view_count < 0 or subscriber_count < 0:
        raise ValueError("counts must be non-negative")

    if subscriber_count > 0:
        return view_count / subscriber_count
    if view_count > 0:
        return 1.0
    return 0.0
