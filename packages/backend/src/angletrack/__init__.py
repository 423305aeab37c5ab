"""AngleTrack — body-angle tracking backend.

Per-user storage of angle measurements, progress photos and a target
goal, behind email/password login and JWT bearer auth.
"""

__version__ = "0.1.0"
