"""Candidate groups — one slot of a thumbnail each, best candidate first."""

CandidateGroup = tuple[str, ...]

# One group per cursor role.
CURSOR_GROUPS: tuple[CandidateGroup, ...] = (
    ("left_ptr",),
    ("left_ptr_watch",),
    ("x-cursor", "X_cursor"),
    ("hand2", "hand1"),
    ("grab", "grabbing", "closedhand"),
    ("fleur", "move"),
    ("sb_v_double_arrow",),
)

# One group per application category.
ICON_GROUPS: tuple[CandidateGroup, ...] = (
    # file manager
    ("dde-file-manager", "system-file-manager"),
    # music player
    ("deepin-music", "banshee", "amarok", "deadbeef", "clementine", "rhythmbox"),
    # image viewer
    ("deepin-image-viewer", "eog", "gthumb", "gwenview", "gpicview", "showfoto", "phototonic"),
    # web browser
    ("org.deepin.browser", "google-chrome", "firefox", "chromium", "opera", "internet-web-browser", "browser"),
    # system settings
    ("user-trash",),
)
