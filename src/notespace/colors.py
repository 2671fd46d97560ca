# SPDX-License-Identifier: GPL-3.0-or-later

DEFAULT_TAG_COLOR = 'blue'

# name -> (light, dark)
TAG_COLORS = {
    'yellow':  ('#FFE082', '#6B5F1E'),
    'blue':    ('#90CAF9', '#1B3F6B'),
    'green':   ('#A5D6A7', '#1E5023'),
    'pink':    ('#F48FB1', '#6B1E45'),
    'orange':  ('#FFCC80', '#6B4420'),
    'purple':  ('#CE93D8', '#4A1E6B'),
    'red':     ('#EF9A9A', '#6B1E1E'),
    'teal':    ('#80CBC4', '#1E5046'),
}

COLOR_NAMES = list(TAG_COLORS.keys())


def resolve_color(color) -> str:
    """Tag color to store: palette names and custom hex values pass through."""
    color = (color or '').strip()
    return color or DEFAULT_TAG_COLOR
