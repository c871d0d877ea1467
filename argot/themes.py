# Argot CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Colour constants and the rich `Theme` used by the Argot console.

`OneColors` holds plain hex strings so they can be dropped straight into rich
markup (`f"[{OneColors.DARK_RED}]..."`). The theme maps semantic style names used
by the help renderer onto those colours.
"""
from rich.theme import Theme


class OneColors:
    """One Dark inspired palette."""

    BLACK = "#282C34"
    WHITE = "#ABB2BF"
    COMMENT_GREY = "#5C6370"
    RED = "#E06C75"
    DARK_RED = "#BE5046"
    GREEN = "#98C379"
    YELLOW = "#E5C07B"
    DARK_YELLOW = "#D19A66"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"
    CYAN = "#56B6C2"

    BLUE_b = f"bold {BLUE}"
    CYAN_b = f"bold {CYAN}"
    GREEN_b = f"bold {GREEN}"


def get_argot_theme() -> Theme:
    """Return the rich theme used for help, version and error output."""
    return Theme(
        {
            "argot.title": OneColors.BLUE_b,
            "argot.heading": OneColors.CYAN_b,
            "argot.flag": OneColors.GREEN,
            "argot.muted": OneColors.COMMENT_GREY,
            "argot.required": OneColors.RED,
            "argot.error": f"bold {OneColors.DARK_RED}",
        }
    )
