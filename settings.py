"""
Persisted rendering preferences.

Saved as JSON in the user's home directory so they survive across
sessions.  Stores theme choice, frame duration for animated exports,
and any per-colour overrides.
"""
import json
import os


# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Two built-in Catppuccin-inspired palettes.
#  Each key maps to a hex colour used by the image renderer.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "FG": "#cdd6f4",               # Primary foreground text
        "ACCENT": "#89b4fa",           # Titles
        "CANVAS_BG": "#1e1e2e",        # Image background
        "NODE_RED_FILL": "#f38ba8",    # Fill for RED nodes
        "NODE_BLACK_FILL": "#585b70",  # Fill for BLACK nodes
        "NODE_TEXT": "#ffffff",        # Text inside nodes
        "NODE_OUTLINE": "#ffffff",     # Ring around plain nodes
        "EDGE": "#585b70",             # Lines connecting nodes
        "HIGHLIGHT": "#f9e2af",        # Node highlight ring colour
        "CASE_BG": "#313244",          # Case-explanation box fill
        "WATERMARK": "#555555",
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "CANVAS_BG": "#e6e9ef",
        "NODE_RED_FILL": "#d20f39",
        "NODE_BLACK_FILL": "#4c4f69",
        "NODE_TEXT": "#ffffff",
        "NODE_OUTLINE": "#4c4f69",
        "EDGE": "#8c8fa1",
        "HIGHLIGHT": "#df8e1d",
        "CASE_BG": "#bcc0cc",
        "WATERMARK": "#8c8fa1",
    },
}

DEFAULT_THEME    = "dark"
DEFAULT_FRAME_MS = 600


class Settings:
    """
    Persistent rendering preferences.

    Attributes:
        theme        (str) : Active theme name ("dark" / "light").
        frame_ms     (int) : Milliseconds each step is shown in
                             animated exports.
        custom_colors(dict): Key→hex overrides on top of the theme.
        path         (str) : JSON file backing these settings.

    Default file location:  ~/.rbtree_v1.json
    """
    DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".rbtree_v1.json")

    def __init__(self, path=None, load=True):
        self.path          = path or self.DEFAULT_PATH
        self.theme         = DEFAULT_THEME
        self.frame_ms      = DEFAULT_FRAME_MS
        self.custom_colors = {}
        if load:
            self._load()                # Overwrite defaults from disk

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read settings JSON; a missing or corrupt file keeps defaults."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                d = json.load(f)
        except (OSError, ValueError):
            return
        if not isinstance(d, dict):
            return
        theme = d.get("theme", DEFAULT_THEME)
        self.theme = theme if theme in THEMES else DEFAULT_THEME
        frame_ms = d.get("frame_ms", DEFAULT_FRAME_MS)
        if (isinstance(frame_ms, int) and not isinstance(frame_ms, bool)
                and frame_ms > 0):
            self.frame_ms = frame_ms
        colors = d.get("custom_colors", {})
        if isinstance(colors, dict):
            self.custom_colors = dict(colors)

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        """Write settings JSON (I/O errors propagate)."""
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"theme": self.theme,
                       "frame_ms": self.frame_ms,
                       "custom_colors": self.custom_colors}, f)

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"

        Args:
            key (str): Colour key, e.g. "CANVAS_BG", "NODE_RED_FILL".

        Returns:
            str: Hex colour string.
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES.get(self.theme, THEMES[DEFAULT_THEME]).get(key, "#ffffff")
