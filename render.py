"""
Off-screen tree image renderer.

Renders a snapshot dict-tree to a Pillow Image.  Used by the
exporters:
  • PNG export        — single frame
  • PDF walkthrough   — one frame per page
  • Animation export  — sequence of frames

Layout: title at top, tree in middle, case-explanation box at
bottom (if case_text provided).
"""
from PIL import Image, ImageDraw, ImageFont

from settings import Settings
from treeutils import layout_tree, tree_height


FONT_CANDIDATES = [
    "consola.ttf",                                         # Windows
    "Consolas.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf", # Debian/Ubuntu
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",             # Arch
    "/System/Library/Fonts/Menlo.ttc",                     # macOS
]


class TreeImageRenderer:
    """
    Off-screen tree renderer using Pillow.

    Converts a snapshot dict-tree into an Image by:
        1. Computing layout positions (layout_tree)
        2. Drawing edges (parent → child lines)
        3. Drawing nodes (circles with key labels)
        4. Highlighting specified keys with a coloured ring

    Args:
        settings (Settings|None): For colour lookups (defaults used
                                  when None, nothing read from disk).
        width    (int)          : Image width in pixels.
        height   (int)          : Image height in pixels.
    """

    def __init__(self, settings=None, width=800, height=500):
        self.settings    = settings if settings is not None else Settings(load=False)
        self.width       = width
        self.height      = height
        self.node_radius = 22           # Circle radius for nodes
        self.padding     = 50           # Horizontal margin
        self._fonts      = None

    # ── Font loading ────────────────────────────────────────────
    def _load_fonts(self):
        """
        Load monospace fonts for labels, cached per renderer.

        Tries platform-specific paths (Windows, Linux, macOS).
        Falls back to Pillow's built-in bitmap font if none found.

        Returns:
            tuple[ImageFont, ImageFont, ImageFont]:
                (normal_14pt, small_11pt, title_16pt)
        """
        if self._fonts is not None:
            return self._fonts
        font = font_s = font_t = None
        for p in FONT_CANDIDATES:
            try:
                font_t = ImageFont.truetype(p, 16)    # Title
                font   = ImageFont.truetype(p, 14)    # Normal
                font_s = ImageFont.truetype(p, 11)    # Small
                break
            except OSError:
                continue
        if font is None:
            font = font_s = font_t = ImageFont.load_default()
        self._fonts = (font, font_s, font_t)
        return self._fonts

    # ── Main render method ──────────────────────────────────────
    def render(self, tree_state, highlight=None, title="", case_text=""):
        """
        Render a tree snapshot to a Pillow Image.

        Args:
            tree_state (dict|None) : Snapshot dict-tree (RBTree.snapshot()).
            highlight  (list|None) : Keys to highlight with a ring.
            title      (str)       : Text drawn at the top of the image.
            case_text  (str)       : Case explanation drawn at bottom.

        Returns:
            Image: Rendered RGB image of width × height pixels.
        """
        s = self.settings
        highlight = [h for h in (highlight or []) if h is not None]

        # ── Create blank canvas ──
        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_s, font_t = self._load_fonts()

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)

        if case_text:
            y0 = self.height - 80
            draw.rectangle([5, y0, self.width - 5, self.height - 5],
                           fill=s.get("CASE_BG"))
            for i, ln in enumerate(case_text.split('\n')[:3]):
                draw.text((10, y0 + 5 + i * 16), ln[:90],
                          fill=s.get("FG"), font=font_s)

        # ── Empty tree fallback ──
        if tree_state is None:
            draw.text((self.width // 2 - 40, self.height // 2),
                      "Empty Tree", fill=s.get("FG"), font=font)
            return img

        # ── Compute layout positions ──
        positions = {}
        layout_tree(tree_state, 0, 0.0, 1.0, positions)
        th  = max(tree_height(tree_state), 1)   # Avoid division by zero
        pad = self.padding
        tree_h = (self.height - 120) if case_text else (self.height - 60)

        # Convert normalised coordinates → pixel coordinates
        def cx(x): return int(pad + x * (self.width  - 2 * pad))
        def cy(y): return int(55  + y * (tree_h - 40) / th)

        # ── Recursive draw: edges first, then nodes on top ──
        def _draw(node, pp=None):
            if node is None:
                return
            key = node["key"]
            pos = positions[key]
            x, y = cx(pos["x"]), cy(pos["y"])

            if pp:
                draw.line([pp, (x, y)], fill=s.get("EDGE"), width=2)

            _draw(node.get("left"),  (x, y))
            _draw(node.get("right"), (x, y))

            r       = self.node_radius
            fill    = s.get("NODE_RED_FILL") if node["color"] else s.get("NODE_BLACK_FILL")
            marked  = key in highlight
            outline = s.get("HIGHLIGHT") if marked else s.get("NODE_OUTLINE")
            draw.ellipse([x - r, y - r, x + r, y + r],
                         fill=fill, outline=outline, width=3 if marked else 1)

            # Key text centred in the circle
            txt = str(key)
            bb  = draw.textbbox((0, 0), txt, font=font)
            tw, tth = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((x - tw // 2, y - tth // 2), txt,
                      fill=s.get("NODE_TEXT"), font=font)

        _draw(tree_state)

        draw.text((10, self.height - 18), "RB Tree",
                  fill=s.get("WATERMARK"), font=font_s)
        return img
