"""
Output backends and the render dispatcher.
"""
import sys
import unittest
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from emoji_mosaic.color import Color
from emoji_mosaic.colormap import load_colormap, parse_colormap
from emoji_mosaic.matching import nearest
from emoji_mosaic.rendering.image_mode import ImageBackend, load_font
from emoji_mosaic.rendering.renderer import RenderBackend, Renderer
from emoji_mosaic.rendering.text_mode import BLANK, TextBackend, frame_to_text


def _two_by_two():
    img = Image.new("RGBA", (20, 20), (255, 0, 0, 255))
    img.paste((0, 0, 255, 255), (10, 0, 20, 10))
    img.paste((0, 0, 0, 0), (0, 10, 10, 20))
    return img


class TestTextBackend(unittest.TestCase):

    def setUp(self):
        self.palette = parse_colormap("ff0000:R\n0000ff:B")
        self.renderer = Renderer()

    def test_rows_in_visual_order(self):
        frame = self.renderer.render(_two_by_two(), self.palette, mode="text", resolution=10, use_color=False)
        self.assertEqual(frame_to_text(frame), "RB\n" + BLANK + "R")

    def test_plain_rows_are_single_runs(self):
        img = Image.new("RGB", (30, 10), (255, 0, 0))
        frame = self.renderer.render(img, self.palette, mode="text", resolution=10, use_color=False)
        self.assertEqual(frame, [[("class:mosaic", "RRR")]])

    def test_color_runs_merge(self):
        img = Image.new("RGB", (30, 10), (255, 0, 0))
        img.paste((0, 0, 255), (20, 0, 30, 10))
        frame = self.renderer.render(img, self.palette, mode="text", resolution=10, use_color=True)
        self.assertEqual(frame, [[("bg:#ff0000", "RR"), ("bg:#0000ff", "B")]])

    def test_empty_grid(self):
        self.assertEqual(TextBackend().render([], 0, 0, 10, True), [])

    def test_unknown_mode_falls_back_to_text(self):
        img = Image.new("RGB", (10, 10), (0, 0, 255))
        frame = self.renderer.render(img, self.palette, mode="hologram", resolution=10, use_color=False)
        self.assertEqual(frame_to_text(frame), "B")


class TestImageBackend(unittest.TestCase):

    def test_canvas_covers_grid(self):
        palette = parse_colormap("ff0000:R\n0000ff:B")
        out = Renderer().render(Image.new("RGB", (25, 35), (255, 0, 0)), palette, mode="image", resolution=10)
        self.assertIsInstance(out, Image.Image)
        self.assertEqual(out.size, (20, 30))
        self.assertEqual(out.mode, "RGBA")

    def test_background_and_glyph_drawn(self):
        palette = parse_colormap("ff0000:#")
        backend = ImageBackend(font_path="/nonexistent/font.ttf", background="#ffffff")
        renderer = Renderer()
        renderer.register("image", backend)
        with self.assertLogs("emoji_mosaic.rendering.image_mode", level="WARNING"):
            out = renderer.render(Image.new("RGB", (40, 40), (255, 0, 0)), palette, mode="image", resolution=40)
        colors = {c for _n, c in out.getcolors(maxcolors=40 * 40)}
        self.assertIn((255, 255, 255, 255), colors)
        self.assertGreater(len(colors), 1)


    def test_default_font_follows_resolution(self):
        palette = load_colormap()
        glyph = nearest(Color.from_int(0xFF0000), palette)
        widths = []
        for res in (20, 40):
            out = Renderer().render(Image.new("RGB", (res, res), (255, 0, 0)), palette, mode="image", resolution=res)
            self.assertEqual(out.size, (res, res))
            font = load_font(None, int(res * 0.9))
            self.assertIsInstance(font, ImageFont.FreeTypeFont)
            self.assertEqual(font.size, int(res * 0.9))
            bbox = ImageDraw.Draw(out).textbbox((0, 0), glyph, font=font)
            widths.append(bbox[2] - bbox[0])
        self.assertGreater(widths[1], widths[0])

class TestRendererRegistry(unittest.TestCase):

    def test_register_custom_backend(self):
        class CountBackend(RenderBackend):
            name = "count"

            def render(self, placements, columns, rows, resolution, use_color):
                return sum(1 for _ in placements)

        renderer = Renderer()
        renderer.register("count", CountBackend())
        palette = parse_colormap("000000:k")
        self.assertEqual(renderer.render(Image.new("RGB", (25, 25)), palette, mode="count"), 4)
        self.assertIn("count", renderer.modes)


if __name__ == "__main__":
    unittest.main()
