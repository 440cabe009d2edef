"""
Region sampling over decoded pixel grids.
"""
import sys
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from emoji_mosaic.color import Color
from emoji_mosaic.sampling import average_color, sample_average, sample_pixel, to_pixel_grid


class TestPixelGrid(unittest.TestCase):

    def test_rgb_image(self):
        grid = to_pixel_grid(Image.new("RGB", (4, 3), (1, 2, 3)))
        self.assertEqual(grid.shape, (3, 4, 3))
        self.assertEqual(grid.dtype, np.uint8)

    def test_greyscale_becomes_rgb(self):
        grid = to_pixel_grid(Image.new("L", (2, 2), 128))
        self.assertEqual(grid.shape, (2, 2, 3))
        self.assertEqual(grid[0, 0].tolist(), [128, 128, 128])

    def test_alpha_kept(self):
        grid = to_pixel_grid(Image.new("LA", (2, 2), (10, 0)))
        self.assertEqual(grid.shape, (2, 2, 4))


class TestSamplePixel(unittest.TestCase):

    def setUp(self):
        img = Image.new("RGB", (5, 5), (0, 0, 0))
        img.putpixel((2, 3), (255, 128, 0))
        self.grid = to_pixel_grid(img)

    def test_reads_stored_value(self):
        self.assertEqual(sample_pixel(self.grid, 2, 3), Color.from_rgb8(255, 128, 0))
        self.assertEqual(sample_pixel(self.grid, 0, 0), Color(0.0, 0.0, 0.0))

    def test_out_of_bounds_is_none(self):
        for x, y in ((5, 0), (0, 5), (-1, 0), (0, -1), (100, 100)):
            with self.subTest(x=x, y=y):
                self.assertIsNone(sample_pixel(self.grid, x, y))

    def test_transparent_pixel_is_none(self):
        img = Image.new("RGBA", (2, 1), (255, 0, 0, 255))
        img.putpixel((1, 0), (255, 0, 0, 0))
        grid = to_pixel_grid(img)
        self.assertEqual(sample_pixel(grid, 0, 0), Color.from_int(0xFF0000))
        self.assertIsNone(sample_pixel(grid, 1, 0))


class TestSampleAverage(unittest.TestCase):

    def test_mean_of_box(self):
        img = Image.new("RGB", (2, 2), (0, 0, 0))
        img.putpixel((0, 0), (200, 100, 40))
        img.putpixel((1, 1), (200, 100, 40))
        grid = to_pixel_grid(img)
        self.assertEqual(sample_average(grid, (0, 0, 2, 2)), Color.from_rgb8(100, 50, 20))

    def test_box_clipped_to_grid(self):
        grid = to_pixel_grid(Image.new("RGB", (3, 3), (9, 9, 9)))
        self.assertEqual(sample_average(grid, (2, 2, 10, 10)), Color.from_rgb8(9, 9, 9))
        self.assertIsNone(sample_average(grid, (3, 0, 6, 3)))

    def test_transparent_pixels_excluded(self):
        img = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
        img.putpixel((1, 0), (40, 80, 120, 255))
        grid = to_pixel_grid(img)
        self.assertEqual(sample_average(grid, (0, 0, 2, 1)), Color.from_rgb8(40, 80, 120))

    def test_fully_transparent_is_none(self):
        grid = to_pixel_grid(Image.new("RGBA", (2, 2), (5, 5, 5, 0)))
        self.assertIsNone(sample_average(grid, (0, 0, 2, 2)))


class TestAverageColor(unittest.TestCase):

    def test_solid_swatch(self):
        color = average_color(Image.new("RGB", (40, 40), (12, 34, 56)))
        for got, want in zip(color.rgb8, (12, 34, 56)):
            self.assertLessEqual(abs(got - want), 1)

    def test_blank_swatch(self):
        self.assertIsNone(average_color(Image.new("RGBA", (40, 40), (0, 0, 0, 0))))


if __name__ == "__main__":
    unittest.main()
