"""
Nearest-match search and the per-pass match cache.
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from emoji_mosaic.color import Color, distance
from emoji_mosaic.colormap import parse_colormap
from emoji_mosaic.matching import MatchCache, nearest, nearest_entry


class TestColor(unittest.TestCase):

    def test_quantization_is_shared(self):
        self.assertEqual(Color.from_int(0x3B88C3), Color.from_rgb8(0x3B, 0x88, 0xC3))
        self.assertEqual(hash(Color.from_int(0x3B88C3)), hash(Color.from_rgb8(59, 136, 195)))

    def test_hex_round_trip_every_channel_value(self):
        for v in range(256):
            c = Color.from_rgb8(v, v, v)
            self.assertEqual(c.rgb8, (v, v, v))

    def test_from_int_range(self):
        with self.assertRaises(ValueError):
            Color.from_int(0x1000000)

    def test_distance_is_euclidean(self):
        self.assertAlmostEqual(distance(Color(0, 0, 0), Color(1, 1, 1)), 3 ** 0.5)
        self.assertEqual(Color(0.5, 0.5, 0.5).distance(Color(0.5, 0.5, 0.5)), 0.0)


class TestNearest(unittest.TestCase):

    def test_exact_key_wins(self):
        palette = parse_colormap("ff0000:🍎\nff0001:🍓")
        self.assertEqual(nearest(Color(1.0, 0.0, 0.0), palette), "🍎")

    def test_every_key_matches_itself_at_zero(self):
        palette = parse_colormap("000000:k\n808080:g\nffffff:w\n3b88c3:b\nff0000:r")
        for color, glyph in palette.items():
            key, found, d = nearest_entry(color, palette)
            self.assertEqual(found, glyph)
            self.assertEqual(key, color)
            self.assertEqual(d, 0.0)

    def test_closest_entry(self):
        palette = parse_colormap("000000:k\nffffff:w")
        self.assertEqual(nearest(Color.from_rgb8(30, 30, 30), palette), "k")
        self.assertEqual(nearest(Color.from_rgb8(200, 200, 200), palette), "w")

    def test_tie_breaks_to_lowest_key(self):
        palette = parse_colormap("ff0000:r\n0000ff:b")
        query = Color(0.5, 0.0, 0.5)
        self.assertEqual(distance(query, Color.from_int(0xFF0000)),
                         distance(query, Color.from_int(0x0000FF)))
        self.assertEqual(nearest(query, palette), "b")

    def test_tie_break_ignores_file_order(self):
        a = parse_colormap("00ff00:g\n0000ff:b")
        b = parse_colormap("0000ff:b\n00ff00:g")
        query = Color(0.0, 0.5, 0.5)
        self.assertEqual(nearest(query, a), "b")
        self.assertEqual(nearest(query, b), "b")

    def test_repeated_queries_agree(self):
        palette = parse_colormap("ff0000:r\n0000ff:b\n00ff00:g")
        query = Color(0.5, 0.5, 0.5)
        self.assertEqual({nearest(query, palette) for _ in range(5)}, {nearest(query, palette)})

    def test_single_entry_palette(self):
        palette = parse_colormap("808080:g")
        key, glyph, d = nearest_entry(Color.from_int(0xFFFFFF), palette)
        self.assertEqual((key, glyph), (Color.from_int(0x808080), "g"))
        self.assertAlmostEqual(d, distance(key, Color.from_int(0xFFFFFF)))


class TestMatchCache(unittest.TestCase):

    def test_miss_then_hit(self):
        palette = parse_colormap("000000:k\nffffff:w")
        cache = MatchCache()
        c = Color.from_rgb8(10, 10, 10)
        self.assertEqual(cache.resolve(c, palette), "k")
        self.assertEqual(cache.resolve(c, palette), "k")
        self.assertEqual((cache.hits, cache.misses), (1, 1))
        self.assertEqual(len(cache), 1)
        self.assertIn(c, cache)

    def test_clear(self):
        palette = parse_colormap("000000:k")
        cache = MatchCache()
        cache.resolve(Color(0, 0, 0), palette)
        cache.clear()
        self.assertEqual(len(cache), 0)
        self.assertEqual(cache.misses, 0)


if __name__ == "__main__":
    unittest.main()
