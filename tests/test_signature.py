"""Tests for block signatures and palette building."""

import numpy as np
import pytest

from blockify.errors import DecodeError
from blockify.signature import build_block_signature, build_palette, rank_colours

from conftest import solid, write_rgba


def _two_tone(rgba1, rgba2, n_second):
    """16x16 block, first n_second pixels (row-major) in rgba2, rest rgba1."""
    flat = np.tile(np.array(rgba1, dtype=np.uint8), (256, 1))
    flat[:n_second] = rgba2
    return flat.reshape(16, 16, 4)


class TestBuildBlockSignature:

    def test_uniform_block_has_one_colour(self, block_dir):
        path = write_rgba(block_dir / "stone.png", solid(120, 120, 120))
        sig = build_block_signature(path)
        assert sig is not None
        assert sig.path == path
        assert len(sig.colours) == 1
        assert sig.head.rgba == (120, 120, 120, 255)
        assert sig.head.score == 0.0

    def test_wrong_size_is_skipped(self, block_dir):
        path = write_rgba(block_dir / "big.png", solid(1, 2, 3, height=32, width=32))
        assert build_block_signature(path) is None

    def test_non_square_is_skipped(self, block_dir):
        path = write_rgba(block_dir / "wide.png", solid(1, 2, 3, height=16, width=17))
        assert build_block_signature(path) is None

    def test_any_transparency_is_skipped(self, block_dir):
        img = solid(200, 10, 10)
        img[15, 15, 3] = 254
        path = write_rgba(block_dir / "glass.png", img)
        assert build_block_signature(path) is None

    def test_majority_colour_ranks_first(self, block_dir):
        img = _two_tone((200, 0, 0, 255), (0, 0, 200, 255), 56)
        sig = build_block_signature(write_rgba(block_dir / "mix.png", img))
        assert sig is not None
        assert [c.rgba for c in sig.colours] == [(200, 0, 0, 255), (0, 0, 200, 255)]
        red, blue = sig.colours
        assert red.score < blue.score
        # 56 blue pixels pull on red, 200 red pixels pull on blue
        assert blue.score == pytest.approx(red.score * 200 / 56)

    def test_colours_are_deduplicated(self, block_dir):
        img = _two_tone((10, 200, 10, 255), (250, 250, 250, 255), 100)
        sig = build_block_signature(write_rgba(block_dir / "dup.png", img))
        rgbas = [c.rgba for c in sig.colours]
        assert len(rgbas) == len(set(rgbas)) == 2

    def test_undecodable_block_raises(self, block_dir):
        bad = block_dir / "broken.png"
        bad.write_bytes(b"not an image")
        with pytest.raises(DecodeError) as info:
            build_block_signature(bad)
        assert "broken.png" in str(info.value)


class TestRankColours:

    def test_equal_scores_keep_pixel_order(self):
        img = _two_tone((0, 0, 0, 255), (255, 255, 255, 255), 128)
        colours = rank_colours(img[..., :3], img[..., 3])
        assert colours[0].score == colours[1].score
        assert colours[0].rgba == (255, 255, 255, 255)

    def test_scores_are_sorted(self):
        rng = np.random.RandomState(3)
        rgb = rng.randint(0, 256, size=(16, 16, 3)).astype(np.uint8)
        alpha = np.full((16, 16), 255, dtype=np.uint8)
        scores = [c.score for c in rank_colours(rgb, alpha)]
        assert scores == sorted(scores)


class TestBuildPalette:

    def test_filters_and_orders_by_path(self, block_dir):
        paths = [
            write_rgba(block_dir / "c.png", solid(0, 0, 255)),
            write_rgba(block_dir / "a.png", solid(255, 0, 0)),
            write_rgba(block_dir / "b.png", solid(0, 255, 0, a=128)),
            write_rgba(block_dir / "d.png", solid(9, 9, 9, height=8, width=8)),
        ]
        palette = build_palette(paths, workers=4)
        assert [s.path for s in palette] == [paths[1], paths[0]]

    def test_empty_input(self):
        assert build_palette([]) == ()

    def test_decode_error_aborts(self, block_dir):
        good = write_rgba(block_dir / "good.png", solid(1, 1, 1))
        bad = block_dir / "bad.png"
        bad.write_bytes(b"\x89PNG garbage")
        with pytest.raises(DecodeError):
            build_palette([good, str(bad)], workers=2)
