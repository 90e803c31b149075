"""Tests for the closest-block resolver and its tie-breaks."""

import pytest

from blockify.colour_convert import rgb_to_lab_tuple
from blockify.core_types import BlockSignature, DistinctColour
from blockify.resolve import closest_block


def _colour(r, g, b, score=0.0):
    return DistinctColour(score=score, rgba=(r, g, b, 255), lab=rgb_to_lab_tuple(r, g, b))


def _sig(path, *rgbs):
    return BlockSignature(
        path=path,
        colours=tuple(_colour(*rgb, score=float(i)) for i, rgb in enumerate(rgbs)),
    )


RED = (200, 20, 20)
GREEN = (20, 180, 20)
BLUE = (20, 20, 200)
GREY = (128, 128, 128)


class TestClosestBlock:

    def test_single_candidate(self):
        assert closest_block(rgb_to_lab_tuple(*GREY), [_sig("x.png", RED)]) == "x.png"

    def test_nearest_head_wins(self):
        palette = [_sig("red.png", RED), _sig("green.png", GREEN), _sig("blue.png", BLUE)]
        assert closest_block(rgb_to_lab_tuple(25, 170, 30), palette) == "green.png"

    def test_only_head_colour_counts_without_tie(self):
        # b's second colour is an exact match but its head is further away
        palette = [_sig("a.png", (190, 30, 30)), _sig("b.png", BLUE, RED)]
        assert closest_block(rgb_to_lab_tuple(*RED), palette) == "a.png"

    def test_identical_blocks_break_alphabetically(self):
        palette = [_sig("/blocks/b.png", RED), _sig("/blocks/a.png", RED)]
        query = rgb_to_lab_tuple(*RED)
        for _ in range(5):
            assert closest_block(query, palette) == "/blocks/a.png"
            assert closest_block(query, list(reversed(palette))) == "/blocks/a.png"

    def test_secondary_colour_breaks_tie(self):
        palette = [_sig("a.png", RED, GREEN), _sig("b.png", RED, BLUE)]
        assert closest_block(rgb_to_lab_tuple(*BLUE), palette) == "b.png"
        assert closest_block(rgb_to_lab_tuple(*GREEN), palette) == "a.png"

    def test_exhausted_candidate_keeps_its_last_colour(self):
        # a has one colour; in round two it still competes with RED
        palette = [_sig("a.png", RED), _sig("b.png", RED, GREY)]
        assert closest_block(rgb_to_lab_tuple(*RED), palette) == "a.png"
        assert closest_block(rgb_to_lab_tuple(*GREY), palette) == "b.png"

    def test_tie_through_every_colour_falls_back_to_path(self):
        palette = [_sig("z.png", RED, BLUE), _sig("m.png", RED, BLUE)]
        assert closest_block(rgb_to_lab_tuple(*GREEN), palette) == "m.png"

    def test_tied_candidates_settle_on_second_colour(self):
        # a and b tie on RED; grey sits far nearer a dull red than green does
        palette = [
            _sig("a.png", RED, GREEN),
            _sig("b.png", RED, GREY),
            _sig("c.png", BLUE, (120, 120, 120)),
        ]
        assert closest_block(rgb_to_lab_tuple(200, 25, 25), palette) == "b.png"

    def test_non_tied_candidate_cannot_return_in_later_rounds(self):
        # c's second colour is the query itself, but c lost the head round
        query = (200, 25, 25)
        palette = [
            _sig("a.png", RED, GREEN),
            _sig("b.png", RED, GREY),
            _sig("c.png", BLUE, query),
        ]
        assert closest_block(rgb_to_lab_tuple(*query), palette) == "b.png"

    def test_order_independent(self):
        palette = [_sig(f"{i:02d}.png", (i * 10, 100, 255 - i * 10)) for i in range(20)]
        query = rgb_to_lab_tuple(73, 100, 182)
        expected = closest_block(query, palette)
        assert closest_block(query, list(reversed(palette))) == expected
        assert closest_block(query, palette[10:] + palette[:10]) == expected

    def test_empty_palette_raises(self):
        with pytest.raises(ValueError):
            closest_block(rgb_to_lab_tuple(*RED), [])
