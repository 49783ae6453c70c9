"""
Tests for image-space transforms, insets, tweening and world files.
"""

import pytest

from atlas_coords.image import (
    BI1,
    BI4,
    NAMED_TRANS_OPTS,
    Inset,
    InsetDims,
    TransOpts,
    compute_inset_layout,
    create_image_transform,
    image_placement,
    load_world_file,
    make_point_transform,
    normalize_trans_opts,
    parse_world_file,
    pixel_radius,
    resolve_trans_opts,
    tween_frames,
    tween_trans_opts,
    width_from_height,
)
from atlas_coords.image.presets import CHANNEL_ISLANDS_BOUNDS, NORTHERN_ISLES_BOUNDS
from atlas_coords.models import Bounds

SQUARE = Bounds(0, 0, 1000, 1000)
CORNER_INSET = Inset(Bounds(900, 900, 1000, 1000), image_x=-25, image_y=-25)

# Main map, Channel Islands and Northern Isles sample points
SAMPLE_POINTS = [(400000, 500000), (380000, -50000), (350000, 1100000)]


def approx_pair(pair, abs=1e-6):
    return pytest.approx(pair, abs=abs)


# =============================================================================
# OPTIONS
# =============================================================================

class TestTransOpts:

    def test_presets(self):
        assert sorted(NAMED_TRANS_OPTS) == ['BI1', 'BI2', 'BI3', 'BI4']
        assert BI1.insets == ()
        assert [i.bounds for i in BI4.insets] == [CHANNEL_ISLANDS_BOUNDS, NORTHERN_ISLES_BOUNDS]

    def test_resolve_key(self):
        assert resolve_trans_opts('BI4') is BI4

    def test_resolve_mapping(self):
        opts = resolve_trans_opts({
            'bounds': {'xmin': 0, 'ymin': 0, 'xmax': 10, 'ymax': 20},
            'insets': [{'bounds': {'xmin': 1, 'ymin': 1, 'xmax': 2, 'ymax': 2},
                        'imageX': 3, 'imageY': -4}],
        })
        assert opts.bounds == Bounds(0, 0, 10, 20)
        assert opts.insets[0].image_x == 3.0
        assert opts.insets[0].image_y == -4.0

    def test_dict_round_trip(self):
        assert TransOpts.from_dict(BI4.to_dict()) == BI4

    @pytest.mark.parametrize('opts', [
        'BI9',
        TransOpts(bounds=Bounds(0, 0, 0, 10)),
        TransOpts(bounds=SQUARE, insets=(Inset(Bounds(5, 5, 5, 6), 0, 0),)),
        42,
    ])
    def test_invalid(self, opts):
        with pytest.raises(ValueError):
            resolve_trans_opts(opts)

    def test_width_from_height(self):
        assert width_from_height('BI1', 1218) == pytest.approx(884.0)
        assert width_from_height(TransOpts(bounds=Bounds(0, 0, 200, 100)), 50) == 100.0


# =============================================================================
# POINT TRANSFORM AND INSETS
# =============================================================================

class TestPointTransform:

    def test_main_mapping_is_top_down(self):
        point = make_point_transform(TransOpts(bounds=SQUARE), 1000)
        assert point([0, 0]) == approx_pair((0, 1000))
        assert point([1000, 1000]) == approx_pair((1000, 0))
        assert point([250, 750]) == approx_pair((250, 250))

    def test_inset_offset_from_far_edges(self):
        opts = TransOpts(bounds=SQUARE, insets=(CORNER_INSET,))
        point = make_point_transform(opts, 1000)
        # Top-left of the inset region lands 25 px in from the right and top
        assert point([900, 1000]) == approx_pair((875, 25))
        assert point([1000, 900]) == approx_pair((975, 125))
        assert compute_inset_layout(opts, 1000) == [InsetDims(875, 25, 100, 100)]

    def test_ignore_inset(self):
        point = make_point_transform(TransOpts(bounds=SQUARE, insets=(CORNER_INSET,)), 1000)
        assert point([900, 1000], ignore_inset=True) == approx_pair((900, 0))

    def test_inset_with_positive_offsets(self):
        opts = TransOpts(bounds=SQUARE, insets=(Inset(Bounds(0, 0, 100, 100), 500, 500),))
        point = make_point_transform(opts, 1000)
        assert point([50, 50]) == approx_pair((550, 450))
        assert compute_inset_layout(opts, 1000) == [InsetDims(500, 400, 100, 100)]

    def test_points_outside_insets_unmoved(self):
        opts = TransOpts(bounds=SQUARE, insets=(CORNER_INSET,))
        assert make_point_transform(opts, 1000)([500, 500]) == approx_pair((500, 500))

    def test_overlapping_insets_last_wins(self):
        region = Bounds(0, 0, 100, 100)
        opts = TransOpts(bounds=SQUARE, insets=(Inset(region, 200, 200), Inset(region, 600, 600)))
        point = make_point_transform(opts, 1000)
        assert point([0, 0]) == approx_pair((600, 400))

    def test_scaled_output(self):
        point = make_point_transform(TransOpts(bounds=SQUARE), 500)
        assert point([1000, 0]) == approx_pair((500, 500))

    def test_create_image_transform(self):
        it = create_image_transform('BI2', 1218)
        assert it.params is NAMED_TRANS_OPTS['BI2']
        assert it.width == pytest.approx(884.0)
        assert it.height == 1218
        assert len(it.inset_dims) == 1
        assert it.point([400000, 500000]) == make_point_transform('BI2', 1218)([400000, 500000])

    def test_preset_channel_islands_moved(self):
        point = make_point_transform('BI2', 1218)
        moved = point([380000, -50000])
        unmoved = point([380000, -50000], ignore_inset=True)
        assert moved != unmoved
        dims = compute_inset_layout('BI2', 1218)[0]
        assert dims.x <= moved[0] <= dims.x + dims.width
        assert dims.y <= moved[1] <= dims.y + dims.height


class TestPixelRadius:

    def test_half_square(self):
        point = make_point_transform(TransOpts(bounds=Bounds(0, 0, 1000000, 1000000)), 1000)
        assert pixel_radius(point, 10000) == pytest.approx(5.0)

    def test_custom_origin(self):
        point = make_point_transform(TransOpts(bounds=Bounds(0, 0, 1000000, 1000000)), 2000)
        assert pixel_radius(point, 1000, origin=(10, 10)) == pytest.approx(1.0)


# =============================================================================
# TWEENING
# =============================================================================

class TestTween:

    def test_normalize_adds_home_insets(self):
        opts = normalize_trans_opts('BI1', 1218)
        assert opts.is_tween
        assert [i.bounds for i in opts.insets] == [CHANNEL_ISLANDS_BOUNDS, NORTHERN_ISLES_BOUNDS]

    def test_normalized_layout_draws_the_same(self):
        for key in ('BI1', 'BI2', 'BI3', 'BI4'):
            original = make_point_transform(key, 1218)
            normalized = make_point_transform(normalize_trans_opts(key, 1218), 1218)
            for p in SAMPLE_POINTS:
                assert normalized(p) == approx_pair(original(p), abs=1e-6)

    @pytest.mark.parametrize('start, end', [
        (a, b) for a in ('BI1', 'BI2', 'BI3', 'BI4') for b in ('BI1', 'BI2', 'BI3', 'BI4') if a != b
    ])
    def test_end_points_match_layouts(self, start, end):
        at_start = make_point_transform(tween_trans_opts(start, end, 1218, 0.0), 1218)
        at_end = make_point_transform(tween_trans_opts(start, end, 1218, 1.0), 1218)
        for p in SAMPLE_POINTS:
            assert at_start(p) == approx_pair(make_point_transform(start, 1218)(p), abs=1e-6)
            assert at_end(p) == approx_pair(make_point_transform(end, 1218)(p), abs=1e-6)

    def test_midpoint_bounds(self):
        mid = tween_trans_opts('BI1', 'BI4', 1218, 0.5)
        assert mid.is_tween
        assert mid.bounds.ymax == pytest.approx((1209000 + 1000000) / 2)
        assert mid.id == 'BI1-BI4'

    def test_mismatched_extra_insets(self):
        extra = TransOpts(
            bounds=BI1.bounds,
            insets=(Inset(Bounds(0, 0, 1000, 1000), 10, 10),),
        )
        with pytest.raises(ValueError):
            tween_trans_opts('BI1', extra, 1218, 0.5)

    def test_frames(self):
        frames = list(tween_frames('BI1', 'BI4', 1218, 4))
        assert len(frames) == 4
        assert frames[-1] == tween_trans_opts('BI1', 'BI4', 1218, 1.0)
        assert frames[0] == tween_trans_opts('BI1', 'BI4', 1218, 0.25)

    def test_frames_need_steps(self):
        with pytest.raises(ValueError):
            list(tween_frames('BI1', 'BI4', 1218, 0))


# =============================================================================
# WORLD FILES
# =============================================================================

WORLD_TEXT = "10.0\n0.0\n0.0\n-10.0\n100000.0\n200000.0\n"


class TestWorldFile:

    def test_parse(self):
        world = parse_world_file(WORLD_TEXT)
        assert world.x_resolution == 10.0
        assert world.y_resolution == -10.0
        assert world.min_easting == 100000.0
        assert world.max_northing == 200000.0
        assert world.max_easting(100) == 101000.0
        assert world.min_northing(50) == 199500.0

    @pytest.mark.parametrize('text', ["1\n2\n3\n", "1\n0\n0\n-1\nabc\n5\n"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_world_file(text)

    def test_load(self, tmp_path):
        path = tmp_path / 'basemap.pgw'
        path.write_text(WORLD_TEXT)
        assert load_world_file(path) == parse_world_file(WORLD_TEXT)

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_world_file(tmp_path / 'missing.pgw')

    def test_placement(self):
        point = make_point_transform(TransOpts(bounds=Bounds(0, 0, 1000000, 1000000)), 1000)
        placed = image_placement(parse_world_file(WORLD_TEXT), 100, 50, point)
        assert placed.x == pytest.approx(100.0)
        assert placed.y == pytest.approx(800.0)
        assert placed.width == pytest.approx(1.0)
        assert placed.height == pytest.approx(0.5)
