"""
Photo block sizing and pagination.

Covers the reference heights, first-photo growth, the trailing shrinks and
the guarantee that no block ever crosses the bottom margin.
"""
import pytest

from services.reporting.engine import CancellationToken, layout
from services.reporting.errors import RenderCancelled
from services.reporting.layout_config import LayoutConfig
from services.reporting.models import ActivePhoto, LayoutCursor, active_photos
from services.reporting.photo_blocks import (
    has_trailing_horizontal_pair,
    is_vertical,
    min_block_height,
    plan_block_height,
    reference_heights,
)
from tests.factories import PhotoFactory, make_report
from utils.image_processing import ReportImage

LONG_TEXT = " ".join(["The facade shows cracking along the mortar joints."] * 12)


def _photo(entry, number=1):
    return ActivePhoto(number=number, entry=entry)


def _deep_cursor(config):
    """A cursor low enough that the first photo cannot grow."""
    return LayoutCursor(y=config.page_height - config.margin_v - 40)


class TestOrientation:
    def test_portrait_is_vertical(self, portrait_image):
        assert is_vertical(portrait_image) is True

    def test_landscape_is_horizontal(self, landscape_image):
        assert is_vertical(landscape_image) is False

    def test_square_is_horizontal(self, square_image):
        assert is_vertical(square_image) is False

    def test_undecodable_is_horizontal(self):
        assert is_vertical(ReportImage(b"not an image")) is False


def test_reference_heights_default_a4(config):
    # usable = 297 - 2*15 - 10 = 257
    assert config.usable_height == 257
    assert reference_heights(config) == (128, 257)


def test_reference_heights_are_floored():
    config = LayoutConfig(page_height=298)
    assert reference_heights(config) == (129, 258)


def test_trailing_horizontal_pair():
    assert has_trailing_horizontal_pair([True, False, False])
    assert not has_trailing_horizontal_pair([False, True])
    assert not has_trailing_horizontal_pair([False])
    assert not has_trailing_horizontal_pair([])


def test_active_photos_renumbered_in_order():
    photos = [
        PhotoFactory.create(title='a'),
        PhotoFactory.create(title='b', is_active=False),
        PhotoFactory.create(title='c'),
    ]
    active = active_photos(make_report(photos))

    assert [p.number for p in active] == [1, 2]
    assert [p.title for p in active] == ['a', 'c']


class TestPlanBlockHeight:
    def test_horizontal_reference_for_middle_photo(self, config):
        photo = _photo(PhotoFactory.landscape())
        height = plan_block_height(1, photo, False, 3, False, LayoutCursor(y=100), config)
        assert height == 128

    def test_vertical_reference_for_middle_photo(self, config):
        photo = _photo(PhotoFactory.portrait())
        height = plan_block_height(1, photo, True, 3, False, LayoutCursor(y=100), config)
        assert height == 257

    def test_first_photo_grows_into_available_space(self, config):
        photo = _photo(PhotoFactory.landscape())
        cursor = LayoutCursor(y=80)
        height = plan_block_height(0, photo, False, 3, False, cursor, config)
        # 297 - 80 - 15, capped by the vertical reference
        assert height == pytest.approx(202)

    def test_first_photo_growth_capped_by_vertical_reference(self, config):
        photo = _photo(PhotoFactory.landscape())
        height = plan_block_height(0, photo, False, 3, False, LayoutCursor(y=10), config)
        assert height == 257

    def test_single_photo_reserves_signature_space(self, config):
        photo = _photo(PhotoFactory.landscape())
        height = plan_block_height(0, photo, False, 1, False, LayoutCursor(y=80), config)
        assert height == pytest.approx(297 - 80 - 15 - 20)

    def test_first_photo_keeps_reference_when_space_is_too_small(self, config):
        photo = _photo(PhotoFactory.landscape())
        cursor = _deep_cursor(config)
        assert 40 < min_block_height(photo, config)
        height = plan_block_height(0, photo, False, 3, False, cursor, config)
        assert height == 128

    def test_last_vertical_shrinks(self, config):
        photo = _photo(PhotoFactory.portrait())
        height = plan_block_height(2, photo, True, 3, False, LayoutCursor(y=100), config)
        assert height == 247

    def test_trailing_horizontal_pair_shrinks_both(self, config):
        photo = _photo(PhotoFactory.landscape())
        cursor = LayoutCursor(y=100)
        assert plan_block_height(1, photo, False, 3, True, cursor, config) == 123
        assert plan_block_height(2, photo, False, 3, True, cursor, config) == 123
        assert plan_block_height(0, photo, False, 3, True, _deep_cursor(config), config) == 128

    def test_min_block_height_counts_description(self, config):
        bare = _photo(PhotoFactory.landscape())
        described = _photo(PhotoFactory.landscape(description=LONG_TEXT))
        assert min_block_height(described, config) > min_block_height(bare, config)


class TestScenarios:
    def test_single_vertical_photo(self, config, cursor_after_fields):
        report = make_report([PhotoFactory.portrait()])
        document = layout(report, config)

        assert document.page_count == 1
        (block,) = document.blocks
        available = config.page_height - cursor_after_fields.y - config.margin_v - 20
        assert block.top == pytest.approx(cursor_after_fields.y)
        assert block.height == pytest.approx(available - 10)
        assert block.is_vertical
        # One vertical photo fills the page; the signature is anchored
        assert document.signature_y == config.signature_anchor_y

    def test_two_horizontal_photos_shrink_and_break(self, config, cursor_after_fields):
        report = make_report([PhotoFactory.landscape(), PhotoFactory.landscape()])
        document = layout(report, config)

        first, second = document.blocks
        available = config.page_height - cursor_after_fields.y - config.margin_v
        assert first.height == pytest.approx(min(available, 257) - 5)
        assert second.height == 123
        assert first.page_index == 0
        assert second.page_index == 1
        assert second.top == config.margin_v
        # A lone horizontal photo on the last page: signature follows it
        assert document.signature_y == pytest.approx(second.bottom + config.section_spacing)

    def test_horizontal_pair_sharing_last_page_anchors_signature(self, config):
        photos = [PhotoFactory.portrait(), PhotoFactory.landscape(), PhotoFactory.landscape()]
        document = layout(make_report(photos), config)

        blocks = document.blocks
        assert [b.page_index for b in blocks] == [0, 1, 1]
        assert [b.height for b in blocks[1:]] == [123, 123]
        assert document.signature_y == config.signature_anchor_y

    def test_mixed_orientations_paginate(self, config):
        photos = []
        for i in range(5):
            factory = PhotoFactory.portrait if i % 2 else PhotoFactory.landscape
            photos.append(factory(description=LONG_TEXT))
        document = layout(make_report(photos), config)

        assert document.page_count > 1
        assert [b.number for b in document.blocks] == [1, 2, 3, 4, 5]

    def test_inactive_photos_are_not_laid_out(self, config):
        photos = [PhotoFactory.landscape(is_active=False), PhotoFactory.landscape()]
        document = layout(make_report(photos), config)

        assert [b.number for b in document.blocks] == [1]
        assert 'Photo 1: ' in document.pages[0].texts()

    def test_no_photos(self, config):
        document = layout(make_report([]), config)
        assert document.page_count == 1
        assert document.blocks == []
        assert document.signature_y is not None


@pytest.mark.parametrize("orientations", [
    "H", "V", "HH", "VV", "HVH", "VHH", "HHHHH", "VVVV", "HVHVHV",
])
def test_no_block_crosses_bottom_margin(config, orientations):
    photos = [
        (PhotoFactory.portrait if o == "V" else PhotoFactory.landscape)(description=LONG_TEXT)
        for o in orientations
    ]
    document = layout(make_report(photos), config)

    assert len(document.blocks) == len(orientations)
    for block in document.blocks:
        assert block.bottom <= config.bottom_limit + 1e-6
        if block.image_box is not None:
            assert block.image_box.bottom <= config.bottom_limit + 1e-6


def test_layout_is_deterministic(config):
    photos = [PhotoFactory.landscape(description=LONG_TEXT), PhotoFactory.portrait(), PhotoFactory.landscape()]
    report = make_report(photos)

    first = layout(report, config)
    second = layout(report, config)

    assert first.page_count == second.page_count
    assert first.blocks == second.blocks
    assert [p.ops for p in first.pages] == [p.ops for p in second.pages]


def test_report_input_not_mutated(config):
    photos = (PhotoFactory.landscape(is_active=False), PhotoFactory.landscape())
    report = make_report(photos)
    layout(report, config)
    assert report.photos == photos


def test_cancelled_render_raises(config):
    token = CancellationToken()
    token.cancel()
    report = make_report([PhotoFactory.landscape()])

    with pytest.raises(RenderCancelled):
        layout(report, config, cancel_token=token)


def test_uncancelled_token_is_harmless(config):
    token = CancellationToken()
    document = layout(make_report([PhotoFactory.landscape()]), config, cancel_token=token)
    assert not token.cancelled
    assert len(document.blocks) == 1
