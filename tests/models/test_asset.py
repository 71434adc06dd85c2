"""
Tests for asset models (models/asset.py)
"""

import pytest

from models.asset import AnimationAsset, AssetStore, Composition


class TestComposition:
    def test_length(self):
        assert Composition(10, 70, 30).length == 60

    @pytest.mark.parametrize("start, end", [(10, 10), (50, 20)])
    def test_empty_or_inverted_range_rejected(self, start, end):
        with pytest.raises(ValueError, match="frame_end"):
            Composition(start, end, 30)

    def test_frame_rate_must_be_positive(self):
        with pytest.raises(ValueError, match="frame_rate"):
            Composition(0, 10, 0)

    def test_lottie_helper_validates_range(self):
        with pytest.raises(ValueError):
            AnimationAsset.lottie(10, 10, 30)


class TestAnimationAsset:
    def test_svg_has_no_frames(self):
        assert not AnimationAsset.svg().has_frames

    def test_first_frame_marked_once(self):
        asset = AnimationAsset.lottie(0, 100, 30)
        assert asset.mark_rendered(1.0)
        assert not asset.mark_rendered(2.0)
        assert asset.first_frame == 1.0

        asset.reset_first_frame()
        assert asset.first_frame is None


class TestAssetStore:
    def test_reserved_handle_is_not_ready(self):
        store = AssetStore()
        handle = store.reserve("late")
        assert handle in store
        assert store.get(handle) is None
        assert not store.is_ready(handle)

        store.load(handle, AnimationAsset.svg())
        assert store.is_ready(handle)
        assert store.handle_for("late") == handle

    def test_load_unknown_handle(self):
        with pytest.raises(KeyError):
            AssetStore().load(7, AnimationAsset.svg())
