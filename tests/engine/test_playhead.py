"""
Tests for playhead arithmetic (engine/playhead.py)

Pure functions only; no engine or world involved.
"""

import math

import pytest

from engine import playhead
from models.asset import AnimationAsset, Composition
from models.enums import PlaybackDirection
from models.playback import PlaybackLoopBehavior, PlaybackSettings

NORMAL = PlaybackDirection.NORMAL
REVERSE = PlaybackDirection.REVERSE


@pytest.fixture
def composition():
    return Composition(frame_start=0, frame_end=100, frame_rate=30)


class TestSeek:
    """Seeking keeps the loop the playhead is in."""

    def test_seek_preserves_loop_count(self):
        """Seeking to 10 on loop 2 lands on 210, not 10."""
        assert playhead.apply_seek(250, 10, 0, 100, NORMAL, 0) == 210

    def test_seek_on_first_loop(self):
        assert playhead.apply_seek(40, 75, 0, 100, NORMAL, 0) == 75

    def test_seek_is_idempotent(self):
        once = playhead.apply_seek(250, 10, 0, 100, NORMAL, 0)
        twice = playhead.apply_seek(once, 10, 0, 100, NORMAL, 0)
        assert once == twice

    def test_seek_counts_intermission_in_cycle(self):
        """Cycle is length + intermission: 250 with 25 intermission is loop 2 of 125."""
        assert playhead.apply_seek(250, 10, 0, 100, NORMAL, 25) == 260

    def test_seek_clamps_below_start(self):
        assert playhead.apply_seek(0, -50, 0, 100, NORMAL, 0) == 0

    def test_seek_clamps_to_last_frame(self):
        result = playhead.apply_seek(0, 500, 0, 100, NORMAL, 0)
        assert result < 100
        assert result == playhead.prev_frame(100)

    def test_seek_reverse_mirrors_target(self):
        assert playhead.apply_seek(0, 30, 0, 100, REVERSE, 0) == 70

    def test_seek_to_uses_settings(self, composition):
        """seek_to converts intermission seconds into frames."""
        settings = PlaybackSettings(intermission=1.0)  # 30 frames at 30 fps
        assert playhead.seek_to(150, 10, composition, settings) == 140


class TestIntermissionChange:
    """Changing intermission re-interprets the playhead without frame jumps."""

    def test_outside_intermission_shifts_by_delta(self):
        """150 with old 20 is loop 1, past the window: +30 per completed loop."""
        assert playhead.apply_intermission_change(150, 100, 20, 50) == 180

    def test_first_loop_unchanged(self):
        assert playhead.apply_intermission_change(40, 100, 20, 50) == 40

    def test_inside_window_reanchors_to_new_window_end(self):
        """110 sits in the [100, 120) window: moves to just before 1 * (100 + 50)."""
        result = playhead.apply_intermission_change(110, 100, 20, 50)
        assert result == playhead.prev_frame(150)

    def test_shrinking_never_goes_negative(self):
        assert playhead.apply_intermission_change(250, 100, 20, 0) >= 0

    def test_zero_cycle_keeps_playhead(self):
        """No frames and no intermission: nothing to divide by, nothing moves."""
        assert playhead.apply_intermission_change(5, 0, 0, 0) == 5
        assert playhead.apply_intermission_change(5, 0, 0, 20) == 5


class TestCalculatePlayhead:
    """Frame shown for a given playhead."""

    def test_looping_wraps(self, composition):
        assert playhead.calculate_playhead(250, composition, PlaybackSettings()) == 50

    def test_reverse_mirrors(self, composition):
        settings = PlaybackSettings(direction=REVERSE)
        assert playhead.calculate_playhead(30, composition, settings) == 70

    def test_do_not_loop_holds_last_frame(self, composition):
        settings = PlaybackSettings(looping=PlaybackLoopBehavior.do_not_loop())
        assert playhead.calculate_playhead(250, composition, settings) == playhead.prev_frame(100)

    def test_amount_allows_extra_loops(self, composition):
        settings = PlaybackSettings(looping=PlaybackLoopBehavior.amount(2))
        assert playhead.calculate_playhead(250, composition, settings) == 50
        assert playhead.calculate_playhead(350, composition, settings) == playhead.prev_frame(100)

    def test_holds_during_intermission(self, composition):
        settings = PlaybackSettings(intermission=1.0)  # 30 frames
        assert playhead.calculate_playhead(120, composition, settings) == playhead.prev_frame(100)
        assert playhead.calculate_playhead(135, composition, settings) == 5

    def test_segment_is_clamped(self, composition):
        settings = PlaybackSettings(segments=(20, 60))
        assert playhead.calculate_playhead(10, composition, settings) == 30
        assert playhead.calculate_playhead(50, composition, settings) == 30  # loop 1, 10 in

    def test_segment_outside_composition_is_clamped(self, composition):
        settings = PlaybackSettings(segments=(-50, 500))
        assert playhead.segment_bounds(composition, settings) == (0, 100)

    def test_inverted_segment_collapses(self, composition):
        settings = PlaybackSettings(segments=(60, 20))
        assert playhead.segment_bounds(composition, settings) == (60, 60)
        assert playhead.calculate_playhead(42, composition, settings) == 60


class TestLoopCompletion:
    def test_loops_completed(self):
        assert playhead.loops_completed(0, 100) == 0
        assert playhead.loops_completed(99.5, 100) == 0
        assert playhead.loops_completed(100, 100) == 1
        assert playhead.loops_completed(250, 100) == 2

    def test_zero_cycle_has_no_loops(self):
        assert playhead.loops_completed(50, 0) == 0

    def test_is_loop_complete(self, composition):
        settings = PlaybackSettings()
        assert not playhead.is_loop_complete(99, composition, settings)
        assert playhead.is_loop_complete(100, composition, settings)

    def test_is_loop_complete_waits_for_intermission(self, composition):
        settings = PlaybackSettings(intermission=1.0)
        assert not playhead.is_loop_complete(120, composition, settings)
        assert playhead.is_loop_complete(130, composition, settings)


class TestRemapOnTransition:
    """Playhead hand-off between states sharing an asset."""

    def test_normal_to_reverse(self):
        assert playhead.remap_on_transition(30, 30, 0, 100, NORMAL, REVERSE) == 70

    def test_reverse_to_normal_keeps_shown_frame(self):
        assert playhead.remap_on_transition(30, 70, 0, 100, REVERSE, NORMAL) == 70

    def test_same_direction_collapses_loops(self):
        assert playhead.remap_on_transition(250, 50, 0, 100, NORMAL, NORMAL) == 50

    def test_never_reaches_frame_end(self):
        result = playhead.remap_on_transition(0, 0, 0, 100, NORMAL, REVERSE)
        assert result < 100


class TestIntegrate:
    def test_integrate(self):
        assert playhead.integrate(10, 0.5, 2.0, 30) == 40

    def test_zero_speed_freezes(self):
        assert playhead.integrate(10, 1.0, 0.0, 30) == 10

    def test_prev_frame_is_strictly_below(self):
        assert playhead.prev_frame(100) < 100
        assert math.isclose(playhead.prev_frame(100), 100)


class TestCurrentFrame:
    def test_frame_based_asset(self):
        asset = AnimationAsset.lottie(0, 100, 30)
        asset.rendered_frames = 250
        assert playhead.current_frame(asset, PlaybackSettings()) == 50

    def test_asset_without_frames(self):
        assert playhead.current_frame(AnimationAsset.svg(), PlaybackSettings()) is None
