"""
Playhead arithmetic

The playhead (rendered_frames) is a single scalar counted in frames since the
start of the timeline. It is NOT wrapped into one loop: the number of loops
completed so far is derived from it on demand, so it survives speed,
intermission and seek changes without separate bookkeeping.

Every function here is pure. Intermission arguments are in frames (seconds
times the composition frame rate).
"""

import math
from typing import Optional, Tuple

from models.asset import AnimationAsset, Composition
from models.enums import PlaybackDirection
from models.playback import PlaybackSettings


def prev_frame(value: float) -> float:
    """Largest representable value strictly below value (exclusive end bound)"""
    return math.nextafter(value, -math.inf)


def integrate(rendered_frames: float, dt: float, speed: float, frame_rate: float) -> float:
    """Advance the playhead by dt seconds of playback"""
    return rendered_frames + dt * speed * frame_rate


def segment_bounds(composition: Composition, settings: PlaybackSettings) -> Tuple[float, float]:
    """Effective [start, end) of the playback segment, clamped to the composition"""
    seg_start, seg_end = settings.segments
    start = max(seg_start, composition.frame_start)
    end = min(seg_end, composition.frame_end)
    if end < start:
        # Inverted or disjoint segment: collapse onto its start
        end = start
    return start, end


def loops_completed(rendered_frames: float, cycle_length: float) -> int:
    """Whole loops (animation + intermission) elapsed at this playhead"""
    if cycle_length <= 0 or rendered_frames <= 0:
        return 0
    return math.floor(rendered_frames / cycle_length)


# ============================================================
# Pending input arithmetic
# ============================================================

def apply_intermission_change(
    rendered_frames: float,
    length: float,
    old_intermission: float,
    new_intermission: float,
) -> float:
    """
    Reinterpret the playhead after the intermission changes.

    Keeps the loop the player is in and never jumps frames. If the playhead
    sits inside an intermission window it is re-anchored to the end of the
    new one; otherwise each completed loop contributes the intermission delta.
    """
    if length + old_intermission <= 0:
        completed = 0
    elif rendered_frames > length + old_intermission:
        completed = math.floor(rendered_frames / (length + old_intermission))
    elif rendered_frames > length:
        completed = 1
    else:
        completed = 0

    in_intermission = (
        rendered_frames > length
        and rendered_frames >= completed * length
        and rendered_frames < completed * length + old_intermission
    )
    if in_intermission:
        return prev_frame(completed * (length + new_intermission))

    dt_frames = (new_intermission - old_intermission) * completed
    return max(0.0, rendered_frames + dt_frames)


def apply_seek(
    rendered_frames: float,
    frame: float,
    start: float,
    end: float,
    direction: PlaybackDirection,
    intermission: float,
) -> float:
    """
    Move the playhead to frame within the current loop.

    The loop count is preserved: seeking to 10 while on loop 2 of a
    100-frame animation lands on 210, not 10.
    """
    bounded = min(max(frame, start), prev_frame(end))
    if direction == PlaybackDirection.REVERSE:
        target = end - bounded
    else:
        target = bounded

    cycle = end - start + intermission
    completed = loops_completed(rendered_frames, cycle)
    return completed * cycle + target


def seek_to(rendered_frames: float, frame: float, composition: Composition,
            settings: PlaybackSettings) -> float:
    start, end = segment_bounds(composition, settings)
    return apply_seek(
        rendered_frames,
        frame,
        start,
        end,
        settings.direction,
        settings.intermission_frames(composition.frame_rate),
    )


# ============================================================
# Playhead position
# ============================================================

def calculate_playhead(rendered_frames: float, composition: Composition,
                       settings: PlaybackSettings) -> float:
    """
    Composition frame currently shown for this playhead.

    Segment-clamped, held on the last frame during intermissions and after
    the final loop, mirrored about the segment end when playing in reverse.
    """
    start, end = segment_bounds(composition, settings)
    length = end - start
    if length <= 0:
        return start

    cycle = length + settings.intermission_frames(composition.frame_rate)
    completed = loops_completed(rendered_frames, cycle)
    position = max(0.0, rendered_frames - completed * cycle)

    if completed > settings.looping.extra_loops:
        position = length
    position = min(position, length)

    if settings.direction == PlaybackDirection.REVERSE:
        return max(start, min(end - position, prev_frame(end)))
    return min(start + position, prev_frame(end))


def is_loop_complete(rendered_frames: float, composition: Composition,
                     settings: PlaybackSettings) -> bool:
    """Playhead reached the end of the composition plus intermission"""
    intermission = settings.intermission_frames(composition.frame_rate)
    return rendered_frames >= composition.length + intermission


# ============================================================
# State hand-off
# ============================================================

def remap_on_transition(
    rendered_frames: float,
    playhead: float,
    frame_start: float,
    frame_end: float,
    current_direction: PlaybackDirection,
    target_direction: PlaybackDirection,
) -> float:
    """
    Playhead for the incoming state when it keeps the same asset.

    playhead is the frame shown under the outgoing settings. Accumulated
    loops are collapsed since the incoming state counts its loops afresh.
    """
    last_frame = prev_frame(frame_end)
    if current_direction == PlaybackDirection.NORMAL and target_direction == PlaybackDirection.REVERSE:
        return min(frame_end - playhead, last_frame)
    if current_direction == PlaybackDirection.REVERSE and target_direction == PlaybackDirection.NORMAL:
        return playhead

    length = frame_end - frame_start
    if length <= 0:
        return 0.0
    return min(rendered_frames % length, last_frame)


def current_frame(asset: AnimationAsset, settings: PlaybackSettings) -> Optional[float]:
    """Frame a renderer should draw for this asset, or None if it has no frames"""
    if not asset.has_frames:
        return None
    return calculate_playhead(asset.rendered_frames, asset.composition, settings)
