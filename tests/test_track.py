"""Tests for tracks and track sets."""

from __future__ import annotations

import numpy as np
import pytest

from contracts import Feature
from exceptions import TrackError
from track import Track, TrackSet, TrackState


def make_track(track_id: int, frames, descriptor_value: float = 0.0) -> Track:
    track = Track(track_id)
    for frame in frames:
        track.append_state(
            TrackState(
                frame_id=frame,
                feature=Feature(x=float(frame), y=float(track_id)),
                descriptor=np.full(4, descriptor_value + track_id, dtype=np.float32),
            )
        )
    return track


def test_append_later_track_succeeds_across_gap() -> None:
    early = make_track(1, [1, 2, 3])
    late = make_track(2, [6, 7])

    assert early.append(late)
    assert early.frame_ids() == [1, 2, 3, 6, 7]
    assert early.track_id == 1


def test_append_overlapping_track_fails_without_change() -> None:
    early = make_track(1, [1, 2, 3])
    overlapping = make_track(2, [3, 4])

    assert not early.append(overlapping)
    assert early.frame_ids() == [1, 2, 3]
    assert overlapping.frame_ids() == [3, 4]


def test_append_earlier_track_fails() -> None:
    late = make_track(1, [5, 6])
    early = make_track(2, [1, 2])

    assert not late.append(early)


def test_append_to_empty_track() -> None:
    empty = Track(9)
    assert empty.append(make_track(2, [4, 5]))
    assert empty.first_frame == 4


def test_append_state_rejects_out_of_order_frame() -> None:
    track = make_track(1, [2, 3])
    with pytest.raises(TrackError):
        track.append_state(TrackState(frame_id=3, feature=Feature(0.0, 0.0)))


def test_empty_track_has_no_frame_range() -> None:
    with pytest.raises(TrackError):
        _ = Track(1).first_frame


def test_copy_is_independent() -> None:
    original = make_track(1, [1, 2])
    duplicate = original.copy()
    duplicate.append(make_track(2, [5]))

    assert original.frame_ids() == [1, 2]
    assert duplicate.frame_ids() == [1, 2, 5]


def test_state_at() -> None:
    track = make_track(1, [1, 3, 4])
    assert track.state_at(3).frame_id == 3
    assert track.state_at(2) is None
    assert track.state_at(10) is None


def test_track_set_rejects_duplicate_ids() -> None:
    with pytest.raises(TrackError):
        TrackSet([make_track(1, [1]), make_track(1, [2])])


def test_active_tracks_preserve_order() -> None:
    track_set = TrackSet([make_track(5, [1, 2]), make_track(3, [2, 3]), make_track(8, [2])])

    active = track_set.active_tracks(2)

    assert active.track_ids() == [5, 3, 8]
    assert track_set.active_tracks(3).track_ids() == [3]
    assert track_set.active_tracks(9).size() == 0


def test_frame_features_and_descriptors_are_aligned() -> None:
    track_set = TrackSet([make_track(5, [1, 2]), make_track(3, [2, 3])])

    features = track_set.frame_features(2)
    descriptors = track_set.frame_descriptors(2)

    assert [feature.y for feature in features] == [5.0, 3.0]
    assert descriptors.shape == (2, 4)
    assert descriptors[0, 0] == pytest.approx(5.0)
    assert descriptors[1, 0] == pytest.approx(3.0)


def test_frame_descriptors_empty_frame() -> None:
    track_set = TrackSet([make_track(1, [1])])
    assert track_set.frame_descriptors(7).shape[0] == 0


def test_frame_descriptors_missing_descriptor_raises() -> None:
    track = Track(1, [TrackState(frame_id=1, feature=Feature(0.0, 0.0))])
    with pytest.raises(TrackError):
        TrackSet([track]).frame_descriptors(1)


def test_percentage_tracked() -> None:
    track_set = TrackSet(
        [
            make_track(1, [1, 2]),
            make_track(2, [1, 2]),
            make_track(3, [1]),
            make_track(4, [1]),
            make_track(5, [2]),
        ]
    )

    assert track_set.percentage_tracked(1, 2) == pytest.approx(0.5)
    assert track_set.percentage_tracked(2, 1) == pytest.approx(2 / 3)
    assert track_set.percentage_tracked(7, 8) == 0.0


def test_without_builds_new_set() -> None:
    a, b, c = make_track(1, [1]), make_track(2, [1]), make_track(3, [1])
    track_set = TrackSet([a, b, c])

    reduced = track_set.without({2})

    assert reduced is not track_set
    assert reduced.track_ids() == [1, 3]
    assert track_set.track_ids() == [1, 2, 3]


def test_without_swaps_in_replacements() -> None:
    a, b = make_track(1, [1]), make_track(2, [3])
    extended = a.copy()
    extended.append(b)

    merged = TrackSet([a, b]).without({2}, replacements=[extended])

    assert merged.get(1) is extended
    assert merged.get(2) is None


def test_frame_range() -> None:
    track_set = TrackSet([make_track(1, [3, 4]), make_track(2, [2]), Track(3)])
    assert track_set.first_frame() == 2
    assert track_set.last_frame() == 4
    assert track_set.all_frame_ids() == [2, 3, 4]
    assert TrackSet().first_frame() is None
