import pytest

from src.domain.Models.color_range import ColorRange
from src.domain.Models.rectangle import Rectangle
from src.domain.Services.region_tracker import RegionTracker, TrackingPass
from src.test.fakes import ScriptedColorTracker, make_frame


def test_box_with_corner_inside_accepted_box_is_dropped():
    tracking_pass = TrackingPass()
    big = Rectangle(x=10, y=10, width=50, height=50)
    inside = Rectangle(x=20, y=20, width=5, height=5)
    on_edge = Rectangle(x=60, y=60, width=30, height=30)
    outside = Rectangle(x=61, y=10, width=10, height=10)

    assert tracking_pass.feed([big, inside, on_edge, outside])
    assert tracking_pass.rectangles == [big, outside]


def test_dedup_is_one_sided():
    # el box grande llega después: su esquina no cae en el chico, se acepta
    tracking_pass = TrackingPass()
    small = Rectangle(x=50, y=50, width=10, height=10)
    big = Rectangle(x=0, y=0, width=100, height=100)

    tracking_pass.feed([small, big])

    assert tracking_pass.rectangles == [small, big]


def test_no_accepted_corner_lies_in_an_earlier_rectangle():
    boxes = [Rectangle(x=x, y=y, width=15, height=15) for x in range(0, 60, 7) for y in range(0, 60, 11)]
    tracking_pass = TrackingPass()
    tracking_pass.feed(boxes)

    accepted = tracking_pass.rectangles
    for i, rect in enumerate(accepted):
        assert not any(prev.contains_point(rect.x, rect.y) for prev in accepted[:i])


def test_empty_scan_does_not_resolve():
    tracking_pass = TrackingPass()

    assert tracking_pass.feed([]) is False
    assert not tracking_pass.done
    assert tracking_pass.idle_scans == 1


def test_resolved_pass_cannot_be_fed_again():
    tracking_pass = TrackingPass()
    tracking_pass.feed([Rectangle(x=0, y=0, width=5, height=5)])

    with pytest.raises(RuntimeError):
        tracking_pass.feed([Rectangle(x=10, y=10, width=5, height=5)])


def test_tracker_waits_past_empty_scans():
    box = Rectangle(x=1, y=2, width=30, height=40)
    color_tracker = ScriptedColorTracker([[], [], [box], [Rectangle(x=90, y=90, width=5, height=5)]])
    frames = [make_frame() for _ in range(4)]

    tracking_pass = RegionTracker(color_tracker).run_pass(frames, ColorRange())

    assert tracking_pass.rectangles == [box]
    assert tracking_pass.frame is frames[2]
    assert color_tracker.calls == 3


def test_exhausted_source_gives_empty_list():
    color_tracker = ScriptedColorTracker([[], []])
    frames = [make_frame(), make_frame()]

    assert RegionTracker(color_tracker).detect_regions(frames, ColorRange()) == []


def test_max_idle_scans_stops_consuming_frames():
    color_tracker = ScriptedColorTracker([])

    def endless():
        while True:
            yield make_frame()

    assert RegionTracker(color_tracker, max_idle_scans=5).detect_regions(endless(), ColorRange()) == []
    assert color_tracker.calls == 5


def test_single_frame_is_accepted():
    box = Rectangle(x=1, y=2, width=30, height=40)
    color_tracker = ScriptedColorTracker([[box]])

    assert RegionTracker(color_tracker).detect_regions(make_frame(), ColorRange()) == [box]


def test_detection_view_feeds_tracker_but_pass_keeps_original_frame():
    color_tracker = ScriptedColorTracker([[Rectangle(x=0, y=0, width=5, height=5)]])
    original = make_frame(value=10)
    transformed = make_frame(value=200)

    tracking_pass = RegionTracker(color_tracker).run_pass(
        original, ColorRange(), detection_view=lambda f: transformed
    )

    assert len(color_tracker.seen) == 1
    assert color_tracker.seen[0] is transformed
    assert tracking_pass.frame is original
