import pytest

from boxworld.core import (
    BoundingBox,
    Color,
    Vector3,
    box_around,
    lerp,
)


def test_add_then_subtract_round_trips():
    a = Vector3(1.5, -2.0, 3.25)
    b = Vector3(4.0, 0.5, -1.0)
    assert (a + b) - b == a


def test_scale_by_two_equals_self_addition():
    a = Vector3(1.0, -3.0, 2.5)
    assert a.scale(2) == a + a


def test_length_of_three_four_vector():
    assert Vector3(3.0, 4.0, 0.0).length() == pytest.approx(5.0)


def test_minimum_and_maximum_pick_components():
    a = Vector3(1.0, 5.0, -2.0)
    b = Vector3(3.0, 2.0, -4.0)
    assert a.minimum(b) == Vector3(1.0, 2.0, -4.0)
    assert a.maximum(b) == Vector3(3.0, 5.0, -2.0)


def test_box_around_is_centred_with_given_size():
    center = Vector3(2.0, -1.0, 0.5)
    size = Vector3(1.0, 2.0, 4.0)
    box = box_around(center, size)
    assert (box.min + box.max).scale(0.5) == center
    assert box.max - box.min == size


def test_intersects_overlapping_and_touching_boxes():
    a = box_around(Vector3(0, 0, 0), Vector3(2, 2, 2))
    b = box_around(Vector3(1, 0, 0), Vector3(2, 2, 2))
    touching = box_around(Vector3(2, 0, 0), Vector3(2, 2, 2))
    assert a.intersects(b)
    assert a.intersects(touching)


def test_intersects_rejects_separated_boxes():
    a = box_around(Vector3(0, 0, 0), Vector3(2, 2, 2))
    for offset in (Vector3(3, 0, 0), Vector3(0, 3, 0), Vector3(0, 0, -3)):
        assert not a.intersects(a.translated(offset))


def test_translated_moves_both_corners():
    box = BoundingBox(Vector3(0, 0, 0), Vector3(1, 1, 1))
    offset = Vector3(2, 3, 4)
    moved = box.translated(offset)
    assert moved.min == box.min + offset
    assert moved.max == box.max + offset


def test_union_encloses_both():
    a = BoundingBox(Vector3(0, 0, 0), Vector3(1, 1, 1))
    b = BoundingBox(Vector3(-1, 0.5, 0.5), Vector3(0.5, 3, 2))
    u = a.union(b)
    assert u.min == Vector3(-1, 0, 0)
    assert u.max == Vector3(1, 3, 2)


def test_lerp_endpoints_and_midpoint():
    assert lerp(2.0, 7.0, 0.0) == 2.0
    assert lerp(2.0, 7.0, 1.0) == 7.0
    assert lerp(0.0, 10.0, 0.5) == pytest.approx(5.0)


def test_color_default_alpha_is_opaque():
    assert Color(1, 2, 3).a == 255