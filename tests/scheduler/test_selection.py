from elevator_sim.models.request import Direction, Request
from elevator_sim.scheduler import selection

UP = Direction.UP
DOWN = Direction.DOWN


def test_on_the_way_bounded_by_target():
    requests = [Request(5, UP), Request(12, UP), Request(4, DOWN)]

    assert selection.on_the_way(requests, UP, 2, 10, is_at_target=False) == Request(5, UP)
    assert selection.on_the_way(requests, UP, 6, 10, is_at_target=False) is None


def test_on_the_way_unbounded_once_at_target():
    requests = [Request(12, UP), Request(15, UP)]

    assert selection.on_the_way(requests, UP, 10, 10, is_at_target=True) == Request(12, UP)
    assert selection.on_the_way(requests, UP, 10, 10, is_at_target=False) is None


def test_on_the_way_includes_current_floor():
    requests = [Request(3, DOWN), Request(1, DOWN)]

    assert selection.on_the_way(requests, DOWN, 3, 0, is_at_target=False) == Request(3, DOWN)


def test_on_the_way_ignores_requests_behind_the_car():
    requests = [Request(2, UP)]

    assert selection.on_the_way(requests, UP, 5, 9, is_at_target=True) is None


def test_on_the_way_down():
    requests = [Request(1, DOWN), Request(6, DOWN), Request(4, DOWN)]

    assert selection.on_the_way(requests, DOWN, 8, 3, is_at_target=False) == Request(6, DOWN)
    assert selection.on_the_way(requests, DOWN, 3, 3, is_at_target=True) == Request(1, DOWN)


def test_first_in_direction_starts_from_the_end():
    requests = [Request(4, UP), Request(2, UP), Request(3, DOWN), Request(9, DOWN)]

    assert selection.first_in_direction(requests, UP) == Request(2, UP)
    assert selection.first_in_direction(requests, DOWN) == Request(9, DOWN)
    assert selection.first_in_direction([Request(1, UP)], DOWN) is None


def test_best_opposite_picks_furthest_call_on_current_side():
    requests = [Request(7, DOWN), Request(12, DOWN), Request(2, DOWN)]

    assert selection.best_opposite(requests, UP, 5) == Request(12, DOWN)
    assert selection.best_opposite(requests, UP, 13) is None


def test_best_opposite_going_down():
    requests = [Request(1, UP), Request(4, UP), Request(8, UP)]

    assert selection.best_opposite(requests, DOWN, 5) == Request(1, UP)
    assert selection.best_opposite(requests, DOWN, 0) is None


def test_next_on_idle_prefers_up():
    assert selection.next_on_idle([Request(9, DOWN), Request(6, UP)]) == Request(6, UP)
    assert selection.next_on_idle([Request(9, DOWN), Request(3, DOWN)]) == Request(9, DOWN)
    assert selection.next_on_idle([]) is None


def test_next_while_moving_falls_back_to_turn_around_call():
    requests = [Request(12, DOWN), Request(3, UP)]

    assert selection.next_while_moving(requests, UP, 5, 12) == Request(12, DOWN)


def test_next_after_waiting_order():
    # Continue in the same direction first
    requests = [Request(9, UP), Request(2, DOWN), Request(1, UP)]
    assert selection.next_after_waiting(requests, UP, 5, 5) == Request(9, UP)

    # Then the sweep in the opposite direction
    requests = [Request(2, DOWN), Request(1, UP)]
    assert selection.next_after_waiting(requests, UP, 5, 5) == Request(2, DOWN)

    # Then whatever is left in the same direction
    requests = [Request(1, UP)]
    assert selection.next_after_waiting(requests, UP, 5, 5) == Request(1, UP)

    assert selection.next_after_waiting([], UP, 5, 5) is None


def test_selection_does_not_mutate_requests():
    requests = {Request(3, UP): None, Request(8, DOWN): None}

    selection.next_on_idle(requests)
    selection.next_while_moving(requests, UP, 0, 3)
    selection.next_after_waiting(requests, DOWN, 3, 3)

    assert list(requests) == [Request(3, UP), Request(8, DOWN)]
