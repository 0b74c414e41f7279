import pytest

from seatbook.models.seat import SeatSection, SeatStatus
from seatbook.services.layout import (
    FlexibleLayout,
    LegacyLayout,
    RowGroup,
    count_seats,
    generate_layout,
    row_label,
)


def _rows(seats, section):
    return sorted({s.row for s in seats if s.section == section})


def test_legacy_two_blocks():
    layout = generate_layout(
        LegacyLayout(left_rows=6, left_cols=10, right_rows=6, right_cols=10, back_rows=0, back_cols=0)
    )

    assert layout.total_seats == 120
    assert len(layout.seats) == 120
    assert layout.count_by_section() == {SeatSection.LEFT: 60, SeatSection.RIGHT: 60}
    assert _rows(layout.seats, SeatSection.LEFT) == list("ABCDEF")
    assert _rows(layout.seats, SeatSection.RIGHT) == list("ABCDEF")
    assert all(s.status == SeatStatus.AVAILABLE for s in layout.seats)


def test_flexible_single_group_keeps_numbers_contiguous_across_aisle():
    layout = generate_layout(FlexibleLayout(row_groups=[RowGroup(6, 20, 10)]))

    assert layout.total_seats == 120
    assert layout.count_by_section() == {SeatSection.MAIN: 120}
    assert _rows(layout.seats, SeatSection.MAIN) == list("ABCDEF")
    for row in "ABCDEF":
        numbers = [s.number for s in layout.seats if s.row == row]
        assert numbers == list(range(1, 21))
    assert layout.row_aisles == {row: 10 for row in "ABCDEF"}


def test_flexible_groups_continue_row_letters():
    layout = generate_layout(
        FlexibleLayout(row_groups=[RowGroup(2, 5, 0), RowGroup(3, 8, 4)])
    )

    assert layout.total_seats == 2 * 5 + 3 * 8
    per_row = {}
    for seat in layout.seats:
        per_row[seat.row] = per_row.get(seat.row, 0) + 1
    assert per_row == {"A": 5, "B": 5, "C": 8, "D": 8, "E": 8}
    assert layout.row_aisles == {"A": 0, "B": 0, "C": 4, "D": 4, "E": 4}


def test_upper_tier_is_its_own_section_starting_at_a():
    layout = generate_layout(
        FlexibleLayout(row_groups=[RowGroup(3, 4)], back_rows=2, back_cols=3, back_aisle_after_seat=2)
    )

    assert layout.count_by_section() == {SeatSection.MAIN: 12, SeatSection.RANG: 6}
    assert _rows(layout.seats, SeatSection.RANG) == ["A", "B"]
    # Upper tier aisle is not part of the MAIN row map
    assert set(layout.row_aisles) == {"A", "B", "C"}


def test_zero_rows_or_columns_yield_empty_sections():
    layout = generate_layout(
        LegacyLayout(left_rows=0, left_cols=10, right_rows=4, right_cols=0, back_rows=1, back_cols=2)
    )

    assert layout.total_seats == 2
    assert layout.count_by_section() == {SeatSection.RANG: 2}


def test_empty_layout_is_valid_for_the_generator():
    layout = generate_layout(LegacyLayout(0, 0, 0, 0))
    assert layout.seats == []
    assert layout.total_seats == 0


@pytest.mark.parametrize(
    "config",
    [
        LegacyLayout(left_rows=-1, left_cols=3, right_rows=0, right_cols=0),
        FlexibleLayout(row_groups=[RowGroup(2, -5)]),
        FlexibleLayout(row_groups=[RowGroup(2, 5, -1)]),
        LegacyLayout(1, 1, 1, 1, back_rows=-2),
    ],
)
def test_negative_counts_are_rejected(config):
    with pytest.raises(ValueError):
        generate_layout(config)


@pytest.mark.parametrize(
    "index, label",
    [(0, "A"), (5, "F"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
)
def test_row_label(index, label):
    assert row_label(index) == label


def test_more_than_26_rows_get_distinct_labels():
    layout = generate_layout(FlexibleLayout(row_groups=[RowGroup(20, 1), RowGroup(10, 1)]))

    labels = [s.row for s in layout.seats]
    assert len(set(labels)) == 30
    assert labels[25:] == ["Z", "AA", "AB", "AC", "AD"]


def test_generation_is_deterministic():
    config = LegacyLayout(left_rows=3, left_cols=4, right_rows=2, right_cols=5, back_rows=1, back_cols=6)

    first = generate_layout(config)
    second = generate_layout(config)

    assert first.seats == second.seats
    assert first.total_seats == second.total_seats == count_seats(config)


def test_seats_are_row_major():
    layout = generate_layout(LegacyLayout(left_rows=2, left_cols=2, right_rows=0, right_cols=0))
    assert [(s.row, s.number) for s in layout.seats] == [("A", 1), ("A", 2), ("B", 1), ("B", 2)]
