"""
Seat layout expansion.

Turns a declarative layout (legacy LEFT/RIGHT blocks, or flexible row groups)
into the concrete list of seats an event starts with. Nothing in here touches
the database; callers persist the result.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Union

from seatbook.models.seat import SeatSection, SeatStatus


@dataclass(frozen=True)
class RowGroup:
    row_count: int
    seats_per_row: int
    aisle_after_seat: int = 0  # 0 = no aisle


@dataclass(frozen=True)
class LegacyLayout:
    left_rows: int
    left_cols: int
    right_rows: int
    right_cols: int
    back_rows: int = 0
    back_cols: int = 0
    back_aisle_after_seat: int = 0


@dataclass(frozen=True)
class FlexibleLayout:
    row_groups: List[RowGroup]
    back_rows: int = 0
    back_cols: int = 0
    back_aisle_after_seat: int = 0


LayoutConfig = Union[LegacyLayout, FlexibleLayout]


@dataclass(frozen=True)
class SeatSpec:
    row: str
    number: int
    section: SeatSection
    status: SeatStatus = SeatStatus.AVAILABLE


@dataclass
class GeneratedLayout:
    seats: List[SeatSpec]
    total_seats: int
    # MAIN row label -> aisle position, for renderers
    row_aisles: Dict[str, int] = field(default_factory=dict)

    def count_by_section(self) -> Dict[SeatSection, int]:
        counts: Dict[SeatSection, int] = {}
        for seat in self.seats:
            counts[seat.section] = counts.get(seat.section, 0) + 1
        return counts


def row_label(index: int) -> str:
    """
    0-based row index to a spreadsheet-style label: 0 -> A, 25 -> Z, 26 -> AA.
    """
    if index < 0:
        raise ValueError(f"row index must be non-negative, got {index}")
    label = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = chr(ord("A") + rem) + label
    return label


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _block(section: SeatSection, rows: int, cols: int, first_row: int = 0) -> List[SeatSpec]:
    if rows == 0 or cols == 0:
        return []
    return [
        SeatSpec(row=row_label(first_row + r), number=n, section=section)
        for r in range(rows)
        for n in range(1, cols + 1)
    ]


def _validate(config: LayoutConfig) -> None:
    if isinstance(config, LegacyLayout):
        for name in ("left_rows", "left_cols", "right_rows", "right_cols"):
            _check_count(name, getattr(config, name))
    elif isinstance(config, FlexibleLayout):
        for i, group in enumerate(config.row_groups):
            _check_count(f"row_groups[{i}].row_count", group.row_count)
            _check_count(f"row_groups[{i}].seats_per_row", group.seats_per_row)
            _check_count(f"row_groups[{i}].aisle_after_seat", group.aisle_after_seat)
    else:
        raise TypeError(f"unsupported layout config: {type(config).__name__}")

    _check_count("back_rows", config.back_rows)
    _check_count("back_cols", config.back_cols)
    _check_count("back_aisle_after_seat", config.back_aisle_after_seat)


def generate_layout(config: LayoutConfig) -> GeneratedLayout:
    """Expand a layout config into seats, row-major, all AVAILABLE."""
    _validate(config)

    seats: List[SeatSpec] = []
    row_aisles: Dict[str, int] = {}

    if isinstance(config, LegacyLayout):
        seats += _block(SeatSection.LEFT, config.left_rows, config.left_cols)
        seats += _block(SeatSection.RIGHT, config.right_rows, config.right_cols)
    else:
        # Row letters run on across groups: group 2 starts where group 1 stopped
        next_row = 0
        for group in config.row_groups:
            for r in range(group.row_count):
                row_aisles[row_label(next_row + r)] = group.aisle_after_seat
            seats += _block(SeatSection.MAIN, group.row_count, group.seats_per_row, next_row)
            next_row += group.row_count

    seats += _block(SeatSection.RANG, config.back_rows, config.back_cols)

    return GeneratedLayout(seats=seats, total_seats=len(seats), row_aisles=row_aisles)


def count_seats(config: LayoutConfig) -> int:
    """Sum of rows x cols over every section, without building the seats."""
    _validate(config)
    if isinstance(config, LegacyLayout):
        main = config.left_rows * config.left_cols + config.right_rows * config.right_cols
    else:
        main = sum(g.row_count * g.seats_per_row for g in config.row_groups)
    return main + config.back_rows * config.back_cols
