"""
Axis aligned bounding boxes and their area arithmetic.

Image coordinates are assumed to increase left to right and top to bottom.
A box is normalized on construction so that left <= right and top <= bottom
and it can not be modified afterwards.

This module provides:
- BoundingBox, generic over the coordinate type
- area(box)
- intersection(a, b)
- box_union_area(a, b)
"""

from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


class BoundingBox(Generic[T]):
    """
    Rectangle on an image defined by its left, right, top and bottom coordinates.

    Parameters
    column_1 column_2 the numbers defining the box columns. The smaller one
        becomes left and the larger one becomes right.
    row_1 row_2 the numbers defining the box rows. The smaller one becomes
        top and the larger one becomes bottom.

    All coordinates default to 0 which gives the zero box at the origin.
    """

    __slots__ = ("_left", "_right", "_top", "_bottom")

    def __init__(self, column_1: T = 0, column_2: T = 0, row_1: T = 0, row_2: T = 0):
        object.__setattr__(self, "_left", min(column_1, column_2))
        object.__setattr__(self, "_right", max(column_1, column_2))
        object.__setattr__(self, "_top", min(row_1, row_2))
        object.__setattr__(self, "_bottom", max(row_1, row_2))

    @classmethod
    def from_xyxy(cls, bbox: Sequence[T]) -> "BoundingBox[T]":
        """
        Build a box from an annotation style [xmin ymin xmax ymax] sequence.

        Inverted coordinates are swapped the same way the constructor does.
        """
        x0, y0, x1, y1 = bbox
        return cls(x0, x1, y0, y1)

    @property
    def left(self) -> T:
        return self._left

    @property
    def right(self) -> T:
        return self._right

    @property
    def top(self) -> T:
        return self._top

    @property
    def bottom(self) -> T:
        return self._bottom

    def as_xyxy(self) -> List[T]:
        """Return the box as [left top right bottom]."""
        return [self._left, self._top, self._right, self._bottom]

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._left, self._right, self._top, self._bottom))

    def __eq__(self, other):
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return (
            self._left == other._left
            and self._right == other._right
            and self._top == other._top
            and self._bottom == other._bottom
        )

    def __hash__(self):
        return hash((self._left, self._right, self._top, self._bottom))

    def __repr__(self):
        return f"BoundingBox(left={self._left!r}, right={self._right!r}, top={self._top!r}, bottom={self._bottom!r})"


# boxes on the pixel grid
IntegerBox = BoundingBox[int]


def area(box: BoundingBox[T]) -> T:
    """
    Compute the area of a box.

    The absolute value of each side is used so the result never depends on
    the sign of the coordinates.
    """
    return abs(box.left - box.right) * abs(box.top - box.bottom)


def intersection(a: BoundingBox[T], b: BoundingBox[T]) -> BoundingBox[T]:
    """
    Compute the box covered by both a and b.

    Returns
    The overlapping box. Boxes touching along an edge give a zero area box on
    that edge. Disjoint boxes give the zero box BoundingBox() which can not be
    told apart from a real zero area overlap at the origin.
    """
    if a.bottom < b.top or b.bottom < a.top or a.right < b.left or b.right < a.left:
        return BoundingBox()

    return BoundingBox(
        max(a.left, b.left),
        min(a.right, b.right),
        max(a.top, b.top),
        min(a.bottom, b.bottom),
    )


def box_union_area(a: BoundingBox[T], b: BoundingBox[T]) -> T:
    """
    Compute the area covered by a or b.

    The union of two rectangles is generally not a rectangle so only its
    area is returned.
    """
    return area(a) + area(b) - area(intersection(a, b))
