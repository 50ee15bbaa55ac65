# rational3d/utils/registry.py
from typing import Generic, Iterator, List, NamedTuple, Optional, Tuple, TypeVar

from rational3d.domain.geometry.base import FiniteGeometry, Geometry

T = TypeVar('T', bound=Geometry)


class ShapeHandle(NamedTuple):
    """Reference to a slot in a ShapeArena; stale once the slot is reused."""
    index: int
    generation: int


class ShapeArena(Generic[T]):
    """
    Holds shapes for scene management and hands out generational handles.

    Removing a shape frees its slot and bumps the slot's generation, so
    handles to the removed shape stop resolving instead of silently pointing
    at whatever shape takes the slot next.
    """

    def __init__(self):
        self.slots: List[Optional[T]] = []
        self.generations: List[int] = []
        self.free: List[int] = []

    def insert(self, shape: T) -> ShapeHandle:
        """Store a shape and return its handle"""
        if self.free:
            index = self.free.pop()
            self.slots[index] = shape
        else:
            index = len(self.slots)
            self.slots.append(shape)
            self.generations.append(0)
        return ShapeHandle(index, self.generations[index])

    def _check(self, handle: ShapeHandle) -> int:
        index, generation = handle
        if (not 0 <= index < len(self.slots) or self.generations[index] != generation
                or self.slots[index] is None):
            raise KeyError(f"Stale or unknown shape handle {handle}")
        return index

    def get(self, handle: ShapeHandle) -> T:
        """Get the shape for a handle"""
        return self.slots[self._check(handle)]

    def remove(self, handle: ShapeHandle) -> T:
        """Remove a shape, invalidating its handle"""
        index = self._check(handle)
        shape = self.slots[index]
        self.slots[index] = None
        self.generations[index] += 1
        self.free.append(index)
        return shape

    def replace(self, handle: ShapeHandle, shape: T) -> T:
        """Put a new shape in a live slot; the handle stays valid. Returns the old shape."""
        index = self._check(handle)
        old = self.slots[index]
        self.slots[index] = shape
        return old

    def __contains__(self, handle: object) -> bool:
        if not isinstance(handle, ShapeHandle):
            return False
        try:
            self._check(handle)
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        return sum(1 for shape in self.slots if shape is not None)

    def __iter__(self) -> Iterator[Tuple[ShapeHandle, T]]:
        for index, shape in enumerate(self.slots):
            if shape is not None:
                yield ShapeHandle(index, self.generations[index]), shape

    def query(self, geometry: Geometry) -> List[Tuple[ShapeHandle, T]]:
        """
        Find every stored shape that intersects a geometry.

        Finite shapes whose envelope misses the geometry's envelope are skipped
        before the exact test runs.
        """
        envelope = geometry.envelope if isinstance(geometry, FiniteGeometry) else None
        hits = []
        for handle, shape in self:
            if (envelope is not None and isinstance(shape, FiniteGeometry)
                    and not envelope.intersects(shape.envelope)):
                continue
            if shape.intersects(geometry):
                hits.append((handle, shape))
        return hits
