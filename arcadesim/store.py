"""Immutable entity collections and the per-tick world.

EntityStore never changes in place: add, map and filter all return a new
store. Order is arrival order, which is also draw order and the iteration
order used by collision resolution.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union, overload

from arcadesim.entities import Entity


class EntityStore:
    """Ordered, immutable collection of entities."""

    __slots__ = ('_entities',)

    def __init__(self, entities: Iterable[Entity] = ()):
        self._entities: Tuple[Entity, ...] = tuple(entities)

    def add(self, entity: Entity) -> 'EntityStore':
        """Return a new store with entity appended."""
        return EntityStore(self._entities + (entity,))

    def extend(self, entities: Iterable[Entity]) -> 'EntityStore':
        """Return a new store with entities appended in order."""
        extra = tuple(entities)
        if not extra:
            return self
        return EntityStore(self._entities + extra)

    def map(self, transform: Callable[[Entity], Entity]) -> 'EntityStore':
        """Return a new store with every entity transformed.

        The transform only ever sees the entity it is given, so the result
        does not depend on iteration order.
        """
        return EntityStore(transform(e) for e in self._entities)

    def filter(self, predicate: Callable[[Entity], bool]) -> 'EntityStore':
        """Return a new store holding the entities the predicate keeps."""
        return EntityStore(e for e in self._entities if predicate(e))

    def exclude(self, indices: Iterable[int]) -> 'EntityStore':
        """Return a new store without the entities at the given positions."""
        dropped = frozenset(indices)
        if not dropped:
            return self
        return EntityStore(e for i, e in enumerate(self._entities) if i not in dropped)

    def count(self, kind: Optional[str] = None) -> int:
        """Number of entities, optionally only of one kind."""
        if kind is None:
            return len(self._entities)
        return sum(1 for e in self._entities if e.kind == kind)

    @property
    def entities(self) -> Tuple[Entity, ...]:
        """Entities as a tuple."""
        return self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __bool__(self) -> bool:
        return bool(self._entities)

    @overload
    def __getitem__(self, index: int) -> Entity: ...

    @overload
    def __getitem__(self, index: slice) -> 'EntityStore': ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Entity, 'EntityStore']:
        if isinstance(index, slice):
            return EntityStore(self._entities[index])
        return self._entities[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityStore):
            return NotImplemented
        return self._entities == other._entities

    def __hash__(self) -> int:
        return hash(self._entities)

    def __repr__(self) -> str:
        return f"EntityStore({len(self._entities)} entities)"


@dataclass(frozen=True)
class World:
    """Everything the simulation moves, as one immutable value.

    Attributes:
        player: The single player entity
        projectiles: Player-fired projectiles
        targets: Obstacles and enemies in spawn order
    """

    player: Entity
    projectiles: EntityStore = field(default_factory=EntityStore)
    targets: EntityStore = field(default_factory=EntityStore)

    def with_player(self, player: Entity) -> 'World':
        """Return a copy with the player replaced."""
        return replace(self, player=player)

    def with_projectiles(self, projectiles: EntityStore) -> 'World':
        """Return a copy with the projectile store replaced."""
        return replace(self, projectiles=projectiles)

    def with_targets(self, targets: EntityStore) -> 'World':
        """Return a copy with the target store replaced."""
        return replace(self, targets=targets)
