from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Hashable, Iterable, MutableMapping, TypeVar

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")
E = TypeVar("E")


@dataclass(slots=True)
class ReconcileResult(Generic[K]):
    created: list[K] = field(default_factory=list)
    updated: list[K] = field(default_factory=list)
    removed: list[K] = field(default_factory=list)

    @property
    def changed_membership(self) -> bool:
        return bool(self.created or self.removed)


def reconcile(
    current: MutableMapping[K, E],
    items: Iterable[T],
    *,
    key: Callable[[T], K],
    enter: Callable[[T], E],
    update: Callable[[E, T], None],
    remove: Callable[[E], None] | None = None,
) -> ReconcileResult[K]:
    """Keyed join of `items` against the live elements in `current`.

    Retained keys keep their element and get `update`; new keys get a fresh
    element from `enter` (followed by `update`); keys missing from `items`
    are passed to `remove` and dropped. `current` is rewritten in item order.
    If several items share a key only the first is used.
    """

    result: ReconcileResult[K] = ReconcileResult()
    ordered: dict[K, E] = {}

    for item in items:
        k = key(item)
        if k in ordered:
            continue
        element = current.get(k)
        if element is None:
            element = enter(item)
            result.created.append(k)
        else:
            result.updated.append(k)
        update(element, item)
        ordered[k] = element

    for k, element in current.items():
        if k in ordered:
            continue
        if remove is not None:
            remove(element)
        result.removed.append(k)

    current.clear()
    current.update(ordered)
    return result
