from collections.abc import Iterable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class FrozenList(list, Generic[T]):
    """
    `list` that compares equal to a plain `list` but doesn't allow changes after creation
    """

    def __init__(self, items: Iterable[T] = ()):
        super().__init__(items)

    def _raise_frozen(self, *_args: Any, **_kwargs: Any):
        raise TypeError("FrozenList doesn't allow updates.")

    append = extend = insert = remove = pop = clear = sort = reverse = _raise_frozen  # type: ignore
    __setitem__ = __delitem__ = __iadd__ = __imul__ = _raise_frozen  # type: ignore

    def __hash__(self) -> int:  # type: ignore
        return hash(tuple(self))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (FrozenList, (list(self),))
