from collections import Counter
from typing import Callable, Dict, Hashable, Iterable, Sequence, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")


def to_dict(pairs: Iterable[Tuple[K, V]]) -> Dict[K, V]:
    """[(k, v), ...] -> {k: v}; при повторе ключа побеждает последняя пара"""
    return dict(pairs)


def index_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, T]:
    """Индекс {key(x): x}"""
    return to_dict((key(item), item) for item in items)


def subarray_count(items: Sequence[T], sub: Sequence[T]) -> int:
    """
    Сколько раз sub встречается подряд идущим окном:
    subarray_count([1, 2, 1, 2, 1], [1, 2, 1]) -> 2 (окна перекрываются)
    """
    size = len(sub)
    if size == 0:
        raise ValueError("subarray must not be empty")
    target = list(sub)
    windows = (list(items[i : i + size]) for i in range(len(items) - size + 1))
    return sum(1 for window in windows if window == target)


def occurrences_count(items: Iterable[K]) -> Counter:
    """Частоты элементов; отсутствующий элемент даёт 0"""
    return Counter(items)
