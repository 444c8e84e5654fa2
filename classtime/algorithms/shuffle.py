import random
from typing import List, Optional, TypeVar

T = TypeVar("T")


def fisher_yates(items: List[T], rng: Optional[random.Random] = None) -> List[T]:
    """Shuffle ``items`` in place (unbiased Fisher-Yates) and return it."""
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items
