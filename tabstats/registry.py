from typing import Callable, List, Optional

import numpy as np

REDUCERS = {}

def register(*names):
    def decorator(fn):
        for name in names:
            REDUCERS[name] = fn
        return fn
    return decorator

def get_reducer(name) -> Optional[Callable]:
    return REDUCERS.get(name)

def list_reducers():
    return list(REDUCERS.keys())

# ----------------------
# Reducers
# ----------------------
# Each takes the parsed numeric values of one group and returns a float,
# or None when the result is undefined for an empty group.

@register("sum")
def reduce_sum(values: List[float]) -> float:
    return float(np.sum(values)) if values else 0.0

@register("avg", "mean")
def reduce_mean(values: List[float]) -> Optional[float]:
    return float(np.mean(values)) if values else None

@register("count")
def reduce_count(values: List[float]) -> float:
    return float(len(values))

@register("min")
def reduce_min(values: List[float]) -> Optional[float]:
    return float(np.min(values)) if values else None

@register("max")
def reduce_max(values: List[float]) -> Optional[float]:
    return float(np.max(values)) if values else None
