"""Small numeric helpers."""


def merge_counts(a, b):
    merged = dict(a)
    for key, count in b.items():
        merged[key] = merged.get(key, 0) + count
    return merged


def clamp(value, low, high):
    return max(low, min(value, high))


def mean(values):
    return sum(values) / len(values)


class Vector:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def add(self, other):
        return Vector(self.x + other.x, self.y + other.y)
