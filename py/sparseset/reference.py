"""
A deliberately naive model of SparseSet, backed by a python list. It follows the same ordering
rules (append on insert, swap-with-last on unordered removal, shift on ordered removal), so its
contents can be compared element-by-element against a SparseSet after any sequence of operations.

It does not validate its arguments; callers are expected to pass values already accepted by
SparseSet.
"""
from typing import List


class ReferenceSparseSet:
    def __init__(self, length: int):
        self.length = length
        self.elements: List[int] = []

    def count(self) -> int:
        return len(self.elements)

    def contains(self, x: int) -> bool:
        return x in self.elements

    def insert(self, x: int) -> bool:
        if x in self.elements:
            return False
        if x > self.length:
            raise IndexError(x)
        self.elements.append(x)
        return True

    def unordered_remove(self, x: int) -> bool:
        if x not in self.elements:
            return False
        i = self.elements.index(x)
        self.elements[i] = self.elements[-1]
        self.elements.pop()
        return True

    def ordered_remove(self, x: int) -> bool:
        if x not in self.elements:
            return False
        self.elements.remove(x)
        return True

    def clear(self):
        self.elements.clear()

    def to_list(self) -> List[int]:
        return list(self.elements)
