"""
The span recorder is the parse engine's only output channel while it runs.

Every successful match of interest (named rule, capture, or action) gets one
entry. Entries go in strictly at the end. Backtracking never edits an entry;
it merely forgets everything past a remembered count, so a failed attempt
leaves no residue once the count is restored. The slot list grows by doubling
and gets trimmed to the exact number of live entries when the parse finishes.

Entries appear in post-order: a rule's span is added when the rule completes,
hence after the spans of everything it contains. The tree builder relies on that.
"""

from .interface import Span

INITIAL_CAPACITY = 64

class SpanRecorder:
	def __init__(self, capacity:int=INITIAL_CAPACITY):
		assert capacity > 0
		self.__slots = [None] * capacity
		self.__count = 0

	def __len__(self): return self.__count

	def capacity(self): return len(self.__slots)

	def add(self, rule, begin:int, end:int) -> int:
		""" Append a span; return its index. """
		assert 0 <= begin <= end, (begin, end)
		index = self.__count
		if index >= len(self.__slots):
			self.__slots.extend([None] * max(1, len(self.__slots)))
		self.__slots[index] = Span(rule, begin, end)
		self.__count = index + 1
		return index

	def truncate(self, count:int):
		""" Forget every span from index `count` onward. Stale slots get overwritten later. """
		assert 0 <= count <= self.__count, (count, self.__count)
		self.__count = count

	def __getitem__(self, index):
		if not 0 <= index < self.__count: raise IndexError(index)
		return self.__slots[index]

	def __iter__(self):
		return iter(self.__slots[:self.__count])

	def finish(self) -> tuple:
		""" Trim the slot list to the live entries and return them. """
		del self.__slots[self.__count:]
		return tuple(self.__slots)
