"""
Rebuilding a parse tree from the flat span list.

The engine emits spans in post-order: a rule's span lands after the spans of
everything inside it. So a single left-to-right pass with a stack suffices.
Each new span swallows whatever is on top of the stack that it contains, and
then goes on the stack itself. At the end, what remains on the stack are the
outermost spans, left to right. For a well-formed parse that's just the one.

Zero-width spans (actions, empty matches) carry no text and would otherwise
nest ambiguously, so the tree leaves them out.

These trees exist for diagnostics. Nothing semantic depends on them.
"""

import sys
from dataclasses import dataclass

from .interface import name_of

BLUE, PLAIN = '\x1b[34m', '\x1b[m'

@dataclass(eq=False)
class Node:
	__slots__ = ('rule', 'begin', 'end', 'children')
	rule: object
	begin: int
	end: int
	children: list

	def contains(self, other:"Node") -> bool:
		return self.begin <= other.begin and other.end <= self.end

	def text(self, buffer:str) -> str: return buffer[self.begin:self.end]

	def __iter__(self): return iter(self.children)

	def __str__(self): return "%s %d %d"%(name_of(self.rule), self.begin, self.end)


def build_forest(spans) -> list[Node]:
	""" Returns the root nodes in left-to-right order. """
	stack = []
	for span in spans:
		if span.begin == span.end: continue
		node = Node(span.rule, span.begin, span.end, [])
		while stack and node.contains(stack[-1]):
			node.children.append(stack.pop())
		node.children.reverse() # They came off the stack right-to-left.
		stack.append(node)
	return stack

def build_tree(spans):
	""" The last (outermost, rightmost) root, or None if there are no non-empty spans. """
	forest = build_forest(spans)
	return forest[-1] if forest else None


def dump(node:Node, buffer:str, file=None, pretty:bool=False):
	""" One line per node, indented a space per level: rule name and the quoted text it covers. """
	if file is None: file = sys.stdout
	def visit(n:Node, depth:int):
		label = name_of(n.rule)
		if pretty: label = BLUE + label + PLAIN
		print(' '*depth + label, repr(n.text(buffer)), file=file)
		for child in n.children: visit(child, depth+1)
	if node is not None: visit(node, 0)

def dump_forest(forest, buffer:str, file=None, pretty:bool=False):
	for node in forest: dump(node, buffer, file, pretty)
