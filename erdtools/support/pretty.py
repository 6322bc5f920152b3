""" Tables on the console, for looking at what the engine recorded. """
import sys

def print_grid(grid, file=None):
	"""
	Print rows of equal length as a right-aligned table with box-drawing rules.
	The first row is taken as a header, and a divider goes in every five rows after it.
	"""
	if file is None: file = sys.stdout
	assert len(set(map(len, grid))) == 1, "ragged grid"
	cells = [[str(cell) for cell in row] for row in grid]
	widths = [max(map(len, column)) for column in zip(*cells)]
	def rule(joint): return ('─'+joint+'─').join('─'*w for w in widths)
	print(rule('┬'), file=file)
	for r, row in enumerate(cells):
		if r % 5 == 1: print(rule('┼'), file=file)
		print(' │ '.join(cell.rjust(w) for cell, w in zip(row, widths)), file=file)
	print(rule('┴'), file=file)

def print_spans(spans, buffer:str, file=None):
	""" A span list as a table: index, rule, begin, end, and the text covered. Handy when a grammar misbehaves. """
	grid = [['#', 'rule', 'begin', 'end', 'text']]
	for i, span in enumerate(spans):
		grid.append([i, getattr(span.rule, 'name', None) or '?', span.begin, span.end, repr(buffer[span.begin:span.end])])
	print_grid(grid, file)
