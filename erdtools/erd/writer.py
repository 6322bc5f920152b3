"""
Write a Diagram back out in the description language.

Parsing the output yields an equivalent Diagram: same tables, columns,
relations and attributes, in the same order. Some models have no such text,
because names and keys must be bare words and values cannot contain quotes or
line breaks. Those raise ValueError rather than produce something that would
read back differently.
"""

from .grammar import NAME_EXCLUDES, QUOTED_EXCLUDES
from .model import Diagram

def is_bare(text:str) -> bool:
	return bool(text) and not any(c in NAME_EXCLUDES for c in text)

def bare(text:str, what:str) -> str:
	if not is_bare(text): raise ValueError("Cannot write %s %r as a bare word."%(what, text))
	return text

def value(text:str) -> str:
	if is_bare(text): return text
	if text and not any(c in QUOTED_EXCLUDES for c in text): return '"%s"'%text
	raise ValueError("Cannot write attribute value %r."%text)

def block(attributes:dict) -> str:
	""" The attribute block, with a leading space, or nothing at all if there are no attributes. """
	if not attributes: return ''
	return ' {%s}'%', '.join('%s: %s'%(bare(k, 'attribute key'), value(v)) for k, v in attributes.items())

def to_source(diagram:Diagram) -> str:
	lines = []
	if diagram.title.attributes:
		lines.append('title' + block(diagram.title.attributes))
		lines.append('')
	for table in diagram.tables.values():
		lines.append('[%s]'%bare(table.name, 'table name') + block(table.attributes))
		for column in table.columns:
			lines.append(bare(column.name, 'column name') + block(column.attributes))
		lines.append('') # Ends the table, so nothing after it gets mistaken for a column.
	for r in diagram.relations:
		lines.append('%s %s--%s %s'%(bare(r.left, 'relation end'), r.cardinality_left, r.cardinality_right, bare(r.right, 'relation end')) + block(r.attributes))
	return ''.join(line+'\n' for line in lines)
