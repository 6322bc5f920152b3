"""
The ERD description language, as a parsing-expression grammar.

It's line-oriented. A document is any mix of:

	title {label: "My ERD", size: 20}
	[Person] {bgcolor: "#d0e0d0"}
	name
	age {type: int}
	Person *--1 Car {label: owns}
	# a comment

Blank lines end the current table. Attribute blocks may spread over several
lines; attributes are separated by commas and/or whitespace.

The `root` rule never rejects anything: whatever it can't make sense of gets
captured as garbage and reported through the driver's `err` method, after the
model has been built from whatever did parse. Start from `document` instead to
get a plain ParseError, pointing at the farthest failure, for imperfect input.
"""

from ..peg.engine import (
	Grammar, Literal, CharClass, ANY, Sequence, Choice, ZeroOrMore, OneOrMore, Optional, Not, Capture,
)
from ..peg.interface import TEXT, UNQUOTED, LOCATION

NAME_EXCLUDES = '"\t\r\n/:,[]{} ' # A bare name (or key, or value) may contain anything else.
QUOTED_EXCLUDES = '"\t\r\n'
CARDINALITIES = '01*+'

def build_grammar() -> Grammar:
	g = Grammar(start='root')
	act = g.action

	# Lexical bits
	space = g.define('space', OneOrMore(CharClass(' \t')))
	ws = g.define('ws', OneOrMore(CharClass(' \t\r\n')))
	newline = g.define('newline', Choice('\r\n', '\n', '\r'))
	eot = g.define('EOT', Not(ANY))
	newline_or_eot = g.define('newline_or_eot', Choice(newline, eot))
	string = g.define('string', OneOrMore(CharClass(NAME_EXCLUDES, negate=True)))
	string_in_quote = g.define('string_in_quote', OneOrMore(CharClass(QUOTED_EXCLUDES, negate=True)))
	cardinality = g.define('cardinality', Choice(*CARDINALITIES))
	comment_string = g.define('comment_string', ZeroOrMore(CharClass('\r\n', negate=True)))
	spaces, blanks = ZeroOrMore(space), ZeroOrMore(ws)

	# Attributes
	attribute_sep = g.define('attribute_sep', spaces, ',', spaces)
	attribute_key = g.define('attribute_key', Capture(string), act('stage_key', TEXT))
	bare_value = g.define('bare_value', Capture(string), act('stage_value', TEXT))
	quoted_value = g.define('quoted_value', Capture(Sequence('"', string_in_quote, '"')), act('stage_quoted_value', UNQUOTED, 'stage_value'))
	attribute_value = g.define('attribute_value', Choice(bare_value, quoted_value))
	def attribute(kind):
		return g.define(kind+'_attribute', attribute_key, spaces, ':', spaces, attribute_value, act('begin_%s_attr'%kind))

	def loose_block(kind):
		# Title and relation blocks allow whitespace after a separator.
		return Sequence('{', blanks, ZeroOrMore(Sequence(attribute(kind), blanks, Optional(attribute_sep), blanks)), blanks, '}')
	def tight_block(kind):
		return Sequence(spaces, '{', blanks, ZeroOrMore(Sequence(attribute(kind), blanks, Optional(attribute_sep))), blanks, '}', spaces)

	# Lines
	empty_line = g.define('empty_line', ws, act('clear_current'))
	comment_line = g.define('comment_line', spaces, '#', comment_string, newline)
	title_info = g.define('title_info', 'title', blanks, loose_block('title'), newline)

	table_title = g.define('table_title', Capture(string), act('begin_table', TEXT))
	column_name = g.define('column_name', Capture(string), act('begin_column', TEXT))
	table_column = g.define('table_column', spaces, column_name, Optional(tight_block('column')), newline_or_eot)
	table_info = g.define('table_info',
		'[', table_title, ']', Optional(tight_block('table')), newline_or_eot,
		ZeroOrMore(Choice(table_column, empty_line)),
	)

	relation_left = g.define('relation_left', Capture(string), act('set_relation_left', TEXT))
	cardinality_left = g.define('cardinality_left', Capture(cardinality), act('set_cardinality_left', TEXT))
	relation_right = g.define('relation_right', Capture(string), act('set_relation_right', TEXT))
	cardinality_right = g.define('cardinality_right', Capture(cardinality), act('set_cardinality_right', TEXT))
	relation_info = g.define('relation_info',
		spaces, relation_left, spaces, cardinality_left, Literal('--'), cardinality_right, spaces, relation_right,
		Optional(Sequence(blanks, loose_block('relation'))), newline_or_eot, act('commit_relation'),
	)

	# Document
	expression = g.define('expression', ZeroOrMore(Choice(title_info, relation_info, table_info, comment_line, empty_line)))
	garbage = Capture(OneOrMore(ANY))
	g.define('root', Choice(
		Sequence(expression, eot),
		Sequence(expression, garbage, act('fail_trailing', LOCATION, 'err'), eot),
		Sequence(garbage, act('fail_total', LOCATION, 'err'), eot),
	))
	g.define('document', expression, eot)
	return g

GRAMMAR = build_grammar()
