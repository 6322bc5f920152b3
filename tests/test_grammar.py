import unittest

from erdtools.erd.grammar import GRAMMAR, build_grammar
from erdtools.peg.engine import Action
from erdtools.peg.interface import ParseError

def actions_of(text, start=None):
	recognition = GRAMMAR.recognize(text, start)
	return [span.rule.name for span in recognition.spans if isinstance(span.rule, Action)]

def shape(node):
	return (node.rule.name, [shape(child) for child in node])


class TestRecognition(unittest.TestCase):
	def test_table_with_columns(self):
		self.assertEqual(
			['begin_table', 'begin_column', 'begin_column', 'stage_key', 'stage_value', 'begin_column_attr'],
			actions_of("[Person]\nname\nage {type: int}\n"),
		)

	def test_relation(self):
		self.assertEqual(
			['set_relation_left', 'set_cardinality_left', 'set_cardinality_right', 'set_relation_right', 'commit_relation'],
			actions_of("Person *--1 Car\n"),
		)

	def test_nothing_to_do(self):
		for text in ["", "\n\n", "# just a comment\n", "   # indented comment\n\n"]:
			with self.subTest(text=text):
				self.assertEqual([], [a for a in actions_of(text) if a != 'clear_current'])

	def test_title(self):
		self.assertEqual(
			['stage_key', 'stage_quoted_value', 'begin_title_attr', 'stage_key', 'stage_value', 'begin_title_attr'],
			actions_of('title {label: "My ERD", size: 20}\n'),
		)

	def test_multi_line_relation_attributes(self):
		text = "A 1--* B {\n  label: x,\n  color: red\n}\n"
		self.assertEqual([
			'set_relation_left', 'set_cardinality_left', 'set_cardinality_right', 'set_relation_right',
			'stage_key', 'stage_value', 'begin_relation_attr',
			'stage_key', 'stage_value', 'begin_relation_attr',
			'commit_relation',
		], actions_of(text))

	def test_crlf_and_bare_cr(self):
		expect = ['begin_table', 'begin_column', 'begin_column']
		self.assertEqual(expect, actions_of("[A]\r\nx\r\ny\r\n"))
		self.assertEqual(expect, actions_of("[A]\rx\ry\r"))

	def test_no_final_newline(self):
		self.assertEqual(['begin_table', 'begin_column'], actions_of("[A]\nx"))
		self.assertEqual(['set_relation_left', 'set_cardinality_left', 'set_cardinality_right', 'set_relation_right', 'commit_relation'], actions_of("A 0--+ B"))

	def test_blank_line_ends_table(self):
		self.assertEqual(['begin_table', 'begin_column', 'clear_current', 'begin_table'], actions_of("[A]\nx\n\n[B]\n"))

	def test_garbage_is_captured(self):
		self.assertEqual(['begin_table', 'clear_current', 'fail_trailing'], actions_of("[A]\n\n[B\n"))
		self.assertEqual(['fail_trailing'], actions_of("what is this?"))


class TestStrictDocument(unittest.TestCase):
	def test_good_document_passes(self):
		GRAMMAR.recognize("[A]\nx\n\nA 1--* B\n", 'document')

	def test_bad_cardinality(self):
		with self.assertRaises(ParseError) as cm:
			GRAMMAR.recognize("A 2--1 B\n", 'document')
		failure = cm.exception.failure
		self.assertEqual('relation_info', failure.rule.name)
		self.assertEqual((0, 2), (failure.begin, failure.end))

	def test_unclosed_table(self):
		with self.assertRaises(ParseError) as cm:
			GRAMMAR.recognize("[Person\nname\n", 'document')
		self.assertEqual("parse error near table_info (line 1 col 0 - line 1 col 7): '[Person'", str(cm.exception))

	def test_error_after_good_prefix(self):
		with self.assertRaises(ParseError) as cm:
			GRAMMAR.recognize("[A]\nx\n\n[B\n", 'document')
		self.assertEqual("parse error near table_info (line 4 col 0 - line 4 col 2): '[B'", str(cm.exception))


class TestTrees(unittest.TestCase):
	def test_shape(self):
		tree = GRAMMAR.recognize("[A]\nx\n").tree()
		self.assertEqual(('root', [('expression', [('table_info', [
			('table_title', [('capture', [('string', [])])]),
			('newline_or_eot', [('newline', [])]),
			('table_column', [('column_name', [('capture', [('string', [])])]), ('newline_or_eot', [('newline', [])])]),
		])])]), shape(tree))

	def test_spans_nest_or_are_disjoint(self):
		text = 'title {label: "T"}\n[Person] {color: red}\nname {type: "varchar 20"}\n\nPerson *--1 Car {label: owns}\n# done\n'
		spans = [s for s in GRAMMAR.recognize(text).spans if s.begin < s.end]
		for a in spans:
			for b in spans:
				nested = (a.begin <= b.begin and b.end <= a.end) or (b.begin <= a.begin and a.end <= b.end)
				disjoint = a.end <= b.begin or b.end <= a.begin
				self.assertTrue(nested or disjoint, (str(a), str(b)))


class TestConstruction(unittest.TestCase):
	def test_fresh_grammars_are_independent(self):
		a, b = build_grammar(), build_grammar()
		self.assertIsNot(a['root'], b['root'])
		self.assertEqual(a.rule_names(), b.rule_names())

	def test_both_error_actions_send_err(self):
		errors = [a for a in GRAMMAR.actions() if a.message == 'err']
		self.assertEqual(['fail_total', 'fail_trailing'], sorted(a.name for a in errors))


if __name__ == '__main__':
	unittest.main()
