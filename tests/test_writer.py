import unittest

from erdtools.erd import writer
from erdtools.erd.application import parse
from erdtools.erd.model import Diagram

SAMPLE = 'title {label: "My ERD", size: 20}\n[Person] {color: red}\nname\nage {type: int, note: "years old"}\n\n[Car]\n\nPerson *--1 Car {label: owns}\n'

class TestPieces(unittest.TestCase):
	def test_value(self):
		self.assertEqual('int', writer.value('int'))
		self.assertEqual('"years old"', writer.value('years old'))
		self.assertEqual('"a:b"', writer.value('a:b'))
		for bad in ['', 'say "hi"', 'two\nlines', 'tab\there']:
			with self.subTest(bad=bad), self.assertRaises(ValueError): writer.value(bad)

	def test_bare(self):
		self.assertEqual('Person', writer.bare('Person', 'table name'))
		for bad in ['', 'two words', '[x]', 'a/b']:
			with self.subTest(bad=bad), self.assertRaises(ValueError): writer.bare(bad, 'table name')

	def test_block(self):
		self.assertEqual('', writer.block({}))
		self.assertEqual(' {a: 1, b: "x y"}', writer.block({'a': '1', 'b': 'x y'}))


class TestToSource(unittest.TestCase):
	def test_layout(self):
		self.assertEqual(
			'title {label: "My ERD", size: 20}\n'
			'\n'
			'[Person] {color: red}\n'
			'name\n'
			'age {type: int, note: "years old"}\n'
			'\n'
			'[Car]\n'
			'\n'
			'Person *--1 Car {label: owns}\n',
			writer.to_source(parse(SAMPLE)),
		)

	def test_empty(self):
		self.assertEqual('', writer.to_source(Diagram()))

	def test_reads_back_the_same(self):
		for text in [SAMPLE, "A 0--+ B\nB 1--1 C {k: v}\n", "[A]\nx\nx\n", "[A]\nx\n\n[B]\ny\n\n[A]\nz\n"]:
			with self.subTest(text=text):
				first = parse(text)
				second = parse(writer.to_source(first))
				self.assertEqual(first.as_dict(), second.as_dict())

	def test_unwritable_model(self):
		diagram = Diagram()
		diagram.begin_table('two words')
		with self.assertRaises(ValueError): writer.to_source(diagram)


if __name__ == '__main__':
	unittest.main()
