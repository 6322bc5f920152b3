import io
import unittest

from erdtools.support.pretty import print_grid, print_spans
from erdtools.peg.interface import Span
from erdtools.peg.engine import Rule, ANY

class TestPretty(unittest.TestCase):
	def test_grid(self):
		out = io.StringIO()
		print_grid([['a', 'bb'], ['1', 2]], file=out)
		self.assertEqual("──┬───\na │ bb\n──┼───\n1 │  2\n──┴───\n", out.getvalue())

	def test_ragged_grid_refused(self):
		with self.assertRaises(AssertionError):
			print_grid([['a'], ['b', 'c']], file=io.StringIO())

	def test_spans(self):
		out = io.StringIO()
		print_spans([Span(Rule('word', ANY), 0, 2), Span('?', 2, 2)], 'hi', file=out)
		lines = out.getvalue().splitlines()
		self.assertEqual(6, len(lines))
		self.assertEqual("0 │ word │     0 │   2 │ 'hi'", lines[3])
		self.assertEqual("1 │    ? │     2 │   2 │   ''", lines[4])


if __name__ == '__main__':
	unittest.main()
