"""
PEG Engine Interface Definitions

A few agreed constants, the two record types the engine deals in, and the
exception hierarchy. The engine itself never prints anything: every failure is
either a value (the farthest-failure marker) or an exception carrying one.
"""

from typing import NamedTuple, Any

from ..support.failureprone import translate_positions

END_SYMBOL = '\U0010ffff' # A private sentinel code point. The grammar should never mention it.

# Argument views: how an action's callback wants to see the most recent capture.
NOTHING = 'nothing'
TEXT = 'text'
UNQUOTED = 'unquoted'
LOCATION = 'location'
ARITY = {NOTHING: 0, TEXT: 1, UNQUOTED: 1, LOCATION: 2}

def normalize(text:str) -> str:
	""" Make sure the buffer ends with exactly the one sentinel "match-any" can fail against. """
	if text.endswith(END_SYMBOL): return text
	return text + END_SYMBOL

def name_of(rule) -> str:
	return getattr(rule, 'name', None) or 'Unknown'

class Span(NamedTuple):
	""" A recorded successful match: grammar object plus half-open interval over code points. """
	rule: Any
	begin: int
	end: int

	def width(self): return self.end - self.begin
	def is_empty(self): return self.begin == self.end
	def __str__(self): return "%s %d %d"%(name_of(self.rule), self.begin, self.end)

class Failure(NamedTuple):
	"""
	The farthest-failure marker. It blames the failed attempt that got the
	furthest into the text, which is usually where the author's intent and
	the grammar first parted ways.
	"""
	rule: Any
	begin: int
	end: int

NO_FAILURE = Failure(None, 0, 0)


class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

class ParseError(LanguageError):
	"""
	The start rule did not match. `failure` is the farthest-failure marker;
	`text` is the (sentinel-free) buffer it refers into.
	"""
	def __init__(self, failure:Failure, text:str):
		super().__init__(failure, text)
		self.failure, self.text = failure, text

	def locate(self):
		""" Return ((line, col), (line, col)) for the ends of the failure marker. """
		begin, end = self.failure.begin, self.failure.end
		where = translate_positions(self.text, (begin, end))
		return where[begin], where[end]

	def __str__(self):
		(l1, c1), (l2, c2) = self.locate()
		begin, end = self.failure.begin, self.failure.end
		return "parse error near %s (line %d col %d - line %d col %d): %r"%(
			name_of(self.failure.rule), l1, c1, l2, c2, self.text[begin:end],
		)

class GarbageError(ParseError):
	""" A parse went through only because the grammar swallowed some unparsable text. """
	def __init__(self, failure:Failure, text:str, offset:int):
		super().__init__(failure, text)
		self.offset = offset

class TrailingGarbage(GarbageError):
	""" A valid prefix parsed, but text remained from `offset` onward. """

class TotalGarbage(GarbageError):
	""" Nothing at all parsed: the whole text was garbage. """

class BindError(LanguageError):
	""" A driver object cannot service some action the grammar calls for. """
