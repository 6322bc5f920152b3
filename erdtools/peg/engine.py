"""
A backtracking parsing-expression engine.

A grammar is a graph of little matcher objects. Each one answers the question
"do you match here?" through `attempt(session)`, and every attempt is a
transaction over exactly two pieces of state: the cursor position and the
number of recorded spans. On failure both are put back the way they were, so a
failed attempt is invisible to everything that happens afterward. That is the
whole trick of backtracking; there is no other undo mechanism.

The matcher objects are immutable once built and hold no parse state. All the
mutable bits live in a `Session`, made fresh for each call to `recognize`, so
one grammar can serve any number of independent parses.

Output is flat: a list of spans in the order the matches completed, which is
post-order with respect to nesting. Trees are rebuilt afterward, on request,
by the `trees` module. Semantic actions are zero-width spans interpreted by the
`runtime` module, after the parse is known to have succeeded, so side effects
never need undoing.

A word of caution: there is no memoization. The grammars in this package do
not backtrack badly, but an arbitrary grammar could take exponential time.
"""

from .interface import END_SYMBOL, NOTHING, ARITY, NO_FAILURE, Failure, ParseError, normalize
from .spans import SpanRecorder, INITIAL_CAPACITY
from . import trees


class Session:
	""" Mutable state of a single parse: cursor, span recorder, farthest failure. """
	def __init__(self, text:str, capacity:int=INITIAL_CAPACITY):
		self.buffer = normalize(text)
		self.position = 0
		self.spans = SpanRecorder(capacity)
		self.failure = NO_FAILURE
		self.__active = [] # (rule, begin) for each named rule under attempt, innermost last.

	def source(self) -> str:
		""" The buffer without its sentinel. """
		return self.buffer[:-1]

	def mark(self): return self.position, len(self.spans)

	def restore(self, mark):
		self.position, count = mark
		self.spans.truncate(count)

	def peek(self) -> str: return self.buffer[self.position]
	def at_end(self) -> bool: return self.position == len(self.buffer) - 1 # Only the final sentinel counts.
	def advance(self, nr_chars:int): self.position += nr_chars

	def record(self, rule, begin:int) -> int:
		""" Record a span for `rule` from `begin` to the current position. """
		return self.spans.add(rule, begin, self.position)

	def enter(self, rule): self.__active.append((rule, self.position))
	def leave(self): self.__active.pop()

	def note_failure(self, begin:int):
		"""
		Called whenever an attempt fails. If that attempt had advanced past
		`begin` and got further than any failure before it, then it becomes
		the new farthest failure, blamed on the innermost named rule.
		"""
		end = self.position
		if end > begin and end > self.failure.end:
			if self.__active: rule, begin = self.__active[-1]
			else: rule = None
			self.failure = Failure(rule, begin, end)


class Expression:
	"""
	Base class of all matchers. Subclasses implement `_match`, which may leave
	the session in any state when it fails: `attempt` cleans up.
	"""
	name = None

	def attempt(self, session:Session) -> bool:
		mark = session.mark()
		if self._match(session): return True
		session.note_failure(mark[0])
		session.restore(mark)
		return False

	def _match(self, session:Session) -> bool:
		raise NotImplementedError(type(self))

	def __str__(self): return self.name or type(self).__name__

	# Sugar: a + b is a sequence and a | b an ordered choice. Strings coerce to literals.
	def __add__(self, other): return Sequence(self, other)
	def __radd__(self, other): return Sequence(other, self)
	def __or__(self, other): return Choice(self, other)
	def __ror__(self, other): return Choice(other, self)

def _coerce(item) -> Expression:
	""" Plain strings in a composite stand for literals. """
	if isinstance(item, str): return Literal(item)
	assert isinstance(item, Expression), item
	return item


class Literal(Expression):
	def __init__(self, text:str):
		assert text and END_SYMBOL not in text
		self.text = text
	def _match(self, session):
		if session.buffer.startswith(self.text, session.position):
			session.advance(len(self.text))
			return True
		return False
	def __str__(self): return repr(self.text)

class CharClass(Expression):
	""" One code point from (or, if negated, not from) a set. Never matches the sentinel. """
	def __init__(self, chars:str, negate:bool=False):
		self.chars = frozenset(chars)
		self.negate = negate
	def _match(self, session):
		if session.at_end(): return False
		if (session.peek() in self.chars) != self.negate:
			session.advance(1)
			return True
		return False
	def __str__(self):
		return "[%s%s]"%('^' if self.negate else '', ''.join(sorted(self.chars)).encode('unicode_escape').decode())

class AnyChar(Expression):
	def _match(self, session):
		if session.at_end(): return False
		session.advance(1)
		return True
	def __str__(self): return '.'

ANY = AnyChar()


class Sequence(Expression):
	def __init__(self, *members):
		self.members = tuple(map(_coerce, members))
	def _match(self, session):
		# A failing member has already rolled itself back; `attempt` unwinds the rest.
		return all(m.attempt(session) for m in self.members)

class Choice(Expression):
	""" Ordered choice: the first alternative to match wins. """
	def __init__(self, *alternatives):
		self.alternatives = tuple(map(_coerce, alternatives))
	def _match(self, session):
		return any(a.attempt(session) for a in self.alternatives)

class ZeroOrMore(Expression):
	def __init__(self, body):
		self.body = _coerce(body)
	def _match(self, session):
		while True:
			before = session.position
			if not self.body.attempt(session): return True
			if session.position == before: return True # Zero-width success would spin forever.

class OneOrMore(Expression):
	def __init__(self, body):
		self.body = _coerce(body)
		self.__more = ZeroOrMore(self.body)
	def _match(self, session):
		return self.body.attempt(session) and self.__more.attempt(session)

class Optional(Expression):
	def __init__(self, body):
		self.body = _coerce(body)
	def _match(self, session):
		self.body.attempt(session)
		return True

class Not(Expression):
	""" Negative lookahead. Succeeds iff the body fails; never consumes, never records. """
	def __init__(self, body):
		self.body = _coerce(body)
	def _match(self, session):
		mark = session.mark()
		matched = self.body.attempt(session)
		session.restore(mark)
		return not matched

class Capture(Expression):
	""" Records a span over exactly the text its body consumed. """
	name = 'capture'
	def __init__(self, body):
		self.body = _coerce(body)
	def _match(self, session):
		begin = session.position
		if self.body.attempt(session):
			session.record(self, begin)
			return True
		return False

class Rule(Expression):
	""" A named production. Records its own span on success and takes the blame for failures within. """
	def __init__(self, name:str, body):
		assert name.isidentifier(), name
		self.name = name
		self.body = _coerce(body)
	def _match(self, session):
		begin = session.position
		session.enter(self)
		try: matched = self.body.attempt(session)
		finally: session.leave()
		if matched: session.record(self, begin)
		return matched

class Action(Expression):
	"""
	A zero-width marker. It always matches, and leaves behind a span which the
	runtime later turns into a call on a driver object: `message` names the
	method and `view` says which argument(s) it takes.
	"""
	def __init__(self, name:str, view:str=NOTHING, message:str=None):
		if message is None: message = name
		assert name.isidentifier() and message.isidentifier(), (name, message)
		assert view in ARITY, view
		self.name, self.message, self.view = name, message, view
	def _match(self, session):
		session.record(self, session.position)
		return True


class Recognition:
	""" The result of a successful parse: normalized buffer, finalized spans, and the farthest failure seen. """
	def __init__(self, buffer:str, spans:tuple, failure:Failure):
		self.buffer = buffer
		self.spans = spans
		self.failure = failure

	def source(self) -> str: return self.buffer[:-1]
	def text(self, span) -> str: return self.buffer[span.begin:span.end]
	def forest(self) -> list: return trees.build_forest(self.spans)
	def tree(self): return trees.build_tree(self.spans)


class Grammar:
	"""
	A registry of named rules and actions. Build rules bottom-up with `define`;
	the grammar remembers the actions made through `action` so a runtime can
	bind them all up front.
	"""
	def __init__(self, start:str):
		self.start = start
		self.__rules = {}
		self.__actions = {}

	def define(self, name:str, *body) -> Rule:
		if name in self.__rules: raise ValueError("Rule %r is already defined."%name)
		rule = self.__rules[name] = Rule(name, body[0] if len(body) == 1 else Sequence(*body))
		return rule

	def action(self, name:str, view:str=NOTHING, message:str=None) -> Action:
		"""
		Actions are shared by name: asking twice gets the same object. Several
		actions may send the same message, say with different argument views.
		"""
		try: act = self.__actions[name]
		except KeyError: act = self.__actions[name] = Action(name, view, message)
		assert (act.view, act.message) == (view, message or name), name
		return act

	def rule(self, name:str) -> Rule: return self.__rules[name]
	def __getitem__(self, name) -> Rule: return self.__rules[name]
	def __contains__(self, name): return name in self.__rules
	def rule_names(self): return list(self.__rules)
	def actions(self) -> list: return list(self.__actions.values())

	def recognize(self, text:str, start:str=None, *, capacity:int=INITIAL_CAPACITY) -> Recognition:
		"""
		Run one parse from the named start rule (default: the grammar's own).
		Raises ParseError, carrying the farthest failure, if the start rule fails.
		"""
		rule = self[start or self.start]
		session = Session(text, capacity)
		if rule.attempt(session):
			return Recognition(session.buffer, session.spans.finish(), session.failure)
		raise ParseError(session.failure, session.source())