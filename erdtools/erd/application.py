"""
Putting the pieces together: text in, Diagram out, with reasonable diagnostics.

THIS MAY SEEM like a method-as-object (anti)pattern. However, the real
point is a whole mess of configuration and cooperation in one place:
which grammar and start rule, how the actions bind to a model, what to say
when a model method blows up, and what to do about text that didn't parse.

That last question has no single right answer. By default, unparsed text is
advisory: a report goes to stderr and you get back whatever model the good
part of the text built. With `strict=True` it's fatal instead: the model is
still built (you passed it in, so you can still look at it) but then a
TrailingGarbage or TotalGarbage exception is raised.
"""

from ..peg import runtime, trees
from ..peg.engine import Grammar, Recognition, Action, Capture
from ..peg.interface import TrailingGarbage, TotalGarbage
from ..support import failureprone
from ..support.pretty import print_spans
from .grammar import GRAMMAR
from .model import DiagramBuilder, Diagram

def find_garbage(recognition:Recognition):
	"""
	If the parse only went through by swallowing garbage, return the name of
	the error action involved and the offset where the garbage starts.
	Otherwise return None.
	"""
	capture = None
	for span in recognition.spans:
		if isinstance(span.rule, Capture): capture = span
		elif isinstance(span.rule, Action) and span.rule.message == 'err':
			return span.rule.name, capture.begin
	return None


class ErdParser(runtime.DispatchListener):
	source: failureprone.SourceText
	recognition: Recognition

	def __init__(self, *, strict:bool=False, grammar:Grammar=GRAMMAR, start:str=None):
		self.strict = strict
		self.grammar = grammar
		self.start = start

	def recognize(self, text:str, *, filename:str=None) -> Recognition:
		self.source = failureprone.SourceText(text, filename=filename)
		self.recognition = self.grammar.recognize(text, self.start)
		return self.recognition

	def parse(self, text:str, *, filename:str=None, diagram:DiagramBuilder=None) -> DiagramBuilder:
		if diagram is None: diagram = Diagram()
		recognition = self.recognize(text, filename=filename)
		on_error = runtime.BindErrorListener(type(diagram).__name__)
		dispatch = runtime.action_bindings(diagram, self.grammar.actions(), on_error)
		runtime.execute(recognition, dispatch, self)
		garbage = find_garbage(recognition)
		if garbage is not None: self.unparsed(*garbage)
		return diagram

	def check(self, text:str, *, filename:str=None) -> Recognition:
		""" Recognize only, with no tolerance for garbage: raises ParseError pointing at the farthest failure. """
		self.source = failureprone.SourceText(text, filename=filename)
		self.recognition = self.grammar.recognize(text, 'document')
		return self.recognition

	def unparsed(self, action_name:str, offset:int):
		""" Some text from `offset` onward did not parse. Override to change the policy. """
		recognition = self.recognition
		total = action_name == 'fail_total' or offset == 0
		if self.strict:
			kind = TotalGarbage if total else TrailingGarbage
			raise kind(recognition.failure, recognition.source(), offset)
		self.issue(offset, total).emit(lambda key: self.source)

	def issue(self, offset:int, total:bool) -> failureprone.Issue:
		failure = self.recognition.failure
		evidence = [failureprone.Evidence(slice(offset, len(self.source.content)), "unparsed from here")]
		if failure.rule is not None and failure.end > failure.begin:
			# The blamed rule may begin far back; point at where it gave up.
			evidence.append(failureprone.Evidence(slice(failure.end, failure.end), "parse error near "+failure.rule.name))
		return failureprone.Issue(
			phase="parsing",
			severity=failureprone.Severity.ERROR,
			description="nothing could be parsed" if total else "text after a valid prefix could not be parsed",
			evidence={self.source.filename: evidence},
		)

	def exception_dispatching(self, ex:Exception, span):
		self.source.complain(slice(span.begin, span.end), message="During action %r" % span.rule.name)
		raise ex from None

	def syntax_tree(self, text:str):
		return self.recognize(text).tree()

	def dump_tree(self, text:str, file=None, pretty:bool=False):
		recognition = self.recognize(text)
		trees.dump_forest(recognition.forest(), recognition.buffer, file=file, pretty=pretty)

	def dump_spans(self, text:str, file=None):
		recognition = self.recognize(text)
		print_spans(recognition.spans, recognition.buffer, file=file)

def parse(text:str, **kwargs) -> Diagram:
	""" The quick way: parse with default (advisory) garbage handling. """
	return ErdParser(**kwargs).parse(text)
