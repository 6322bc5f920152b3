"""
Semantic actions, bound and run.

The grammar mentions actions only symbolically: an Action carries a message
name and an argument view. This module binds those to the methods of some
driver object, then walks a finished span list calling them in order.

The walk keeps one piece of state: the most recent capture (its text and where
it began). Actions that consume text get that. The driver holds everything
else. Because actions run only after the parse has succeeded, no driver ever
sees a call from an attempt that was later backtracked.
"""

import inspect, warnings

from .interface import NOTHING, TEXT, UNQUOTED, LOCATION, ARITY, BindError
from .engine import Action, Capture, Recognition


class BindErrorListener:
	""" Factors out the details concerning how we report binding problems. """
	def __init__(self, driver_name:str, strict:bool=True):
		self._driver_name = driver_name
		self._strict = strict

	def _gripe(self, message:str):
		def blame(*args): raise BindError(full_message)
		full_message = "For driver %s: %s"%(self._driver_name, message)
		if self._strict: raise BindError(full_message)
		else:
			warnings.warn(full_message)
			return blame

	def missing_method(self, action:Action):
		return self._gripe("no method %r for the action of that name."%action.message)

	def wrong_arity(self, action:Action, arity:int):
		return self._gripe("method %r takes %d argument(s), but the %r view needs %d."%(
			action.message, arity, action.view, ARITY[action.view],
		))


def unquote(text:str) -> str:
	""" Strip one pair of surrounding double quotes, if present. """
	if len(text) >= 2 and text[0] == text[-1] == '"': return text[1:-1]
	return text

# Each binding takes (text, begin, source) and picks out what its method wants.
# A separate function per view keeps the caller's stack frame out of the closure.
def _view_nothing(fn): return lambda text, begin, source: fn()
def _view_text(fn): return lambda text, begin, source: fn(text)
def _view_unquoted(fn): return lambda text, begin, source: fn(unquote(text))
def _view_location(fn): return lambda text, begin, source: fn(begin, source)

VIEWS = {NOTHING: _view_nothing, TEXT: _view_text, UNQUOTED: _view_unquoted, LOCATION: _view_location}

def action_bindings(driver, actions, on_error:BindErrorListener=None) -> dict:
	"""
	Build the dispatch table: Action -> binding. Because this checks every
	action up front, a mismatch between grammar and driver shows up before any
	text is processed rather than halfway through.
	"""
	if on_error is None: on_error = BindErrorListener(type(driver).__name__)
	def bind(action:Action):
		try: fn = getattr(driver, action.message)
		except AttributeError: return on_error.missing_method(action)
		arity = len(inspect.signature(fn).parameters)
		if arity != ARITY[action.view]: return on_error.wrong_arity(action, arity)
		return VIEWS[action.view](fn)
	return {action: bind(action) for action in actions}


class DispatchListener:
	""" Override to add context when a driver method raises. The default just lets it fly. """
	def exception_dispatching(self, ex:Exception, span):
		raise ex from None # Hide the catch-and-rethrow from the traceback.

def execute(recognition:Recognition, dispatch:dict, listener:DispatchListener=None):
	""" Walk the spans once, in order, invoking the bound action for each action span. """
	if listener is None: listener = DispatchListener()
	buffer, source = recognition.buffer, recognition.source()
	text, begin = '', 0
	for span in recognition.spans:
		rule = span.rule
		if isinstance(rule, Capture):
			text, begin = buffer[span.begin:span.end], span.begin
		elif isinstance(rule, Action):
			binding = dispatch.get(rule)
			if binding is None: continue
			try: binding(text, begin, source)
			except Exception as ex: listener.exception_dispatching(ex, span)
