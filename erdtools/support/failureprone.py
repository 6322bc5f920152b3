"""
This module is all about easing over the process to display where things go wrong.

The parse engine knows locations only as absolute offsets into its buffer. People
want line and column numbers, and ideally a picture of the offending line. This
module supplies both, independent of the rest of the package.

Lines are broken at '\\n' and nothing else: a carriage return is just another
character as far as column-counting goes. Lines number from one, columns from zero.

Converting offsets to positions happens in bulk: sort the offsets, then walk the
text once. That costs the length of the text plus the number of offsets, no
matter how many offsets there are.
"""

import sys
from typing import NamedTuple, Any, Iterable
from enum import Enum

def translate_positions(text:str, offsets:Iterable[int]) -> dict[int, tuple[int, int]]:
	"""
	Map each offset to a (line, column) pair in a single forward scan.
	An offset equal to len(text) is fine: it means "just past the end".
	"""
	wanted = sorted(set(offsets))
	if not wanted: return {}
	if wanted[0] < 0 or wanted[-1] > len(text): raise IndexError(wanted[0] if wanted[0] < 0 else wanted[-1])
	translations, j, line, column = {}, 0, 1, 0
	for index in range(len(text)+1):
		while wanted[j] == index:
			translations[index] = (line, column)
			j += 1
			if j == len(wanted): return translations
		if text[index] == '\n': line, column = line+1, 0
		else: column += 1
	return translations # Not reached: the final offset is at most len(text).


class Severity(Enum):
	""" How much a report should worry its reader. The value is what gets printed. """
	NOTICE = "Notice"
	WARNING = "Warning"
	ERROR = "Error"

class Evidence(NamedTuple):
	""" A stretch of source worth pointing at, and the words to print beside the caret(s). """
	slice:slice
	caption: str = "here"

	def width(self): return self.slice.stop - self.slice.start

class Issue(NamedTuple):
	"""
	One problem found in some input, ready to be shown to a person.

	The evidence maps a source key (anything the `fetch` function passed to
	`as_text` understands, usually a file name) to the places in that source
	which bear on the problem. Usually there is just the one source.
	"""
	phase: str
	severity: Severity
	description: str
	evidence: dict[Any, list[Evidence]]

	def headline(self) -> str:
		return "%s while %s: %s"%(self.severity.value, self.phase, self.description)

	def as_text(self, fetch) -> str:
		""" The headline, then each piece of evidence drawn under its line. `fetch(key)` must return a SourceText. """
		lines = [self.headline()]
		for key, pieces in self.evidence.items():
			source = fetch(key)
			if source.filename: lines.append("Excerpt from %s :"%source.filename)
			for piece in pieces:
				row, col = source.find_row_col(piece.slice.start)
				lines.append(illustration(source.line_of_text(row), col, piece.width(), prefix='% 6d :'%row, caption=piece.caption))
		return "\n".join(lines)

	def emit(self, fetch):
		print(self.as_text(fetch), file=sys.stderr)

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	"""
	Two lines of text: the given line (after `prefix`), and under it a run of
	carets from column `start`, at least one and never past the end of the
	line, followed by the caption. Tabs in the padding are kept so the carets
	line up however the terminal expands them.
	"""
	pad = ''.join(c if c == '\t' else ' ' for c in prefix + single_line[:start])
	carets = '^' * max(1, min(width, len(single_line) - start))
	return "%s%s\n%s%s %s"%(prefix, single_line.rstrip(), pad, carets, caption)

class SourceText:
	""" Text (and maybe the name of the file it came from) that knows how to point at places within itself. """
	def __init__(self, content:str, filename:str=None):
		self.content = content
		self.filename = filename
		self.__starts = None

	def __line_starts(self) -> list[int]:
		""" Lazily find line starts, only if it turns out to be necessary for a particular text. """
		if self.__starts is None:
			self.__starts = [0] + [i+1 for i, c in enumerate(self.content) if c == '\n']
		return self.__starts

	def find_row_col(self, index:int):
		return translate_positions(self.content, (index,))[index]

	def line_of_text(self, row:int) -> str:
		""" Rows count from one. The text comes without its line break. """
		starts = self.__line_starts()
		start = starts[row-1]
		stop = starts[row]-1 if row < len(starts) else len(self.content)
		return self.content[start:stop]

	def _format_message(self, row, col, message):
		prefix = "At" if self.filename is None else str(self.filename)+":"
		return "%s line %d, column %d: %s" % (prefix, row, col, message)

	def complaint(self, a_slice:slice, message:str):
		left, right = a_slice.start, a_slice.stop
		row, col = self.find_row_col(left)
		reference = self._format_message(row, col, message)
		line = self.line_of_text(row)
		illustrated = illustration(line, col, right - left, prefix=' >>> ')
		return "%s\n%s"%(reference, illustrated)

	def complain(self, a_slice:slice, message:str):
		print(self.complaint(a_slice, message), file=sys.stderr)
