"""
The diagram model, and the interface through which the parser drives it.

The parser never touches model objects directly. It calls the methods of a
`DiagramBuilder` in the order the text dictates, and the builder keeps track of
context: the current table, the current column, the relation being assembled,
and the attribute key and value staged for the next "begin ..._attr" call.

`Diagram` is the reference builder: a plain in-memory model. Its policies,
where the language leaves a choice open:

	* A repeated attribute key in one block overwrites the earlier value
	  (last write wins) but keeps the key's original position.
	* Naming a table that already exists re-opens it; new columns append.
	* Columns are a list, so a table may have two columns of the same name.
	* A column or attribute with no table or column to belong to (which is
	  what happens to column lines after a blank line inside a table) is
	  dropped, with a warning.
	* `err` merely records the offset. Whether unparsed text is fatal is up
	  to whoever is running the parse.
"""

import warnings
from abc import ABC, abstractmethod

CARDINALITIES = ('0', '1', '*', '+')

def check_cardinality(text:str) -> str:
	if text not in CARDINALITIES: raise ValueError("Cardinality must be one of %s, not %r."%(' '.join(CARDINALITIES), text))
	return text


class DiagramBuilder(ABC):
	""" The calls a parse makes, in the order the text makes them. """

	@abstractmethod
	def err(self, offset:int, buffer:str):
		""" The text from `offset` onward could not be parsed. """

	@abstractmethod
	def clear_current(self):
		""" A blank line: forget the current table and column. """

	@abstractmethod
	def begin_table(self, name:str):
		""" Start (or resume) a table, which becomes current. """

	@abstractmethod
	def begin_column(self, name:str):
		""" Add a column to the current table; it becomes the current column. """

	@abstractmethod
	def set_relation_left(self, name:str): pass
	@abstractmethod
	def set_relation_right(self, name:str): pass
	@abstractmethod
	def set_cardinality_left(self, cardinality:str): pass
	@abstractmethod
	def set_cardinality_right(self, cardinality:str): pass

	@abstractmethod
	def commit_relation(self):
		""" All the pieces of a relation have been given: finalize it. """

	@abstractmethod
	def stage_key(self, text:str): pass
	@abstractmethod
	def stage_value(self, text:str):
		""" The value arrives with any surrounding quotes already removed. """

	# Each of these commits the staged key and value to its respective target.
	@abstractmethod
	def begin_title_attr(self): pass
	@abstractmethod
	def begin_table_attr(self): pass
	@abstractmethod
	def begin_column_attr(self): pass
	@abstractmethod
	def begin_relation_attr(self): pass


class Title:
	def __init__(self):
		self.attributes = {}

class Column:
	def __init__(self, name:str):
		self.name = name
		self.attributes = {}

class Table:
	def __init__(self, name:str):
		self.name = name
		self.attributes = {}
		self.columns = []

	def add_column(self, name:str) -> Column:
		column = Column(name)
		self.columns.append(column)
		return column

class Relation:
	def __init__(self):
		self.left = self.right = None
		self.cardinality_left = self.cardinality_right = None
		self.attributes = {}

	def is_complete(self):
		return None not in (self.left, self.right, self.cardinality_left, self.cardinality_right)

	def __str__(self):
		return "%s %s--%s %s"%(self.left, self.cardinality_left, self.cardinality_right, self.right)


class Diagram(DiagramBuilder):
	def __init__(self):
		self.title = Title()
		self.tables = {}
		self.relations = []
		self.garbage = []
		self.__table = None
		self.__column = None
		self.__relation = Relation()
		self.__key = self.__value = None

	def err(self, offset, buffer):
		self.garbage.append(offset)

	def clear_current(self):
		self.__table = self.__column = None

	def begin_table(self, name):
		table = self.tables.get(name)
		if table is None: table = self.tables[name] = Table(name)
		self.__table, self.__column = table, None

	def begin_column(self, name):
		if self.__table is None:
			warnings.warn("Column %r is not part of any table; dropped."%name)
			self.__column = None
		else:
			self.__column = self.__table.add_column(name)

	def set_relation_left(self, name): self.__relation.left = name
	def set_relation_right(self, name): self.__relation.right = name
	def set_cardinality_left(self, cardinality): self.__relation.cardinality_left = check_cardinality(cardinality)
	def set_cardinality_right(self, cardinality): self.__relation.cardinality_right = check_cardinality(cardinality)

	def commit_relation(self):
		relation, self.__relation = self.__relation, Relation()
		if not relation.is_complete(): raise ValueError("Incomplete relation: %s"%relation)
		self.relations.append(relation)

	def stage_key(self, text): self.__key = text
	def stage_value(self, text): self.__value = text

	def __commit(self, target, what:str):
		key, value = self.__key, self.__value
		self.__key = self.__value = None
		if key is None or value is None: raise ValueError("No attribute staged for the %s."%what)
		if target is None: warnings.warn("Attribute %r has no %s to belong to; dropped."%(key, what))
		else: target.attributes[key] = value

	def begin_title_attr(self): self.__commit(self.title, 'title')
	def begin_table_attr(self): self.__commit(self.__table, 'table')
	def begin_column_attr(self): self.__commit(self.__column, 'column')
	def begin_relation_attr(self): self.__commit(self.__relation, 'relation')

	def as_dict(self) -> dict:
		""" Plain nested data, handy for comparing models. Attribute order shows up as list order. """
		def attrs(thing): return list(thing.attributes.items())
		return {
			'title': attrs(self.title),
			'tables': [
				{'name': t.name, 'attributes': attrs(t), 'columns': [{'name': c.name, 'attributes': attrs(c)} for c in t.columns]}
				for t in self.tables.values()
			],
			'relations': [
				{
					'left': r.left, 'cardinality_left': r.cardinality_left,
					'right': r.right, 'cardinality_right': r.cardinality_right,
					'attributes': attrs(r),
				}
				for r in self.relations
			],
		}
