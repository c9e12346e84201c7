"""Grammar alphabet: terminals and references to other states."""

from __future__ import annotations

from dataclasses import dataclass


class Symbol:
	"""Base for the two symbol shapes a rule is built from."""

	__slots__ = ()

	def is_terminal(self) -> bool:
		return isinstance(self, Terminal)

	def is_nonterminal(self) -> bool:
		return isinstance(self, NonTerminal)


@dataclass(frozen=True)
class Terminal(Symbol):
	text: str

	@property
	def first_char(self) -> str:
		return self.text[0]

	def __str__(self) -> str:
		return self.text


@dataclass(frozen=True)
class NonTerminal(Symbol):
	name: str

	def __str__(self) -> str:
		return f"<{self.name}>"
