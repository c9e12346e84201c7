from __future__ import annotations


class GrammarError(Exception):
	pass


class UnknownStateError(GrammarError, KeyError):
	"""Raised when a rule targets a state that was never created."""

	def __init__(self, state: str) -> None:
		super().__init__(state)
		self.state = state

	def __str__(self) -> str:
		return f"No state named {self.state!r}"
