"""Line-oriented parser for the ``<Name> ::= alt | alt`` grammar notation.

Example input::

	<S> ::= a<A> | <B>c
	<A> ::= b | <>

Each line is terminated on its own, so a production cannot span lines.
Terminal text between references is kept verbatim (trimmed) as one token,
``<>`` marks the declaring state as accepting the empty sequence, and ``:``/``=``
characters on the right-hand side are skipped as part of the ``::=`` separator.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional

from formalgrammar.errors import GrammarError
from formalgrammar.grammar import Grammar
from formalgrammar.symbol import NonTerminal, Symbol, Terminal

logger = logging.getLogger(__name__)

NAME_CLOSERS = frozenset(">:=")
SEPARATOR_CHARS = frozenset(":=")


class ParserState(Enum):
	# Waiting for the '<' that opens a declaration
	STATE = auto()
	# Inside the <...> of the left-hand side
	STATE_NAME = auto()
	# Commit the buffered name as the current state
	STORE_STATE = auto()
	# Right-hand side: terminal text, '|' and references
	DEFS = auto()
	# Inside a <...> reference on the right-hand side
	DEFS_NONTERMINAL = auto()


class GrammarParser:
	def __init__(self, grammar: Optional[Grammar] = None) -> None:
		self._grammar: Optional[Grammar] = grammar if grammar is not None else Grammar()
		self._buffer: List[str] = []
		self._current: str = ""
		self._pending: List[Symbol] = []
		self._state = ParserState.STATE
		self._handlers: Dict[ParserState, Callable[[str], None]] = {
			ParserState.STATE: self._on_state,
			ParserState.STATE_NAME: self._on_state_name,
			ParserState.DEFS: self._on_defs,
			ParserState.DEFS_NONTERMINAL: self._on_defs_nonterminal,
		}

	@property
	def read_state(self) -> ParserState:
		return self._state

	@property
	def current_state(self) -> str:
		"""Name of the state that rules are currently committed to."""
		return self._current

	@property
	def grammar(self) -> Grammar:
		"""The partially built grammar, for inspection between lines."""
		return self._require_grammar()

	def _require_grammar(self) -> Grammar:
		if self._grammar is None:
			raise GrammarError("Parser already finished; create a new GrammarParser")
		return self._grammar

	# ------------------------------------------------------------------
	# Input

	def parse_line(self, line: str) -> None:
		self._require_grammar()
		try:
			for ch in line:
				self._handlers[self._state](ch)

			# End of line behaves like a final '|'
			self._flush_terminal()
			self._commit_rule()
		finally:
			self._state = ParserState.STATE

	def parse_lines(self, lines: Iterable[str]) -> None:
		for line in lines:
			logger.debug("Reading: %s", line)
			self.parse_line(line)

	def finish(self) -> Grammar:
		grammar = self._require_grammar()
		self._grammar = None
		return grammar

	# ------------------------------------------------------------------
	# Per-state character handling

	def _on_state(self, ch: str) -> None:
		if ch == "<":
			self._state = ParserState.STATE_NAME
		# anything else before a declaration is ignored

	def _on_state_name(self, ch: str) -> None:
		if ch in NAME_CLOSERS:
			self._state = ParserState.STORE_STATE
			self._store_state()
		else:
			self._buffer.append(ch)

	def _store_state(self) -> None:
		self._current = self._require_grammar().create_state(self._drain())
		self._state = ParserState.DEFS

	def _on_defs(self, ch: str) -> None:
		if ch in SEPARATOR_CHARS:
			return
		if ch == "|" or ch == "\n":
			self._flush_terminal()
			self._commit_rule()
		elif ch == "<":
			self._flush_terminal()
			self._state = ParserState.DEFS_NONTERMINAL
		else:
			self._buffer.append(ch)

	def _on_defs_nonterminal(self, ch: str) -> None:
		if ch != ">":
			self._buffer.append(ch)
			return
		name = self._drain()
		if name:
			symbol = NonTerminal(name)
			logger.debug("Storing NonTerminal: %s", symbol)
			self._pending.append(symbol)
		else:
			self._require_grammar().mark_nullable(self._current)
		self._state = ParserState.DEFS

	# ------------------------------------------------------------------
	# Buffer helpers

	def _drain(self) -> str:
		text = "".join(self._buffer).strip()
		self._buffer.clear()
		return text

	def _flush_terminal(self) -> None:
		text = self._drain()
		if not text:
			return
		symbol = Terminal(text)
		logger.debug("Storing Terminal: %s", symbol)
		self._pending.append(symbol)

	def _commit_rule(self) -> None:
		if not self._pending:
			return
		rule = tuple(self._pending)
		self._pending.clear()
		logger.debug("PUSH: %s -> %s", self._current, "".join(str(symbol) for symbol in rule))
		self._require_grammar().add_rule_to(self._current, rule)
