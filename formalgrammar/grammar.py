"""Grammar storage plus FIRST/FOLLOW computation.

States are nonterminal names. Each state owns an insertion-ordered set of rules
(alternative right-hand sides) and an ``accepts_empty`` flag that records an
explicit ``<>`` alternative. Epsilon is never stored as a rule.

FIRST and FOLLOW sets are sets of single characters: only the first character
of a terminal is significant.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set, Tuple

from formalgrammar.errors import UnknownStateError
from formalgrammar.symbol import NonTerminal, Symbol, Terminal

logger = logging.getLogger(__name__)

EPSILON = "ε"
END_MARKER = "$"
DEFAULT_INITIAL = "S"

Rule = Tuple[Symbol, ...]
FirstMap = Dict[str, Set[str]]
FollowMap = Dict[str, Set[str]]
PassLog = Dict[str, List[str]]


def _union(target: Set[str], chars: Iterable[str]) -> Set[str]:
	"""Add ``chars`` to ``target`` and return the characters that were new."""
	added = set(chars) - target
	target |= added
	return added


def _close_pass(changes: Dict[str, Set[str]], passes: List[PassLog]) -> bool:
	if not any(changes.values()):
		return False
	passes.append({state: sorted(chars) for state, chars in changes.items()})
	return True


class Grammar:
	def __init__(self, initial: str = DEFAULT_INITIAL) -> None:
		self._accepts: Dict[str, bool] = {}
		self._rules: Dict[str, Dict[Rule, None]] = {}
		self._initial = self.create_state(initial)

	@classmethod
	def from_lines(cls, lines: Iterable[str]) -> "Grammar":
		from formalgrammar.parser import GrammarParser

		parser = GrammarParser()
		parser.parse_lines(lines)
		return parser.finish()

	@classmethod
	def from_source(cls, source: str) -> "Grammar":
		return cls.from_lines(source.splitlines())

	# ------------------------------------------------------------------
	# State access

	@property
	def initial(self) -> str:
		return self._initial

	@property
	def states(self) -> List[str]:
		return list(self._rules)

	def has_state(self, state: str) -> bool:
		return state in self._rules

	def __contains__(self, state: object) -> bool:
		return state in self._rules

	def rules_of(self, state: str) -> List[Rule]:
		if state not in self._rules:
			raise UnknownStateError(state)
		return list(self._rules[state])

	def accepts_empty(self, state: str) -> bool:
		if state not in self._accepts:
			raise UnknownStateError(state)
		return self._accepts[state]

	def _nullable(self, state: str) -> bool:
		# Undeclared references are never nullable.
		return self._accepts.get(state, False)

	# ------------------------------------------------------------------
	# Mutation

	def create_state(self, name: str) -> str:
		"""Declare ``name`` (trimmed) with no rules, returning the stored name.

		Re-declaring an existing state replaces it: its previous rules and its
		nullable flag are discarded, not merged.
		"""
		state = name.strip()
		if state in self._rules:
			logger.debug("Redeclaring state %r, dropping %d rule(s)", state, len(self._rules[state]))
		else:
			logger.debug("Creating state %r", state)
		self._accepts[state] = False
		self._rules[state] = {}
		return state

	def add_rule_to(self, state: str, rule: Iterable[Symbol]) -> None:
		symbols: Rule = tuple(rule)
		if not symbols:
			raise ValueError("Cannot store an empty rule; mark the state nullable instead")
		if any(isinstance(symbol, Terminal) and not symbol.text for symbol in symbols):
			raise ValueError("Terminal text must not be empty")
		if state not in self._rules:
			raise UnknownStateError(state)
		self._rules[state][symbols] = None

	def mark_nullable(self, state: str) -> None:
		if state not in self._accepts:
			raise UnknownStateError(state)
		self._accepts[state] = True

	# ------------------------------------------------------------------
	# FIRST

	def _first_candidates(self, rule: Rule) -> Tuple[List[Symbol], bool]:
		"""Leading symbols of ``rule`` that may start a derivation.

		The walk stops after the first terminal or non-nullable nonterminal.
		The boolean is True when every symbol was a nullable nonterminal.
		"""
		candidates: List[Symbol] = []
		for symbol in rule:
			candidates.append(symbol)
			if isinstance(symbol, Terminal) or not self._nullable(symbol.name):
				return candidates, False
		return candidates, True

	def first_set(self) -> FirstMap:
		first, _ = self.first_set_with_trace()
		return first

	def first_set_with_trace(self) -> Tuple[FirstMap, List[PassLog]]:
		"""
		Compute FIRST sets and also return an iteration log.
		The log is a list of passes; each pass maps state -> newly-added characters.
		"""
		first: FirstMap = {state: set() for state in self._rules}
		passes: List[PassLog] = []

		changed = True
		while changed:
			changes: Dict[str, Set[str]] = {state: set() for state in self._rules}
			for state, rules in self._rules.items():
				target = first[state]
				if self._accepts[state]:
					changes[state] |= _union(target, {EPSILON})

				for rule in rules:
					candidates, vanishes = self._first_candidates(rule)
					for symbol in candidates:
						if isinstance(symbol, Terminal):
							changes[state] |= _union(target, {symbol.first_char})
						elif symbol.name in first:
							changes[state] |= _union(target, first[symbol.name] - {EPSILON})
					if vanishes:
						changes[state] |= _union(target, {EPSILON})
			changed = _close_pass(changes, passes)

		logger.debug("FIRST reached a fixpoint after %d changing pass(es)", len(passes))
		return first, passes

	# ------------------------------------------------------------------
	# FOLLOW

	def follow_set(self) -> FollowMap:
		follow, _ = self.follow_set_with_trace()
		return follow

	def follow_set_with_trace(self) -> Tuple[FollowMap, List[PassLog]]:
		"""
		Compute FOLLOW sets and also return an iteration log.
		The first logged pass is the seed pass (end marker plus adjacent symbols);
		the remaining ones come from propagation until nothing grows.
		"""
		first = self.first_set()
		follow: FollowMap = {state: set() for state in self._rules}
		passes: List[PassLog] = []

		seed: Dict[str, Set[str]] = {state: set() for state in self._rules}
		seed[self._initial] |= _union(follow[self._initial], {END_MARKER})
		for rules in self._rules.values():
			for rule in rules:
				for current, following in zip(rule, rule[1:]):
					if not isinstance(current, NonTerminal) or current.name not in follow:
						continue
					if isinstance(following, Terminal):
						chars = {following.first_char}
					else:
						chars = first.get(following.name, set()) - {EPSILON}
					seed[current.name] |= _union(follow[current.name], chars)
		_close_pass(seed, passes)

		changed = True
		while changed:
			changes: Dict[str, Set[str]] = {state: set() for state in self._rules}
			for state, rules in self._rules.items():
				for rule in rules:
					for current, following in zip(rule, rule[1:]):
						if not (isinstance(current, NonTerminal) and isinstance(following, NonTerminal)):
							continue
						if current.name in follow and following.name in follow:
							changes[current.name] |= _union(follow[current.name], follow[following.name])

					# A ::= ...XY with eps in FIRST(Y): FOLLOW(A) flows into Y and X.
					for symbol in reversed(rule):
						if not isinstance(symbol, NonTerminal):
							break
						if symbol.name in follow:
							changes[symbol.name] |= _union(follow[symbol.name], follow[state])
						if EPSILON not in first.get(symbol.name, ()):
							break
			changed = _close_pass(changes, passes)

		logger.debug("FOLLOW reached a fixpoint after %d logged pass(es)", len(passes))
		return follow, passes

	# ------------------------------------------------------------------
	# Rendering

	def render_state(self, state: str) -> str:
		"""Render one state as ``<name> ::= alt | alt [| <>]``.

		Adjacent terminals are written back to back, so a rule such as ``(a, b)``
		reads back as the single terminal ``ab``. The text and the FIRST/FOLLOW
		sets survive a round trip, the exact rule structure may not.
		"""
		alternatives = ["".join(str(symbol) for symbol in rule) for rule in self.rules_of(state)]
		line = f"<{state}> ::= " + " | ".join(alternatives)
		if self._accepts[state]:
			line += " | <>"
		return line

	def display_order(self) -> List[str]:
		"""Initial state first, then the rest sorted by name."""
		return [self._initial] + sorted(state for state in self._rules if state != self._initial)

	def render(self) -> str:
		return "".join(self.render_state(state) + "\n" for state in self.display_order())

	def __str__(self) -> str:
		return self.render()
