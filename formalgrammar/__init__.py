"""Context-free grammar notation parser with FIRST/FOLLOW set computation."""

from formalgrammar.errors import GrammarError, UnknownStateError
from formalgrammar.grammar import (
	DEFAULT_INITIAL,
	END_MARKER,
	EPSILON,
	FirstMap,
	FollowMap,
	Grammar,
	PassLog,
	Rule,
)
from formalgrammar.parser import GrammarParser, ParserState
from formalgrammar.symbol import NonTerminal, Symbol, Terminal

__all__ = [
	"DEFAULT_INITIAL",
	"END_MARKER",
	"EPSILON",
	"FirstMap",
	"FollowMap",
	"Grammar",
	"GrammarError",
	"GrammarParser",
	"NonTerminal",
	"ParserState",
	"PassLog",
	"Rule",
	"Symbol",
	"Terminal",
	"UnknownStateError",
]
