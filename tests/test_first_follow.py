import pytest

from formalgrammar import END_MARKER, EPSILON, Grammar


EXPRESSION = "\n".join([
	"<S> ::= <T><E>",
	"<E> ::= +<T><E> | <>",
	"<T> ::= <F><Y>",
	"<Y> ::= *<F><Y> | <>",
	"<F> ::= (<S>) | i",
])


def test_terminal_then_nullable_state():
	g = Grammar.from_source("<S> ::= a<A>\n<A> ::= b | <>")
	assert g.first_set() == {"S": {"a"}, "A": {"b", EPSILON}}
	assert g.follow_set() == {"S": {END_MARKER}, "A": {END_MARKER}}


def test_nullable_prefix_exposes_following_terminal():
	g = Grammar.from_source("<S> ::= <A>b<B>\n<A> ::= a | <>\n<B> ::= c")
	first = g.first_set()
	follow = g.follow_set()

	assert first["S"] == {"a", "b"}
	assert first["A"] == {"a", EPSILON}
	assert first["B"] == {"c"}
	assert follow["A"] == {"b"}
	assert follow["B"] == {END_MARKER}
	assert follow["S"] == {END_MARKER}


def test_empty_grammar():
	g = Grammar.from_source("")
	assert g.first_set() == {"S": set()}
	assert g.follow_set() == {"S": {END_MARKER}}


def test_epsilon_alternative_puts_sentinel_in_first():
	g = Grammar.from_source("<A> ::= a<B> | <>\n<B> ::= b")
	assert g.accepts_empty("A")
	assert g.first_set()["A"] == {"a", EPSILON}


def test_nullable_state_without_rules_has_epsilon_first():
	g = Grammar.from_source("<S> ::= x<A>\n<A> ::= <>")
	assert g.first_set()["A"] == {EPSILON}
	assert g.follow_set()["A"] == {END_MARKER}


def test_expression_grammar():
	g = Grammar.from_source(EXPRESSION)

	assert g.first_set() == {
		"S": {"(", "i"},
		"E": {"+", EPSILON},
		"T": {"(", "i"},
		"Y": {"*", EPSILON},
		"F": {"(", "i"},
	}
	assert g.follow_set() == {
		"S": {END_MARKER, ")"},
		"E": {END_MARKER, ")"},
		"T": {"+", END_MARKER, ")"},
		"Y": {"+", END_MARKER, ")"},
		"F": {"*", "+", END_MARKER, ")"},
	}


def test_chain_of_nullable_states():
	g = Grammar.from_source("<S> ::= <A><B>c\n<A> ::= a | <>\n<B> ::= b | <>")
	assert g.first_set()["S"] == {"a", "b", "c"}
	follow = g.follow_set()
	assert follow["A"] == {"b", "c"}
	assert follow["B"] == {"c"}


def test_rule_made_only_of_nullable_states_is_nullable():
	g = Grammar.from_source("<S> ::= <A><B>\n<A> ::= a | <>\n<B> ::= b | <>")
	assert g.first_set()["S"] == {"a", "b", EPSILON}
	follow = g.follow_set()
	assert follow["B"] == {END_MARKER}
	assert follow["A"] == {"b", END_MARKER}


def test_only_first_character_of_terminal_counts():
	g = Grammar.from_source("<S> ::= if<A>\n<A> ::= then<S> | else")
	assert g.first_set() == {"S": {"i"}, "A": {"t", "e"}}
	assert g.follow_set() == {"S": {END_MARKER}, "A": {END_MARKER}}


def test_undeclared_reference_contributes_nothing():
	g = Grammar.from_source("<S> ::= <X>a | b<X>")
	assert g.first_set() == {"S": {"b"}}
	assert g.follow_set() == {"S": {END_MARKER}}


@pytest.mark.parametrize("source", [
	"",
	"<S> ::= <A>\n<A> ::= a<S> | <>",
	"<A> ::= a\n<B> ::= b",
	EXPRESSION,
])
def test_follow_of_initial_always_has_end_marker(source):
	g = Grammar.from_source(source)
	assert END_MARKER in g.follow_set()[g.initial]


def test_computation_is_idempotent():
	g = Grammar.from_source(EXPRESSION)
	assert g.first_set() == g.first_set()
	assert g.follow_set() == g.follow_set()


def test_results_are_fresh_copies():
	g = Grammar.from_source("<S> ::= a")
	first = g.first_set()
	first["S"].add("z")
	assert g.first_set() == {"S": {"a"}}


def test_first_trace_logs_new_characters_per_pass():
	g = Grammar.from_source("<S> ::= a<A>\n<A> ::= b | <>")
	first, passes = g.first_set_with_trace()
	assert first == g.first_set()
	assert passes == [{"S": ["a"], "A": ["b", EPSILON]}]


def test_follow_trace_starts_with_seed_pass():
	g = Grammar.from_source("<S> ::= a<A>\n<A> ::= b | <>")
	follow, passes = g.follow_set_with_trace()
	assert follow == g.follow_set()
	assert passes == [
		{"S": [END_MARKER], "A": []},
		{"S": [], "A": [END_MARKER]},
	]


def test_fixpoint_passes_only_ever_add():
	g = Grammar.from_source(EXPRESSION)
	for sets, passes in (g.first_set_with_trace(), g.follow_set_with_trace()):
		for state, final in sets.items():
			added = [c for p in passes for c in p[state]]
			# each character appears once and nothing disappears afterwards
			assert len(added) == len(set(added))
			assert set(added) == final
