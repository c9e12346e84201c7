from formalgrammar import NonTerminal, Symbol, Terminal


def test_terminal_renders_literal_text():
	t = Terminal("if x")
	assert str(t) == "if x"
	assert t.is_terminal()
	assert not t.is_nonterminal()
	assert t.first_char == "i"


def test_nonterminal_renders_in_angle_brackets():
	nt = NonTerminal("Expr")
	assert str(nt) == "<Expr>"
	assert nt.is_nonterminal()
	assert not nt.is_terminal()


def test_equality_is_structural_and_variant_aware():
	assert Terminal("a") == Terminal("a")
	assert NonTerminal("A") == NonTerminal("A")
	assert Terminal("A") != NonTerminal("A")
	assert len({Terminal("a"), Terminal("a"), NonTerminal("a")}) == 2
	assert isinstance(Terminal("a"), Symbol)
