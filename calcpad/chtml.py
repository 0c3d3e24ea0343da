# Syntax highlighting html printer, merges the parser token stream and the comment side channel by position.

import html

from . import clex
from .cparser import Parser
from .crender import ast2tree

_TOKEN_CLASSES = {
	'NUM'    : 'syntax_number',
	'IDENT'  : 'syntax_variable', # 'syntax_function' when called
	'PLUS'   : 'syntax_operator',
	'MINUS'  : 'syntax_operator',
	'STAR'   : 'syntax_operator',
	'DIVIDE' : 'syntax_operator',
	'CARET'  : 'syntax_operator',
	'PARENL' : 'syntax_paren',
	'PARENR' : 'syntax_paren',
	'COMMA'  : 'syntax_comma',
	'COMMENT': 'syntax_comment',
	'UNKNOWN': 'syntax_unknown',
}

def _span (cls, text):
	return f"<span class='{cls}'>{html.escape (text)}</span>"

def tokens2html (text, tokens, erridx = None, error = None):
	"""Highlight text from its full token list (comments included). If erridx
	is given then everything from that position on is wrapped in a single
	error span carrying the error message as its title.
	"""

	out    = []
	pos    = 0
	called = set () # indexes of identifiers followed by '(', comments in between do not count
	prev   = None

	for i, tok in enumerate (tokens):
		if tok != 'COMMENT':
			if tok == 'PARENL' and prev is not None and tokens [prev] == 'IDENT':
				called.add (prev)

			prev = i

	for i, tok in enumerate (tokens):
		if tok == '$end' or (erridx is not None and tok.pos >= erridx):
			break

		out.append (html.escape (text [pos : tok.pos]))
		out.append (_span ('syntax_function' if i in called else _TOKEN_CLASSES [tok], tok.text))

		pos = tok.end

	if erridx is not None:
		out.append (html.escape (text [pos : erridx]))

		rest = []
		pos  = erridx

		for tok in tokens: # comments inside the unconsumed remainder keep their own class
			if tok == 'COMMENT' and tok.pos >= erridx:
				rest.append (html.escape (text [pos : tok.pos]))
				rest.append (_span ('syntax_comment', tok.text))

				pos = tok.end

		rest.append (html.escape (text [pos:]))

		title = html.escape ('' if error is None else str (error))

		out.append (f"<span class='syntax_error' title='{title}'>{''.join (rest)}</span>")

	else:
		out.append (html.escape (text [pos:]))

	return f"<span class='syntax_expression'>{''.join (out)}</span>"

def tree2html (ast):
	return f"<span class='tree_syntax'>{ast2tree (ast, html = True)}</span>"

def render_html (text):
	"""Full lex and parse of text to highlighted html. Never raises for any
	input, a parse failure yields the highlighted prefix and an error span.
	"""

	ast, erridx, err = Parser ().parse (text)
	out              = tokens2html (text, clex.scan (text), erridx, err)

	if ast is not None:
		out = f'{out}\n{tree2html (ast)}'

	return out

pares_and_print_html = render_html
