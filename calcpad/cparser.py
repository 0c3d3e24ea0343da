# Recursive descent parser for math expressions.
#
# expr    := term (('+' | '-') term)*
# term    := unary (('*' | '/') unary)*
# unary   := ('-' | '+') unary | power
# power   := primary ('^' unary)?                      - right associative, '-2^2' is '-(2^2)'
# primary := NUM | IDENT '(' [expr (',' expr)*] ')' | IDENT | '(' expr ')'

import os
import sys

from .cast import AST, CalcError
from . import clex

_MAX_DEPTH  = 100 # nesting of parentheses, signs and exponents
_MAX_HEIGHT = 200 # height of the resulting tree, long operator chains nest to the left

class ParseError (CalcError):
	def __init__ (self, msg, pos):
		CalcError.__init__ (self, msg)

		self.msg = msg
		self.pos = pos

#...............................................................................................
class Parser:
	def __init__ (self, lexer = None):
		self.lexer  = lexer or clex._LEXER
		self.tokens = []
		self.tokidx = 0
		self.depth  = 0

	@property
	def tok (self):
		return self.tokens [self.tokidx]

	def advance (self):
		tok          = self.tokens [self.tokidx]
		self.tokidx += 1

		return tok

	def error (self, msg, tok):
		return ParseError (msg, tok.pos)

	def node (self, *args, **kw): # parsed AST node with its tree height checked
		ast = AST (*args, **kw)

		if ast.height > _MAX_HEIGHT:
			raise self.error ('expression nested too deeply', self.tok)

		return ast

	def unexpected (self, tok):
		if tok == '$end':
			return self.error ('unexpected end of input', tok)
		elif tok == 'UNKNOWN':
			return self.error (f'unrecognized character {tok.text!r}', tok)

		return self.error (f'unexpected token {tok.text!r}', tok)

	#...............................................................................................
	def expr (self):
		ast = self.term ()

		while self.tok in {'PLUS', 'MINUS'}:
			op  = self.advance ().text
			rhs = self.term ()
			ast = self.node ('-bin', op, ast, rhs, pos = ast.pos, end = rhs.end)

		return ast

	def term (self):
		ast = self.unary ()

		while self.tok in {'STAR', 'DIVIDE'}:
			op  = self.advance ().text
			rhs = self.unary ()
			ast = self.node ('-bin', op, ast, rhs, pos = ast.pos, end = rhs.end)

		return ast

	def unary (self): # every recursion passes through here
		if self.depth >= _MAX_DEPTH:
			raise self.error ('expression nested too deeply', self.tok)

		self.depth += 1

		try:
			return self._unary ()
		finally:
			self.depth -= 1

	def _unary (self):
		if self.tok == 'MINUS':
			tok     = self.advance ()
			operand = self.unary ()

			return self.node ('-unary', '-', operand, pos = tok.pos, end = operand.end)

		if self.tok == 'PLUS': # identity, dropped
			self.advance ()

			return self.unary ()

		return self.power ()

	def power (self):
		base = self.primary ()

		if self.tok != 'CARET':
			return base

		self.advance ()

		exp = self.unary ()

		return self.node ('-bin', '^', base, exp, pos = base.pos, end = exp.end)

	def primary (self):
		tok = self.tok

		if tok == 'NUM':
			self.advance ()

			return AST ('#', tok.text, pos = tok.pos, end = tok.end)

		if tok == 'IDENT':
			self.advance ()

			if self.tok != 'PARENL':
				return AST ('@', tok.text, pos = tok.pos, end = tok.end)

			self.advance ()

			args, end = self.args ()

			return self.node ('-func', tok.text, tuple (args), pos = tok.pos, end = end)

		if tok == 'PARENL':
			self.advance ()

			ast = self.expr ()

			self.close_paren ()

			return ast

		raise self.unexpected (tok)

	def args (self): # opening paren already consumed, returns (args, end of closing paren)
		args = []

		if self.tok == 'PARENR':
			return args, self.advance ().end

		while 1:
			if self.tok in {'COMMA', 'PARENR'}:
				raise self.error ('empty argument in function call', self.tok)

			args.append (self.expr ())

			if self.tok == 'COMMA':
				self.advance ()
			else:
				return args, self.close_paren ()

	def close_paren (self):
		tok = self.tok

		if tok == 'PARENR':
			return self.advance ().end

		if tok == '$end':
			raise self.error ('missing closing parenthesis', tok)

		raise self.unexpected (tok)

	#...............................................................................................
	def parse (self, text):
		"""Parse text into an AST. Returns (ast, None, None) on success or
		(None, erridx, ParseError) on failure, errors are never raised from here.
		"""

		self.tokens, comments = self.lexer.tokenize (text)
		self.tokidx           = 0
		self.depth            = 0

		try:
			ast = self.expr ()
			tok = self.tok

			if tok != '$end':
				if tok == 'UNKNOWN':
					raise self.unexpected (tok)

				raise self.error ('unexpected token after expression', tok)

		except ParseError as e:
			if os.environ.get ('CALCPAD_DEBUG'):
				print ('parse error:', repr (text), e.pos, e.msg, file = sys.stderr)

			return None, e.pos, e

		if os.environ.get ('CALCPAD_DEBUG'):
			print ('parse:', repr (text), '->', ast, f'({len (comments)} comments)', file = sys.stderr)

		return ast, None, None

def parse_ast (text):
	ast, _, err = Parser ().parse (text)

	if err:
		raise err

	return ast
