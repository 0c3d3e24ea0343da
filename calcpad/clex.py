# Tokenizer for math expressions, comments are split off into a side channel keyed by position.

import re

from collections import OrderedDict

#...............................................................................................
class Token (str):
	__slots__ = ['text', 'pos']

	def __new__ (cls, str_, text = None, pos = None):
		self      = str.__new__ (cls, str_)
		self.text = text or ''
		self.pos  = pos

		return self

	@property
	def end (self):
		return self.pos + len (self.text)

	def __repr__ (self):
		return f'Token ({str.__repr__ (self)}, {self.text!r}, {self.pos})'

class Comment (tuple): # (pos, end, text)
	def __new__ (cls, pos, text):
		return tuple.__new__ (cls, (pos, pos + len (text), text))

	pos  = property (lambda self: self [0])
	end  = property (lambda self: self [1])
	text = property (lambda self: self [2])

#...............................................................................................
class Lexer:
	TOKENS = OrderedDict ([ # order matters, comments must come before DIVIDE
		('COMMENT', r'/\*[\s\S]*?(?:\*/|\Z)|//[^\n]*'), # unterminated block comment runs to end of text
		('NUM',     r'\d*\.\d+|\d+\.?'),
		('IDENT',   r'[^\W\d]\w*'),
		('PLUS',    r'\+'),
		('MINUS',   r'-'),
		('STAR',    r'\*'),
		('DIVIDE',  r'/'),
		('CARET',   r'\^'),
		('PARENL',  r'\('),
		('PARENR',  r'\)'),
		('COMMA',   r','),
		('ignore',  r'\s+'),
		('UNKNOWN', r'.'),
	])

	def __init__ (self):
		self.set_tokens (self.TOKENS)

	def set_tokens (self, tokens):
		self.tokre  = '|'.join (f'(?P<{tok}>{pat})' for tok, pat in tokens.items ())
		self.tokrec = re.compile (self.tokre)

	def scan (self, text): # all tokens in source order including comments, no '$end'
		tokens = []
		end    = len (text)
		pos    = 0

		while pos < end:
			m   = self.tokrec.match (text, pos)
			tok = m.lastgroup

			if tok != 'ignore':
				tokens.append (Token (tok, m.group (0), pos))

			pos = m.end ()

		return tokens

	def tokenize (self, text):
		"""Split text into the token stream the parser consumes, terminated by
		a '$end' token, and the ordered list of comments that were stripped
		out of it. Never fails, unrecognized characters come out as 'UNKNOWN'
		tokens for the parser to reject.
		"""

		tokens   = []
		comments = []

		for tok in self.scan (text):
			if tok == 'COMMENT':
				comments.append (Comment (tok.pos, tok.text))
			else:
				tokens.append (tok)

		tokens.append (Token ('$end', '', len (text)))

		return tokens, comments

_LEXER = Lexer ()

def scan (text):
	return _LEXER.scan (text)

def tokenize (text):
	return _LEXER.tokenize (text)
