# AST and token stream -> text at selectable levels.

import html

import sympy as sp

from .cast import AST, CalcError
from . import clex
from .cparser import parse_ast

LEVELS  = {
	1: 'token dump',
	2: 'fully parenthesized',
	3: 'minimal parentheses',
	4: 'syntax tree',
	5: 'LaTeX',
}

_PREC   = {'+': 1, '-': 1, '*': 2, '/': 2, '^': 4} # unary minus sits at 3, atoms at 5

INDENT  = '|   '

class RenderError (CalcError):
	pass

def _prec (ast):
	return _PREC [ast.bop] if ast.is_bin else 3 if ast.is_unary else 5

def _bad_node (self, ast):
	raise RenderError (f'cannot render node {ast.op!r}')

#...............................................................................................
class _ast2text: # abstract syntax tree -> text, dispatch common to textual printers
	_funcs = {}

	def __new__ (cls, ast):
		self = super ().__new__ (cls)

		return self._ast2text (ast)

	def _ast2text (self, ast):
		return self._funcs.get (ast.op, _bad_node) (self, ast)

class ast2paren (_ast2text): # every operation wrapped in parentheses, associativity and precedence made explicit
	_funcs = {
		'#'     : lambda self, ast: ast.num,
		'@'     : lambda self, ast: ast.var,
		'-unary': lambda self, ast: f'({ast.uop}{self._ast2text (ast.operand)})',
		'-bin'  : lambda self, ast: f'({self._ast2text (ast.lhs)}{ast.bop}{self._ast2text (ast.rhs)})',
		'-func' : lambda self, ast: f'{ast.func}({",".join (self._ast2text (a) for a in ast.args)})',
	}

class ast2nat (_ast2text): # natural text with only the parentheses needed to reparse to the same tree
	def _ast2nat_wrap (self, ast, paren):
		s = self._ast2text (ast)

		return f'({s})' if paren else s

	def _ast2nat_unary (self, ast):
		return f'{ast.uop}{self._ast2nat_wrap (ast.operand, _prec (ast.operand) < 3)}'

	def _ast2nat_bin (self, ast):
		p = _PREC [ast.bop]

		if ast.bop == '^':
			return f'{self._ast2nat_wrap (ast.lhs, _prec (ast.lhs) <= 4)}^{self._ast2nat_wrap (ast.rhs, _prec (ast.rhs) < 3)}'

		return f'{self._ast2nat_wrap (ast.lhs, _prec (ast.lhs) < p)} {ast.bop} {self._ast2nat_wrap (ast.rhs, _prec (ast.rhs) <= p)}'

	_funcs = {
		'#'     : lambda self, ast: ast.num,
		'@'     : lambda self, ast: ast.var,
		'-unary': _ast2nat_unary,
		'-bin'  : _ast2nat_bin,
		'-func' : lambda self, ast: f'{ast.func}({", ".join (self._ast2text (a) for a in ast.args)})',
	}

class ast2tree: # indented syntax tree, node labels optionally wrapped for html
	def __new__ (cls, ast, html = False):
		self      = super ().__new__ (cls)
		self.html = html

		return self._ast2tree (ast, 0)

	def _node (self, name):
		return f"<span class='tree_syntax_node'>{html.escape (name)}</span>" if self.html else name

	def _ast2tree (self, ast, level):
		if ast.is_num:
			head = f'+Number {self._node (ast.num)}'
		elif ast.is_var:
			head = f'+Variable {self._node (ast.var)}'
		elif ast.is_unary:
			head = f'+Unary {self._node (ast.uop)}'
		elif ast.is_bin:
			head = f'+Binary {self._node (ast.bop)}'
		elif ast.is_func:
			head = f'+Function {self._node (ast.func)}: {len (ast.args)}'
		else:
			_bad_node (self, ast)

		lines = [head] + [INDENT * level + '+---' + self._ast2tree (c, level + 1) for c in ast.children]

		return '\n'.join (lines)

#...............................................................................................
class ast2spt: # abstract syntax tree -> unevaluated sympy tree (expression)
	_SPT_FUNCS = {
		'abs': sp.Abs, 'ceil': sp.ceiling, 'floor': sp.floor, 'sqrt': sp.sqrt, 'sqr': sp.sqrt, 'cbrt': sp.cbrt, 'exp': sp.exp,
		'ln': sp.log, 'log': sp.log, 'sin': sp.sin, 'cos': sp.cos, 'tan': sp.tan, 'cot': sp.cot, 'sec': sp.sec, 'csc': sp.csc,
		'asin': sp.asin, 'acos': sp.acos, 'atan': sp.atan, 'acot': sp.acot, 'asec': sp.asec, 'acsc': sp.acsc,
		'arcsin': sp.asin, 'arccos': sp.acos, 'arctan': sp.atan, 'arccot': sp.acot, 'arcsec': sp.asec, 'arccsc': sp.acsc,
		'sinh': sp.sinh, 'cosh': sp.cosh, 'tanh': sp.tanh, 'coth': sp.coth, 'sech': sp.sech, 'csch': sp.csch,
		'asinh': sp.asinh, 'acosh': sp.acosh, 'atanh': sp.atanh, 'acoth': sp.acoth, 'asech': sp.asech, 'acsch': sp.acsch,
	} # single argument functions with a sympy counterpart, everything else becomes an undefined function

	_SPT_CONSTS = {'pi': sp.pi, 'e': sp.E}

	def __new__ (cls, ast):
		self = super ().__new__ (cls)

		return self._ast2spt (ast)

	def _ast2spt (self, ast):
		return self._ast2spt_funcs.get (ast.op, _bad_node) (self, ast)

	def _ast2spt_num (self, ast):
		try:
			return sp.Integer (ast.num) if ast.is_num_int else sp.Float (ast.num)
		except ValueError: # beyond the interpreter's integer string conversion limit
			raise RenderError (f'number too long for LaTeX output ({len (ast.num)} digits)') from None

	def _ast2spt_bin (self, ast):
		lhs, rhs = self._ast2spt (ast.lhs), self._ast2spt (ast.rhs)

		if ast.bop == '+':
			return sp.Add (lhs, rhs, evaluate = False)
		elif ast.bop == '-':
			return sp.Add (lhs, sp.Mul (sp.S.NegativeOne, rhs, evaluate = False), evaluate = False)
		elif ast.bop == '*':
			return sp.Mul (lhs, rhs, evaluate = False)
		elif ast.bop == '/':
			return sp.Mul (lhs, sp.Pow (rhs, sp.S.NegativeOne, evaluate = False), evaluate = False)

		return sp.Pow (lhs, rhs, evaluate = False)

	def _ast2spt_func (self, ast):
		args = [self._ast2spt (a) for a in ast.args]
		func = self._SPT_FUNCS.get (ast.func)

		if func and len (args) == 1:
			return func (*args, evaluate = False)

		return sp.Function (ast.func) (*args)

	_ast2spt_funcs = {
		'#'     : _ast2spt_num,
		'@'     : lambda self, ast: ast2spt._SPT_CONSTS [ast.var] if ast.var in ast2spt._SPT_CONSTS else sp.Symbol (ast.var),
		'-unary': lambda self, ast: sp.Mul (sp.S.NegativeOne, self._ast2spt (ast.operand), evaluate = False),
		'-bin'  : _ast2spt_bin,
		'-func' : _ast2spt_func,
	}

def ast2tex (ast):
	try:
		return sp.latex (ast2spt (ast))
	except RecursionError:
		raise RenderError ('expression nested too deeply for LaTeX output') from None

#...............................................................................................
def tokens2dump (tokens): # one line per token: kind, span and text
	return '\n'.join (f'{tok:<8} {tok.pos}:{tok.end} {tok.text!r}' for tok in tokens if tok != '$end')

_LEVEL_FUNCS = {
	2: ast2paren,
	3: ast2nat,
	4: ast2tree,
	5: ast2tex,
}

def _check_level (level):
	if level not in LEVELS:
		raise RenderError (f'invalid level {level!r}, valid levels are {min (LEVELS)}..{max (LEVELS)}')

def render (obj, level):
	"""Render an AST (levels 2..5) or a token list (level 1) to text. A plain
	string is first scanned or parsed as the level requires.
	"""

	_check_level (level)

	if level == 1:
		return tokens2dump (clex.scan (obj) if isinstance (obj, str) else obj)

	if not isinstance (obj, AST):
		obj = parse_ast (obj)

	return _LEVEL_FUNCS [level] (obj)

def parse (text, level):
	return render (text, level)
