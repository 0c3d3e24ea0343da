# Real valued numeric evaluation of AST and Plot () sampling.

import math
import os
import sys

from .cast import CalcError

_PLOT_XMIN     = -10.
_PLOT_XMAX     = 10.
_PLOT_SAMPLES  = 201 # odd so that x = 0 is sampled on a symmetric domain

_EPSILON       = 1e-9 # for zero ()

_DEFAULT_VARS  = {'x': 0., 'T': 0., 'pi': math.pi, 'e': math.e, 'tau': math.tau}

class EvaluationError (CalcError):
	pass

class DomainError (EvaluationError): # mathematically undefined operation
	pass

class UnknownFunctionError (EvaluationError):
	pass

class UnboundVariableError (EvaluationError):
	pass

#...............................................................................................
def _recip (x):
	return 1. / x

def _arccot (x):
	return math.pi / 2 if x == 0 else math.atan (1. / x)

def _cbrt (x):
	return math.copysign (abs (x) ** (1. / 3), x)

def _round (x): # half away from zero, not banker's rounding
	return math.copysign (math.floor (abs (x) + .5), x)

def _log (base, x):
	return math.log (x, base)

def _zero (x):
	return 1. if -_EPSILON < x < _EPSILON else 0.

def _pow (base, exp):
	if base == 0 and exp < 0:
		raise DomainError ('division by zero')

	if base < 0 and not float (exp).is_integer ():
		raise DomainError ('fractional power of negative base')

	return float (base) ** exp

FUNCS = {} # {'name': {nargs: func, ...}, ...}

def _register (names, func, nargs = 1):
	for name in names.split ('/'):
		FUNCS.setdefault (name, {}) [nargs] = func

for _names, _func in (
		('abs/absolute', abs),
		('neg/negative', lambda x: -x),
		('round', _round),
		('ceil', lambda x: float (math.ceil (x))),
		('floor/int', lambda x: float (math.floor (x))),
		('sin', math.sin),
		('cos', math.cos),
		('tan', math.tan),
		('cot', lambda x: math.cos (x) / math.sin (x)),
		('sec', lambda x: _recip (math.cos (x))),
		('csc', lambda x: _recip (math.sin (x))),
		('asin/arcsin', math.asin),
		('acos/arccos', math.acos),
		('atan/arctan', math.atan),
		('acot/arccot', _arccot),
		('asec/arcsec', lambda x: math.acos (_recip (x))),
		('acsc/arccsc', lambda x: math.asin (_recip (x))),
		('sinh', math.sinh),
		('cosh', math.cosh),
		('tanh', math.tanh),
		('coth', lambda x: _recip (math.tanh (x))),
		('sech', lambda x: _recip (math.cosh (x))),
		('csch', lambda x: _recip (math.sinh (x))),
		('asinh/arcsinh', math.asinh),
		('acosh/arccosh', math.acosh),
		('atanh/arctanh', math.atanh),
		('acoth/arccoth', lambda x: math.atanh (_recip (x))),
		('asech/arcsech', lambda x: math.acosh (_recip (x))),
		('acsch/arccsch', lambda x: math.asinh (_recip (x))),
		('todegree/raddegree', math.degrees),
		('torad/degreerad', math.radians),
		('square', lambda x: x * x),
		('cube', lambda x: x * x * x),
		('sqrt/sqr', math.sqrt),
		('cbrt/cbr', _cbrt),
		('exp', math.exp),
		('log10', math.log10),
		('ln/loge/log', math.log),
		('log2', math.log2),
		('zero', _zero),
		):
	_register (_names, _func, 1)

for _names, _func in (
		('add/plus', lambda x, y: x + y),
		('minus/substract', lambda x, y: x - y),
		('multiply/dot', lambda x, y: x * y),
		('divide/devide/frac', lambda x, y: x / y),
		('atan2/arctan2/atan/arctan', math.atan2),
		('pow/power', _pow),
		('log/logarithm', _log),
		):
	_register (_names, _func, 2)

#...............................................................................................
def _call (where, func, *args): # translate python numeric exceptions and non-finite results to evaluation errors
	try:
		res = float (func (*args))

	except ZeroDivisionError:
		raise DomainError (f'division by zero in {where}') from None

	except ValueError:
		raise DomainError (f'math domain error in {where}') from None

	except OverflowError:
		raise EvaluationError (f'numeric overflow in {where}') from None

	if not math.isfinite (res) and all (math.isfinite (a) for a in args): # float arithmetic overflows silently to inf and nan
		if math.isnan (res):
			raise DomainError (f'undefined result in {where}')

		raise EvaluationError (f'numeric overflow in {where}')

	return res

class ast2num: # abstract syntax tree -> float
	def __new__ (cls, ast, vars):
		self      = super ().__new__ (cls)
		self.vars = vars

		return self._ast2num (ast)

	def _ast2num (self, ast):
		func = self._ast2num_funcs.get (ast.op)

		if func is None:
			raise EvaluationError (f'cannot evaluate node {ast.op!r}')

		return func (self, ast)

	def _ast2num_num (self, ast):
		if not math.isfinite (ast.as_float):
			raise EvaluationError (f'number literal too large ({len (ast.num)} characters)')

		return ast.as_float

	def _ast2num_var (self, ast):
		val = self.vars.get (ast.var)

		if val is None:
			raise UnboundVariableError (f'variable {ast.var!r} is not defined')

		return val

	def _ast2num_unary (self, ast):
		return -self._ast2num (ast.operand)

	_ast2num_binops = {
		'+': lambda l, r: l + r,
		'-': lambda l, r: l - r,
		'*': lambda l, r: l * r,
		'/': lambda l, r: l / r,
		'^': _pow,
	}

	def _ast2num_bin (self, ast):
		lhs = self._ast2num (ast.lhs)
		rhs = self._ast2num (ast.rhs)

		return _call (f"operator '{ast.bop}'", self._ast2num_binops [ast.bop], lhs, rhs)

	def _ast2num_func (self, ast):
		if ast.is_plot:
			raise EvaluationError ('Plot is only allowed as the outermost expression')

		funcs = FUNCS.get (ast.func)

		if funcs is None:
			raise UnknownFunctionError (f'unknown function {ast.func!r}')

		func = funcs.get (len (ast.args))

		if func is None:
			nargs = ' or '.join (str (n) for n in sorted (funcs))

			raise EvaluationError (f'{ast.func} () takes {nargs} argument{"s" if nargs != "1" else ""}, got {len (ast.args)}')

		return _call (f'{ast.func} ()', func, *(self._ast2num (a) for a in ast.args))

	_ast2num_funcs = {
		'#'     : _ast2num_num,
		'@'     : _ast2num_var,
		'-unary': _ast2num_unary,
		'-bin'  : _ast2num_bin,
		'-func' : _ast2num_func,
	}

#...............................................................................................
class Curve (tuple): # ((x0, y0), (x1, y1), ...), y is None where the expression is undefined
	def __new__ (cls, points, expr = None, xmin = None, xmax = None):
		self      = tuple.__new__ (cls, points)
		self.expr = expr
		self.xmin = xmin
		self.xmax = xmax

		return self

	xs = property (lambda self: [p [0] for p in self])
	ys = property (lambda self: [p [1] for p in self])

	def __repr__ (self):
		return f'Curve ({len (self)} samples, x = {self.xmin}..{self.xmax})'

def _plot (ast, vars):
	args = ast.args

	if not 1 <= len (args) <= 3:
		raise EvaluationError (f'Plot () takes 1 to 3 arguments, got {len (args)}')

	expr   = args [0]
	limits = [ast2num (a, vars) for a in args [1:]]

	if not limits:
		xmin, xmax = _PLOT_XMIN, _PLOT_XMAX
	elif len (limits) == 1:
		xmin, xmax = -limits [0], limits [0]
	else:
		xmin, xmax = limits

	if not xmin < xmax:
		raise EvaluationError (f'empty plot domain {xmin}..{xmax}')

	n      = _PLOT_SAMPLES
	points = []

	for i in range (n):
		x = xmin + (xmax - xmin) * i / (n - 1)

		try:
			y = ast2num (expr, {**vars, 'x': x})
		except DomainError:
			y = None

		points.append ((x, y))

	return Curve (points, expr, xmin, xmax)

def evaluate (ast, vars = None):
	"""Evaluate an AST to a float, or to a Curve if the root is a Plot () call.

Caller vars override the default variables (x, T, pi, e, tau). Raises
EvaluationError or one of its subclasses on failure.
	"""

	vars = {**_DEFAULT_VARS, **{name: float (val) for name, val in (vars or {}).items ()}}

	if ast.is_func and ast.is_plot:
		res = _plot (ast, vars)
	else:
		res = ast2num (ast, vars)

	if os.environ.get ('CALCPAD_DEBUG'):
		print ('evaluate:', ast, '->', res, file = sys.stderr)

	return res

def num2str (num): # integral values print without a fraction
	return str (int (num)) if num.is_integer () and abs (num) < 1e15 else '%.15g' % num

def result2str (res):
	if isinstance (res, Curve):
		return f'Plot: {len (res)} samples, x = {num2str (res.xmin)}..{num2str (res.xmax)}'

	return num2str (res)

#...............................................................................................
def set_plot_domain (xmin = None, xmax = None, samples = None):
	global _PLOT_XMIN, _PLOT_XMAX, _PLOT_SAMPLES

	xmin    = _PLOT_XMIN if xmin is None else float (xmin)
	xmax    = _PLOT_XMAX if xmax is None else float (xmax)
	samples = _PLOT_SAMPLES if samples is None else int (samples)

	if not xmin < xmax:
		raise ValueError (f'invalid plot domain {xmin}..{xmax}')

	if samples < 2:
		raise ValueError ('plot needs at least 2 samples')

	_PLOT_XMIN, _PLOT_XMAX, _PLOT_SAMPLES = xmin, xmax, samples

def get_plot_domain ():
	return _PLOT_XMIN, _PLOT_XMAX, _PLOT_SAMPLES

def set_default_vars (**vars):
	_DEFAULT_VARS.update ((name, float (val)) for name, val in vars.items ())
