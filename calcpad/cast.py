# Base classes for abstract math syntax tree, tuple based.
#
# ('#', 'num')                - real number kept as the source text, converted to float only on evaluation
# ('@', 'var')                - variable name, 'x' is the plot parameter and 'T' the time slot
# ('-unary', 'op', operand)   - unary operation, op is '-' (a leading '+' is dropped by the parser)
# ('-bin', 'op', lhs, rhs)    - binary operation, op is one of '+', '-', '*', '/', '^'
# ('-func', 'name', (a1, ...)) - function call 'name (a1, ...)', resolved against the function table only on evaluation
#
# Source spans are attached as attributes (pos, end) and do not take part in equality.

import re

class CalcError (Exception): # root of all errors raised by the engine
	pass

#...............................................................................................
class AST (tuple):
	op      = None

	OPS     = set () # these will be filled in after all classes defined

	_OP2CLS = {}
	_CLS2OP = {}

	def __new__ (cls, *args, **kw):
		op       = AST._CLS2OP.get (cls)
		cls_args = tuple (AST (*arg) if arg.__class__ is tuple and arg and isinstance (arg [0], str) and arg [0] in AST.OPS else arg for arg in args)

		if op:
			args = (op,) + cls_args

		elif args:
			args = cls_args

			try:
				cls2 = AST._OP2CLS.get (args [0])
			except TypeError: # for unhashable types
				cls2 = None

			if cls2:
				cls      = cls2
				cls_args = cls_args [1:]

		self = tuple.__new__ (cls, args)

		if self.op:
			self._init (*cls_args)

		if kw:
			self.__dict__.update (kw)

		return self

	def __getattr__ (self, name): # calculate value for nonexistent self.name by calling self._name () and store
		func                 = getattr (self, f'_{name}') if name [0] != '_' else None
		val                  = func and func ()
		self.__dict__ [name] = val

		return val

	def _children (self): # direct child nodes in evaluation order
		return ()

	def _height (self): # nodes on the longest path down to a leaf
		return 1 + max ((c.height for c in self.children), default = 0)

	def _span (self): # (pos, end) if the node came out of the parser, else None
		pos = self.__dict__.get ('pos')

		return None if pos is None else (pos, self.__dict__.get ('end', pos))

	@staticmethod
	def register_AST (cls):
		AST._CLS2OP [cls]    = cls.op
		AST._OP2CLS [cls.op] = cls

		AST.OPS.add (cls.op)

		setattr (AST, cls.__name__ [4:], cls)

#...............................................................................................
class AST_Num (AST):
	op, is_num = '#', True

	_rec_num   = re.compile (r'^(\d*)(?:(\.)(\d*))?$') # 123.456 -> (123) (.) (456)

	def _init (self, num):
		self.num = str (num)

	_grp        = lambda self: [g or '' for g in AST_Num._rec_num.match (self.num).groups ()]
	_is_num_int = lambda self: not self.grp [1]
	_as_float   = lambda self: float (self.num)

class AST_Var (AST):
	op, is_var = '@', True

	def _init (self, var):
		self.var = var

class AST_Unary (AST):
	op, is_unary = '-unary', True

	def _init (self, uop, operand):
		self.uop, self.operand = uop, operand

	_children = lambda self: (self.operand,)

class AST_Binary (AST):
	op, is_bin = '-bin', True

	OPS        = ('+', '-', '*', '/', '^')

	def _init (self, bop, lhs, rhs):
		self.bop, self.lhs, self.rhs = bop, lhs, rhs

	_children = lambda self: (self.lhs, self.rhs)

class AST_Func (AST):
	op, is_func = '-func', True

	PLOT        = 'Plot'

	def _init (self, func, args):
		self.func, self.args = func, tuple (a if isinstance (a, AST) else AST (*a) for a in args)

	_children   = lambda self: self.args
	_is_plot    = lambda self: self.func == AST_Func.PLOT

#...............................................................................................
_AST_CLASSES = [AST_Num, AST_Var, AST_Unary, AST_Binary, AST_Func]

for _cls in _AST_CLASSES:
	AST.register_AST (_cls)

for _cls in _AST_CLASSES: # every node answers False for the is_* flags of the other node kinds
	_flag = [n for n in _cls.__dict__ if n.startswith ('is_')] [0]

	setattr (AST, _flag, False)

