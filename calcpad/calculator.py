# Calculator session state machine: Empty -> Constructed -> Parsed -> Evaluated, plus Errored.

import html
import os
import sys

from .cast import CalcError
from . import clex
from .cparser import Parser, ParseError
from . import crender
from . import chtml
from . import ceval
from . import cplot

class CalculatorStateError (CalcError):
	pass

#...............................................................................................
class _State:
	name   = None

	text   = None
	tokens = None # full scan including comments
	ast    = None
	result = None
	error  = None
	erridx = None

	def __init__ (self, **kw):
		self.__dict__.update (kw)

	def __repr__ (self):
		return f'{self.name} ({self.text!r})'

class Empty (_State):
	name = 'Empty'

class Constructed (_State): # text, tokens
	name = 'Constructed'

class Parsed (_State): # text, tokens, ast
	name = 'Parsed'

class Evaluated (_State): # text, tokens, ast, result [, image]
	name  = 'Evaluated'
	image = None

class Errored (_State): # text, tokens, error, erridx for parse errors, ast for evaluation errors
	name = 'Errored'

#...............................................................................................
class Calculator:
	"""Staged calculation of one input expression. Each stage caches its
	artifact in the current state object, a new input text discards them.
	Not safe for concurrent use, one session per input field.
	"""

	def __init__ (self, text = None):
		self.state = Empty ()

		if text is not None:
			self.new_parser (text)

	@classmethod
	def new (cls, text):
		return cls (text)

	def _set_state (self, state):
		if os.environ.get ('CALCPAD_DEBUG'):
			print (f'calculator: {self.state!r} -> {state!r}', file = sys.stderr)

		self.state = state

	text   = property (lambda self: self.state.text)
	ast    = property (lambda self: self.state.ast)
	result = property (lambda self: self.state.result)
	error  = property (lambda self: self.state.error)

	def new_parser (self, text):
		if self.state.text == text and not isinstance (self.state, Empty):
			return # same input, keep what was computed

		self._set_state (Constructed (text = text, tokens = clex.scan (text)))

	def parse (self):
		state = self.state

		if isinstance (state, Empty):
			raise CalculatorStateError ('nothing to parse, call new_parser () first')

		if not isinstance (state, Constructed):
			return state.ast

		ast, erridx, err = Parser ().parse (state.text)

		if err:
			self._set_state (Errored (text = state.text, tokens = state.tokens, error = err, erridx = erridx))
		else:
			self._set_state (Parsed (text = state.text, tokens = state.tokens, ast = ast))

		return ast

	def calc (self):
		state = self.state

		if isinstance (state, Evaluated):
			return state.result

		if not isinstance (state, Parsed):
			raise CalculatorStateError (f'cannot calculate in state {state.name}, a successful parse () is required')

		try:
			res = ceval.evaluate (state.ast)

		except ceval.EvaluationError as e:
			self._set_state (Errored (text = state.text, tokens = state.tokens, ast = state.ast, error = e))

			return None

		self._set_state (Evaluated (text = state.text, tokens = state.tokens, ast = state.ast, result = res))

		return res

	def render (self, level):
		state = self.state

		if isinstance (state, Empty):
			raise CalculatorStateError ('nothing to render, call new_parser () first')

		if level == 1:
			return crender.render (state.tokens, level)

		return crender.render (state.text if state.ast is None else state.ast, level)

	#...............................................................................................
	def _result_html (self, state):
		res = state.result

		if not isinstance (res, ceval.Curve):
			return f"<span class='calc_result'>= {html.escape (ceval.num2str (res))}</span>"

		if state.image is None:
			state.image = cplot.plot_curve (res)

		img = f"<img src='data:image/png;base64,{state.image}'/>" if state.image else ''

		return f"<span class='calc_plot'>{img}<span class='calc_plot_info'>{html.escape (ceval.result2str (res))}</span></span>"

	def get_html (self):
		state = self.state

		if isinstance (state, Empty):
			return "<span class='calc_empty'></span>"

		if isinstance (state, Constructed):
			return chtml.tokens2html (state.text, state.tokens)

		if isinstance (state, Errored):
			if isinstance (state.error, ParseError):
				out = chtml.tokens2html (state.text, state.tokens, state.erridx, state.error)
			else:
				out = chtml.tokens2html (state.text, state.tokens)

			return f"{out}\n<span class='calc_error'>{html.escape (f'{state.error.__class__.__name__}: {state.error}')}</span>"

		out = f'{chtml.tokens2html (state.text, state.tokens)}\n{chtml.tree2html (state.ast)}'

		if isinstance (state, Evaluated):
			out = f'{out}\n{self._result_html (state)}'

		return out

#...............................................................................................
class Counter:
	"""Plain mutable value holder."""

	def __init__ (self, value = 0):
		self.value = value
		self.flag  = False

	def get_value (self):
		return self.value

	def add_value (self, delta):
		self.value += delta

def create_counter ():
	counter      = Counter (42)
	counter.flag = True

	return counter
