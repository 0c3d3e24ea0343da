# Math expression lexer, parser, multi level printer, html highlighter and staged calculator.

__version__ = '1.0.0'

from .cast import AST, CalcError
from .cparser import ParseError, parse_ast
from .crender import RenderError, parse, render
from .chtml import render_html, pares_and_print_html
from .ceval import EvaluationError, DomainError, UnknownFunctionError, UnboundVariableError, Curve, evaluate
from .calculator import Calculator, CalculatorStateError, Counter, create_counter
