#!/usr/bin/env python
# python 3.6+

# Lexer and parser: token stream, comment side channel, precedence, associativity and error positions.

import unittest

from calcpad.cast import AST
from calcpad.clex import Comment, scan, tokenize
from calcpad.cparser import Parser, ParseError, parse_ast

parser = Parser ()
p      = lambda s: parser.parse (s) [0]
e      = lambda s: (lambda r: (r [2].msg, r [1]) if r [2] else None) (parser.parse (s))

class Test (unittest.TestCase):
	def test_lexer (self):
		self.assertEqual (scan ('1+x'), ['NUM', 'PLUS', 'IDENT'])
		self.assertEqual ([t.text for t in scan ('1.5 * .5 - 10.')], ['1.5', '*', '.5', '-', '10.'])
		self.assertEqual ([t.pos for t in scan ('a  + b')], [0, 3, 5])
		self.assertEqual ([t.end for t in scan ('ab + c')], [2, 4, 6])
		self.assertEqual (scan ('1.2.3'), ['NUM', 'NUM'])
		self.assertEqual (scan ('α_1 + β'), ['IDENT', 'PLUS', 'IDENT'])
		self.assertEqual (scan ('f(x, y) ^ 2'), ['IDENT', 'PARENL', 'IDENT', 'COMMA', 'IDENT', 'PARENR', 'CARET', 'NUM'])
		self.assertEqual (scan ('1 $ 2'), ['NUM', 'UNKNOWN', 'NUM'])
		self.assertEqual (scan ('1\n+\t2'), ['NUM', 'PLUS', 'NUM'])
		self.assertEqual (scan ('a//x\n+1'), ['IDENT', 'COMMENT', 'PLUS', 'NUM'])
		self.assertEqual (scan ('a//x\n+1') [1].text, '//x')
		self.assertEqual (scan ('1/* x'), ['NUM', 'COMMENT'])
		self.assertEqual (scan ('1/* x') [1].text, '/* x')
		self.assertEqual (scan ('1/2'), ['NUM', 'DIVIDE', 'NUM'])
		self.assertEqual (scan (''), [])

	def test_tokenize_comments (self):
		tokens, comments = tokenize ('1 /* a */ + x')

		self.assertEqual (tokens, ['NUM', 'PLUS', 'IDENT', '$end'])
		self.assertEqual (tokens [-1].pos, 13)
		self.assertEqual (comments, [(2, 9, '/* a */')])
		self.assertEqual (comments [0], Comment (2, '/* a */'))
		self.assertEqual (comments [0].text, '/* a */')

		tokens, comments = tokenize ('/* 绘图 */ x /* 1 */ // 2')

		self.assertEqual (tokens, ['IDENT', '$end'])
		self.assertEqual ([c.text for c in comments], ['/* 绘图 */', '/* 1 */', '// 2'])

	def test_parser (self):
		self.assertEqual (p ('1'), AST ('#', '1'))
		self.assertEqual (p ('1.5'), AST ('#', '1.5'))
		self.assertEqual (p ('.5'), AST ('#', '.5'))
		self.assertEqual (p ('x'), AST ('@', 'x'))
		self.assertEqual (p ('αβ'), AST ('@', 'αβ'))
		self.assertEqual (p ('-1'), AST ('-unary', '-', ('#', '1')))
		self.assertEqual (p ('--x'), AST ('-unary', '-', ('-unary', '-', ('@', 'x'))))
		self.assertEqual (p ('+x'), AST ('@', 'x'))
		self.assertEqual (p ('(x)'), AST ('@', 'x'))
		self.assertEqual (p ('((x))'), AST ('@', 'x'))
		self.assertEqual (p ('x+y'), AST ('-bin', '+', ('@', 'x'), ('@', 'y')))
		self.assertEqual (p ('x-y-z'), AST ('-bin', '-', ('-bin', '-', ('@', 'x'), ('@', 'y')), ('@', 'z')))
		self.assertEqual (p ('x/y/z'), AST ('-bin', '/', ('-bin', '/', ('@', 'x'), ('@', 'y')), ('@', 'z')))
		self.assertEqual (p ('1+2*3'), AST ('-bin', '+', ('#', '1'), ('-bin', '*', ('#', '2'), ('#', '3'))))
		self.assertEqual (p ('(1+2)*3'), AST ('-bin', '*', ('-bin', '+', ('#', '1'), ('#', '2')), ('#', '3')))
		self.assertEqual (p ('2^2^3'), AST ('-bin', '^', ('#', '2'), ('-bin', '^', ('#', '2'), ('#', '3'))))
		self.assertEqual (p ('(2^2)^3'), AST ('-bin', '^', ('-bin', '^', ('#', '2'), ('#', '2')), ('#', '3')))
		self.assertEqual (p ('-2^2'), AST ('-unary', '-', ('-bin', '^', ('#', '2'), ('#', '2'))))
		self.assertEqual (p ('2^-1'), AST ('-bin', '^', ('#', '2'), ('-unary', '-', ('#', '1'))))
		self.assertEqual (p ('-x*y'), AST ('-bin', '*', ('-unary', '-', ('@', 'x')), ('@', 'y')))
		self.assertEqual (p ('x*-y'), AST ('-bin', '*', ('@', 'x'), ('-unary', '-', ('@', 'y'))))
		self.assertEqual (p ('f()'), AST ('-func', 'f', ()))
		self.assertEqual (p ('cos(x)'), AST ('-func', 'cos', (('@', 'x'),)))
		self.assertEqual (p ('f(x, y+1)'), AST ('-func', 'f', (('@', 'x'), ('-bin', '+', ('@', 'y'), ('#', '1')))))
		self.assertEqual (p ('f (x)'), AST ('-func', 'f', (('@', 'x'),)))
		self.assertEqual (p ('sin(x)^2'), AST ('-bin', '^', ('-func', 'sin', (('@', 'x'),)), ('#', '2')))
		self.assertEqual (p ('1 /* c */ + 2'), AST ('-bin', '+', ('#', '1'), ('#', '2')))
		self.assertEqual (p ('1 // c'), AST ('#', '1'))
		self.assertEqual (p ('1 /* open'), AST ('#', '1'))
		self.assertEqual (p ('Plot(((x+0.1)^2)^cos(T)/* 绘图 */)'), AST ('-func', 'Plot', (('-bin', '^', ('-bin', '^', ('-bin', '+', ('@', 'x'), ('#', '0.1')), ('#', '2')), ('-func', 'cos', (('@', 'T'),))),)))

	def test_spans (self):
		ast = p ('1 + foo(2)')

		self.assertEqual (ast.span, (0, 10))
		self.assertEqual (ast.lhs.span, (0, 1))
		self.assertEqual (ast.rhs.span, (4, 10))
		self.assertEqual (ast.rhs.args [0].span, (8, 9))
		self.assertEqual (p ('-x').span, (0, 2))
		self.assertEqual (p (' 1  + /* c */ 2'), p ('1+2'))

	def test_errors (self):
		self.assertEqual (e ('1+2'), None)
		self.assertEqual (e (''), ('unexpected end of input', 0))
		self.assertEqual (e ('1 +'), ('unexpected end of input', 3))
		self.assertEqual (e ('(1 + 2'), ('missing closing parenthesis', 6))
		self.assertEqual (e ('f(1, 2'), ('missing closing parenthesis', 6))
		self.assertEqual (e ('1 2'), ('unexpected token after expression', 2))
		self.assertEqual (e ('(1))'), ('unexpected token after expression', 3))
		self.assertEqual (e ('1.2.3'), ('unexpected token after expression', 3))
		self.assertEqual (e ('1 $ 2'), ("unrecognized character '$'", 2))
		self.assertEqual (e ('$'), ("unrecognized character '$'", 0))
		self.assertEqual (e ('f(1,)'), ('empty argument in function call', 4))
		self.assertEqual (e ('f(,1)'), ('empty argument in function call', 2))
		self.assertEqual (e ('f(1,,2)'), ('empty argument in function call', 4))
		self.assertEqual (e (')'), ("unexpected token ')'", 0))
		self.assertEqual (e ('()'), ("unexpected token ')'", 1))
		self.assertEqual (e ('f(1 2)'), ("unexpected token '2'", 4))
		self.assertEqual (e ('2 * * 3'), ("unexpected token '*'", 4))
		self.assertEqual (e ('/* only a comment */'), ('unexpected end of input', 20))

	def test_nesting_depth (self):
		self.assertEqual (p ('(' * 99 + '1' + ')' * 99), AST ('#', '1'))
		self.assertEqual (p ('-' * 99 + '1'), AST ('-unary', '-', p ('-' * 98 + '1')))
		self.assertEqual (e ('(' * 100 + '1' + ')' * 100), ('expression nested too deeply', 100))
		self.assertEqual (e ('(' * 300 + '1' + ')' * 300), ('expression nested too deeply', 100))
		self.assertEqual (e ('-' * 1200 + '1'), ('expression nested too deeply', 100))
		self.assertEqual (e ('2' + '^2' * 500), ('expression nested too deeply', 200))
		self.assertEqual (e ('f(' * 300), ('expression nested too deeply', 200))
		self.assertEqual (p ('(1)' + ' + (1)' * 150).rhs, AST ('#', '1'))
		self.assertEqual (p ('1' + '+1' * 199).height, 200)
		self.assertEqual (e ('1' + '+1' * 300), ('expression nested too deeply', 401))
		self.assertEqual (e ('(' * 300 + '1' + ')' * 300), ('expression nested too deeply', 100)) # parser is reusable after the error

	def test_unbalanced_position (self):
		text        = 'x * (1 + 2'
		_, pos, err = parser.parse (text)

		self.assertIsInstance (err, ParseError)
		self.assertGreaterEqual (pos, text.index ('('))
		self.assertEqual (err.pos, pos)

	def test_parse_ast (self):
		self.assertEqual (parse_ast ('x'), AST ('@', 'x'))
		self.assertRaises (ParseError, parse_ast, '(1')
		self.assertEqual (parse_ast ('foo(1)'), AST ('-func', 'foo', (('#', '1'),))) # unknown function is not a parse error

if __name__ == '__main__':
	unittest.main ()
