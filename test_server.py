#!/usr/bin/env python3
# python 3.6+

# Testing of HTTP front end and its shared calculator session.

import unittest

import requests

import calcpad
from calcpad.server import start_server, parse_address

class Test (unittest.TestCase):
	@classmethod
	def setUpClass (cls):
		cls.httpd = start_server (('127.0.0.1', 0), logging = False)
		cls.url   = f'http://127.0.0.1:{cls.httpd.server_address [1]}/'

	@classmethod
	def tearDownClass (cls):
		cls.httpd.shutdown ()
		cls.httpd.server_close ()

	def post (self, mode, **kw):
		return requests.post (self.url, {'mode': mode, **kw}).json ()

	def test_parse (self):
		self.assertEqual (self.post ('parse', text = '1+2*3', level = 2), {'text': '(1+(2*3))', 'mode': 'parse'})
		self.assertEqual (self.post ('parse', text = '(1+2)*3', level = 3), {'text': '(1 + 2) * 3', 'mode': 'parse'})
		self.assertEqual (self.post ('parse', text = '1+2'), {'text': '(1+2)', 'mode': 'parse'})
		self.assertEqual (self.post ('parse', text = '(1+2', level = 2), {'err': 'ParseError: missing closing parenthesis', 'pos': 4, 'mode': 'parse'})
		self.assertEqual (self.post ('parse', text = '1', level = 9), {'err': 'RenderError: invalid level 9, valid levels are 1..5', 'mode': 'parse'})
		self.assertEqual (self.post ('parse', text = 'x', level = 'two') ['mode'], 'parse')
		self.assertIn ('err', self.post ('parse', text = 'x', level = 'two'))

	def test_html (self):
		resp = self.post ('html', text = '1 /* 绘图 */ + x')

		self.assertIn ("<span class='syntax_comment'>/* 绘图 */</span>", resp ['html'])
		self.assertIn ("<span class='syntax_variable'>x</span>", resp ['html'])

	def test_calc (self):
		resp = self.post ('calc', text = '1 + 2 * 3')

		self.assertEqual (resp ['result'], 7)
		self.assertEqual (resp ['state'], 'Evaluated')
		self.assertIn ("<span class='calc_result'>= 7</span>", resp ['html'])

		resp = self.post ('calc', text = 'foo(1)')

		self.assertEqual (resp ['state'], 'Errored')
		self.assertEqual (resp ['err'], "UnknownFunctionError: unknown function 'foo'")
		self.assertNotIn ('result', resp)

		resp = self.post ('calc', text = '(1 + 2')

		self.assertEqual (resp ['state'], 'Errored')
		self.assertEqual (resp ['pos'], 6)

		resp = self.post ('calc', text = 'Plot(x^2)')

		self.assertEqual (resp ['state'], 'Evaluated')
		self.assertEqual (len (resp ['result']), 201)
		self.assertEqual (resp ['result'] [0], [-10, 100])

		resp = self.post ('calc', text = 'Plot(x^2)') # same text, cached

		self.assertEqual (resp ['state'], 'Evaluated')

	def test_version (self):
		self.assertEqual (requests.get (self.url + 'version').json (), {'version': calcpad.__version__})
		self.assertEqual (requests.get (self.url + 'nothing').status_code, 404)

	def test_bad_mode (self):
		self.assertEqual (requests.post (self.url, {'mode': 'evaluate', 'text': '1'}).status_code, 400)
		self.assertEqual (requests.post (self.url, {'text': '1'}).status_code, 400)

	def test_parse_address (self):
		self.assertEqual (parse_address (None), ('localhost', 9000))
		self.assertEqual (parse_address ('0.0.0.0:8000'), ('0.0.0.0', 8000))
		self.assertEqual (parse_address (':8001'), ('localhost', 8001))
		self.assertEqual (parse_address ('example'), ('example', 9000))

if __name__ == '__main__':
	unittest.main ()
