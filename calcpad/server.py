# HTTP JSON front end for the calculator, one shared session.

import json
import os
import sys
import threading
import traceback

from http.server import HTTPServer, BaseHTTPRequestHandler
from urllib.parse import parse_qs

from . import __version__
from .cast import CalcError
from .cparser import ParseError
from .calculator import Calculator
from . import chtml
from . import crender

_DEFAULT_ADDRESS = ('localhost', 9000)

_CALC            = Calculator () # the one calculator session shared by all requests, handlers are created per request

#...............................................................................................
def _err (exc):
	response = {'err': f'{exc.__class__.__name__}: {exc}'}

	if isinstance (exc, ParseError):
		response ['pos'] = exc.pos

	return response

class Handler (BaseHTTPRequestHandler):
	def parse (self, request):
		try:
			level = int (request.get ('level', 2))

			return {'text': crender.parse (request ['text'], level)}

		except (CalcError, ValueError) as e:
			return _err (e)

	def html (self, request):
		return {'html': chtml.render_html (request ['text'])}

	def calc (self, request):
		_CALC.new_parser (request ['text'])
		_CALC.parse ()

		if _CALC.state.name == 'Parsed':
			_CALC.calc ()

		response = {'html': _CALC.get_html (), 'state': _CALC.state.name}
		res      = _CALC.result

		if res is not None:
			response ['result'] = res if isinstance (res, float) else [list (p) for p in res]

		if _CALC.error is not None:
			response.update (_err (_CALC.error))

		return response

	def do_GET (self):
		if self.path != '/version':
			self.send_error (404, f'Invalid path {self.path!r}')

		else:
			self._send_json ({'version': __version__})

	def do_POST (self):
		request = parse_qs (self.rfile.read (int (self.headers ['Content-Length'])).decode ('utf8'), keep_blank_values = True)

		for key, val in list (request.items ()):
			if isinstance (val, list) and len (val) == 1:
				request [key] = val [0]

		mode = request.get ('mode')

		if mode not in {'parse', 'html', 'calc'}:
			self.send_error (400, f'Invalid mode {mode!r}')

			return

		if os.environ.get ('CALCPAD_DEBUG'):
			print ('request:', request, file = sys.stderr)

		try:
			response = getattr (self, mode) (request)

		except Exception:
			response = {'err': ''.join (traceback.format_exception (*sys.exc_info ())).strip ().split ('\n')}

		response ['mode'] = mode

		self._send_json (response)

	def _send_json (self, response):
		self.send_response (200)
		self.send_header ('Content-type', 'application/json')
		self.send_header ('Cache-Control', 'no-store')
		self.end_headers ()
		self.wfile.write (json.dumps (response).encode ('utf8'))

#...............................................................................................
def start_server (address = _DEFAULT_ADDRESS, logging = True):
	"""Start serving in a daemon thread and return the server, stop with
	httpd.shutdown ()."""

	handler = Handler

	if not logging:
		handler = type ('Handler', (Handler,), {'log_message': lambda *args, **kwargs: None})

	httpd  = HTTPServer (address, handler)
	thread = threading.Thread (target = httpd.serve_forever, daemon = True)

	thread.start ()

	return httpd

def parse_address (arg):
	if not arg:
		return _DEFAULT_ADDRESS

	host, port = (arg.split (':', 1) + [_DEFAULT_ADDRESS [1]]) [:2]

	return host or _DEFAULT_ADDRESS [0], int (port)
