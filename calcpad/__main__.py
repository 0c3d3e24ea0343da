# Command line entry point: python -m calcpad [options] [expression ...]

import getopt
import os
import sys
import time

from . import __version__
from .cparser import ParseError
from .crender import LEVELS, RenderError, parse
from .chtml import render_html
from .calculator import Calculator
from . import ceval

_HELP = 'usage: calcpad [options] [expression ... | host:port]' '''

  -h, --help               - Show help information
  -v, --version            - Show version string
  -l, --level=N            - Print level, 1 tokens, 2 fully parenthesized, 3 minimal parentheses, 4 tree, 5 LaTeX (default 2)
  -H, --html               - Print syntax highlighted html
  -c, --calc               - Evaluate expressions
  -s, --server             - Serve JSON requests over HTTP at host:port (default localhost:9000)
  --xmin=X, --xmax=X       - Plot domain (default -10..10)
  --samples=N              - Plot sample count (default 201)
  -d, --debug              - Dump debug info to stderr

Expressions are read one per line from stdin if none are given.
'''.lstrip ()

def _run (text, mode, level):
	if mode == 'html':
		print (render_html (text))

		return True

	if mode == 'calc':
		calc = Calculator (text)

		calc.parse ()

		if calc.state.name == 'Parsed':
			calc.calc ()

		if calc.error is not None:
			_print_error (text, calc.error)

			return False

		print (ceval.result2str (calc.result))

		return True

	try:
		print (parse (text, level))

	except (ParseError, RenderError) as e:
		_print_error (text, e)

		return False

	return True

def _print_error (text, err):
	if isinstance (err, ParseError):
		print (f'{text}\n{" " * err.pos}^\nerror: {err}', file = sys.stderr)
	else:
		print (f'error: {err}', file = sys.stderr)

def _serve (arg):
	from .server import start_server, parse_address

	httpd = start_server (parse_address (arg))

	print (f'CalcPad v{__version__} server running at http://{httpd.server_address [0]}:{httpd.server_address [1]}/', file = sys.stderr)

	try:
		while 1:
			time.sleep (0.5) # thread.join () doesn't catch KeyboardInterupt on Windows

	except KeyboardInterrupt:
		httpd.shutdown ()

def main (argv = None):
	try:
		opts, args = getopt.getopt (sys.argv [1:] if argv is None else argv, 'hvl:Hcsd',
				['help', 'version', 'level=', 'html', 'calc', 'server', 'xmin=', 'xmax=', 'samples=', 'debug'])

	except getopt.GetoptError as e:
		print (f'{e}\n\n{_HELP}', file = sys.stderr)

		return 2

	opts   = dict (opts)
	mode   = 'html' if ('-H' in opts or '--html' in opts) else 'calc' if ('-c' in opts or '--calc' in opts) else 'level'
	level  = opts.get ('-l', opts.get ('--level', '2'))

	if '-h' in opts or '--help' in opts:
		print (_HELP)

		return 0

	if '-v' in opts or '--version' in opts:
		print (__version__)

		return 0

	if '-d' in opts or '--debug' in opts:
		os.environ ['CALCPAD_DEBUG'] = '1'

	try:
		level = int (level)

		if level not in LEVELS:
			raise ValueError (f'level must be {min (LEVELS)}..{max (LEVELS)}')

		ceval.set_plot_domain (opts.get ('--xmin'), opts.get ('--xmax'), opts.get ('--samples'))

	except ValueError as e:
		print (f'error: {e}', file = sys.stderr)

		return 2

	if '-s' in opts or '--server' in opts:
		_serve (args [0] if args else None)

		return 0

	lines = args or (line.rstrip ('\n') for line in sys.stdin)
	ok    = True

	for text in lines:
		ok = _run (text, mode, level) and ok

	return 0 if ok else 1

if __name__ == '__main__':
	sys.exit (main ())
