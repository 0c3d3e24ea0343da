# Render sampled Plot () curves to image using matplotlib.

import base64
from io import BytesIO

_CPLOT = False

try:
	import matplotlib

	matplotlib.use ('Agg') # no display needed, images only

	import matplotlib.pyplot as plt

	matplotlib.style.use ('bmh')

	_CPLOT       = True
	_TRANSPARENT = True

except ImportError:
	pass

_FIGSIZE = (6.4, 4.8)

#...............................................................................................
def _figure_to_image (figure):
	data = BytesIO ()

	figure.savefig (data, format = 'png', bbox_inches = 'tight', facecolor = 'none', edgecolor = 'none', transparent = _TRANSPARENT)

	return base64.b64encode (data.getvalue ()).decode ()

def plot_curve (curve, fs = None, title = None):
	"""Plot a Curve to a base64 encoded PNG.

plot_curve (curve, fs = None, title = None)

fs      = set figure figsize if present: (default is (6.4, 4.8))
  x      -> (x, x * 3 / 4)
  (x, y) -> (x, y)

Undefined samples (y is None) leave gaps in the line. Returns None if
matplotlib is not available.
	"""

	if not _CPLOT:
		return None

	if fs is None:
		fs = _FIGSIZE
	elif not isinstance (fs, tuple):
		fs = (fs, fs * 3 / 4)

	figure = plt.figure (figsize = fs)

	try:
		ys = [float ('nan') if y is None else y for y in curve.ys]

		plt.plot (curve.xs, ys)
		plt.xlim (curve.xmin, curve.xmax)

		if title:
			plt.title (title)

		return _figure_to_image (figure)

	finally:
		plt.close (figure)

def available ():
	return _CPLOT
