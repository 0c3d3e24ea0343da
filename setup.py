#!/usr/bin/env python3

import setuptools

setuptools.setup (
  name                          = "calcpad",
  version                       = "1.0.0",
  license                       = 'BSD',
  keywords                      = "Math calculator parser plot",
  description                   = "Math expression parser, printer, syntax highlighter and plotting calculator",
  long_description              = "CalcPad parses real valued math expressions with comments, prints them back at several levels (tokens, fully parenthesized, minimal parentheses, syntax tree, LaTeX via SymPy), "
    "highlights them as html and evaluates them, sampling Plot () expressions into curves rendered with matplotlib. "
    "A staged calculator session and a small JSON HTTP server wrap the engine for interactive front ends.",
  long_description_content_type = "text/plain",
  packages                      = ['calcpad'],
  scripts                       = ['bin/calcpad'],
  classifiers                   = [
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Scientific/Engineering',
    'Topic :: Scientific/Engineering :: Mathematics',
  ],
  install_requires              = ['sympy>=1.4', 'matplotlib'],
  extras_require                = {'test': ['requests']},
  python_requires               = '>=3.6',
)
