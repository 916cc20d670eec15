# This file makes the 'utils' directory a Python package
# Core repository code: object store, tree/commit codecs, graph walker, merge and diff engines
