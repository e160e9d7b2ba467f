r"""@package symdiff

Symbolic algebra of real-valued functions of several variables.

The term system lives in the symdiff.exprs package. Terms are built from
constants and variables using arithmetic and elementary functions, can be
composed by substituting terms for variables and are differentiated
symbolically, including the generalized chain rule for compositions.

Global behavior (like how floating point errors are treated during
evaluation) is configured in symdiff.settings.
"""
