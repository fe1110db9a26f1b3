# rpncalc

A small calculator that evaluates infix arithmetic expressions by converting
them to Reverse Polish (postfix) notation. It understands `+`, `-`, `*`, `/`,
parentheses, decimal numbers, signed numbers (including runs such as `--` or
`+-`, which are folded into one sign) and named variables made of letters.

## Installation

```
pip install .
```

This installs the `rpncalc` command. The same entry point can also be run
with `python -m rpncalc.cli`.

## Command line

Interactive mode: enter an expression, see its postfix form and the result,
then answer `Y` or `N` to continue. If the expression holds variables, you
are asked for a value of each one before it is evaluated.

```
rpncalc
```

Expressions with variables: the expression is read once, the number of
variables found is reported, and every round you are asked for new values,
so the same expression can be evaluated repeatedly. If no variables are
found, a warning suggests the plain `rpncalc` mode instead.

```
rpncalc -U
```

One-shot evaluation of an expression given on the command line, printing
only the result in `%g` form:

```
rpncalc -GUI "3*(4-1)/2"
```

Help:

```
rpncalc -help
```

An unknown option is reported on standard error and the command exits with
status 1. A malformed expression or a division by zero is reported as
`error: ...` on standard error, also with status 1. End of input ends the
session with status 0.

## Library use

`rpncalc.notation` converts and evaluates expressions:

```python
from rpncalc.notation import evaluate, evaluate_postfix, infix_to_postfix, infix_to_prefix

infix_to_postfix("1+2*3")        # '1 2 3 * + ' - each token followed by a space
evaluate_postfix("1 2 3 * + ")   # 7.0
infix_to_prefix("1+2*3")         # '+ 1 * 2 3'
evaluate("(1+2)*3")              # 9.0
```

`priority(ch)` gives an operator's precedence (0 for non-operators) and
`apply_operator(a, b, op)` applies one binary operator. Division by zero,
unbalanced parentheses, stray signs, unknown operators and, in `evaluate`,
unresolved variables raise `rpncalc.notation.CalculationError`, a subclass of
`ValueError`.

Variables are handled by `rpncalc.variables`:

```python
from rpncalc.variables import extract_variables, format_number, preprocess, substitute

expr = preprocess("x + --y")          # 'x+y': signs folded, spaces removed
table = extract_variables(expr)       # VariableTable with 'x' and 'y'
table.set("x", 2)
table.set("y", 3)
substitute(expr, table)               # '2+3'
substitute(expr, {"x": 2, "y": 3})    # any mapping of names to values works too
format_number(0.5)                    # '0.5' (printf %g style)
```

`VariableTable` keeps the names found, in the order values are asked for
(`names()`), how often each was seen (`add()` returns the count), and their
values (`set()`, `get()`, `table[name]`, default `0.0`). `len(table)` is the
number of distinct names; it holds at most 100.

## What it does not do

There is no graphical interface: the `-GUI` option only prints the result
for a caller that runs the command. Only the four basic operators are
supported - no powers, functions or constants - and variables can only be
given values interactively or through the library.

## Running the tests

```
pip install .[test]
pytest
```