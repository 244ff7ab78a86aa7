"""Handler for Python functions.

Functions are encoded from their source text: ``[params, body]``. Decoding
compiles a fresh function from that text, so only closure-free functions
round-trip meaningfully, and identity, names, defaults' object identity and
decorators are lost.

Decoding executes text taken from the document. Install this handler only
for documents from a trusted source.
"""

import ast
import inspect
import textwrap
import types
from typing import Any, Callable, List

from superjson.base.handler import BaseHandler
from superjson.exceptions import UnsupportedValueError

_FUNCTION_NAME = "anonymous"


def _strip_annotations(args: ast.arguments) -> ast.arguments:
    for arg in [*args.posonlyargs, *args.args, *args.kwonlyargs]:
        arg.annotation = None
    if args.vararg is not None:
        args.vararg.annotation = None
    if args.kwarg is not None:
        args.kwarg.annotation = None
    return args


def _find_definition(func: types.FunctionType) -> ast.AST:
    """Locate the def or lambda node for ``func`` in its source."""
    try:
        source = textwrap.dedent(inspect.getsource(func))
    except (OSError, TypeError) as e:
        raise UnsupportedValueError(
            f"Source of {func.__qualname__} is not available: {e}"
        ) from e

    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        # A lambda inside a larger expression yields an unparseable fragment
        raise UnsupportedValueError(
            f"Source of {func.__qualname__} cannot be parsed: {e}"
        ) from e

    if func.__name__ == "<lambda>":
        lambdas = [n for n in ast.walk(tree) if isinstance(n, ast.Lambda)]
        if len(lambdas) != 1:
            raise UnsupportedValueError(
                f"Cannot identify lambda source: found {len(lambdas)} "
                "lambdas on its source lines"
            )
        return lambdas[0]

    for node in tree.body:
        if isinstance(node, ast.AsyncFunctionDef):
            raise UnsupportedValueError(
                f"Coroutine function {func.__qualname__} cannot be serialized"
            )
        if isinstance(node, ast.FunctionDef):
            return node

    raise UnsupportedValueError(f"No function definition found for {func.__qualname__}")


class FunctionHandler(BaseHandler):
    """Handler for plain Python functions and lambdas.

    Builtin functions are claimed too, so that they fail loudly with
    UnsupportedValueError instead of reaching the JSON encoder.

    Examples:
        >>> def add(a, b):
        ...     return a + b
        >>> FunctionHandler().serialize(add)  # doctest: +SKIP
        ['a, b', 'return a + b']
    """

    @property
    def name(self) -> str:
        """Return handler name."""
        return "Function"

    def can_handle(self, value: Any) -> bool:
        """Check if value is a function or builtin function."""
        return isinstance(value, (types.FunctionType, types.BuiltinFunctionType))

    def serialize(self, value: Callable) -> List[str]:
        """Extract parameter list and body text.

        Raises:
            UnsupportedValueError: If the function is builtin, its source is
                unavailable, or it cannot be isolated in its source
        """
        if not isinstance(value, types.FunctionType):
            raise UnsupportedValueError(
                f"Native function {getattr(value, '__qualname__', value)!r} "
                "cannot be serialized"
            )

        node = _find_definition(value)
        params = ast.unparse(_strip_annotations(node.args))

        if isinstance(node, ast.Lambda):
            body = f"return {ast.unparse(node.body)}"
        else:
            body = ast.unparse(ast.Module(body=node.body, type_ignores=[]))

        return [params, body]

    def deserialize(self, params: str, body: str) -> types.FunctionType:
        """Compile a new function from parameter and body text.

        Raises:
            TypeError: If params or body are not strings
            ValueError: If the text does not form a valid function
        """
        if not isinstance(params, str) or not isinstance(body, str):
            raise TypeError("Function params and body must be strings")

        source = f"def {_FUNCTION_NAME}({params}):\n" + textwrap.indent(
            body or "pass", "    "
        )
        try:
            code = compile(source, "<superjson>", "exec")
        except SyntaxError as e:
            raise ValueError(f"Invalid function text: {e}") from e

        namespace: dict = {}
        try:
            exec(code, namespace)
        except NameError as e:
            # Default values referring to names outside the function
            raise ValueError(f"Cannot evaluate function defaults: {e}") from e
        return namespace[_FUNCTION_NAME]
