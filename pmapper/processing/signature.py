#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Call validation and binding for mapped functions.

``validate_call`` checks a function against the data argument name and the
extra arguments supplied by the caller, then returns a ``CallSpec`` that
workers use to invoke the function once per item. ``CallSpec`` holds only
the function and plain values so it pickles whenever the function does.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Sequence, Tuple

from pmapper.core.exceptions import (
    ArgumentCountError,
    UnknownDataArgumentError,
    ValidationError,
)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _describe(func: Callable) -> str:
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)


@dataclass(frozen=True)
class CallSpec:
    """
    A validated, picklable recipe for calling ``func`` on one item.

    Attributes:
        func: The mapped function
        data_arg: Name of the parameter that receives each item
        positional_only: Positional-only parameter names, in declaration order
        bound: Values for every parameter except ``data_arg``
    """
    func: Callable
    data_arg: str
    positional_only: Tuple[str, ...] = ()
    bound: Dict[str, Any] = field(default_factory=dict)

    def invoke(self, item: Any) -> Any:
        """Call the function with ``item`` bound to the data argument."""
        values = dict(self.bound)
        values[self.data_arg] = item
        args = [values.pop(name) for name in self.positional_only]
        return self.func(*args, **values)

    @property
    def name(self) -> str:
        return _describe(self.func)


def validate_call(
    func: Callable,
    data_arg: str,
    args: Sequence[Any] = (),
    kwargs: Dict[str, Any] = None,
    reserved: Sequence[str] = ()
) -> CallSpec:
    """
    Check that ``func`` can be called with the data argument plus extras.

    Positional extras fill the parameters other than ``data_arg`` in
    declaration order; keyword extras bind by name.

    Args:
        func: Function to be mapped
        data_arg: Name of the parameter that receives each item
        args: Extra positional arguments
        kwargs: Extra keyword arguments
        reserved: Keyword names the caller consumes as its own options;
            parameters with these names can only be filled positionally

    Returns:
        CallSpec ready to be shipped to workers

    Raises:
        UnknownDataArgumentError: data_arg is not a parameter of func
        ArgumentCountError: extras don't match the declared parameters
        ValidationError: func is not callable or has no inspectable signature
    """
    kwargs = dict(kwargs or {})

    if not callable(func):
        raise ValidationError(f"{func!r} is not callable")

    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Cannot inspect the signature of {_describe(func)}: {e}") from e

    parameters = signature.parameters
    names = list(parameters)

    if data_arg not in parameters:
        raise UnknownDataArgumentError(data_arg, _describe(func), names)

    variadic = [name for name, p in parameters.items() if p.kind in _VARIADIC]
    if variadic:
        raise ArgumentCountError(
            f"{_describe(func)}() declares variadic parameters ({', '.join(variadic)}); "
            "only functions with a fixed parameter list can be mapped"
        )

    others = [name for name in names if name != data_arg]

    shadowed = [name for name in others[len(args):] if name in reserved]
    if shadowed:
        raise ArgumentCountError(
            f"{_describe(func)}() has parameters named like mapping options "
            f"({', '.join(shadowed)}); pass them as positional extras instead"
        )

    supplied = len(args) + len(kwargs) + 1
    if supplied != len(parameters):
        raise ArgumentCountError(
            f"{_describe(func)}() declares {len(parameters)} parameters but "
            f"{supplied} were supplied ({len(args)} positional, {len(kwargs)} keyword, "
            f"plus data argument '{data_arg}')"
        )

    bound = dict(zip(others, args))

    for key, value in kwargs.items():
        if key == data_arg:
            raise ArgumentCountError(
                f"'{key}' is the data argument and can't also be passed as a keyword"
            )
        if key not in parameters:
            raise ArgumentCountError(f"{_describe(func)}() has no parameter named '{key}'")
        if key in bound:
            raise ArgumentCountError(
                f"{_describe(func)}() got multiple values for parameter '{key}'"
            )
        bound[key] = value

    positional_only = tuple(
        name for name, p in parameters.items()
        if p.kind == inspect.Parameter.POSITIONAL_ONLY
    )

    return CallSpec(
        func=func,
        data_arg=data_arg,
        positional_only=positional_only,
        bound=bound,
    )
