"""
Ready-made expressions with common mathematical constants.
"""

import math
from typing import Any, Dict, Optional, Union

from .config import ExpressionConfig
from .expression import Expression
from .symbols import SymbolTable

# Omega constant: the solution of x * e**x = 1
OMEGA = 0.5671432904097838

# Golden ratio
PHI = (1 + math.sqrt(5)) / 2

DEFAULT_CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "omega": OMEGA,
    "phi": PHI,
    "ln2": math.log(2),
    "sqrt2": math.sqrt(2),
}


def create_expression(
    source: Optional[str] = None,
    config: Union[ExpressionConfig, Dict[str, Any], None] = None,
) -> Expression:
    """
    Creates an Expression preloaded with constants, parsing ``source`` if given.

    Args:
        source: Optional expression string to load and parse
        config: ExpressionConfig or a dict accepted by it

    Returns:
        The new expression. Check ``expr.error`` for a failed parse.

    Raises:
        ValidationError: If ``config`` is a dict with invalid limits or options
    """
    if config is None:
        config = ExpressionConfig()
    elif isinstance(config, dict):
        config = ExpressionConfig.model_validate(config)

    constants: Dict[str, float] = {}
    if config.include_default_constants:
        constants.update(DEFAULT_CONSTANTS)
    constants.update(config.constants)

    expr = Expression(
        symbols=SymbolTable(constants=constants),
        limits=config.to_limits(),
        number_options=config.to_number_options(),
    )
    if source is not None:
        expr.load(source).parse()
    return expr
