"""
Shared call-site plumbing for the BLAS dispatcher.
"""

import logging
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.catalogue import routine_name
from pyxlinalg.core.evaluation import common_category
from pyxlinalg.core.exceptions import DTypeError
from pyxlinalg.core.validation import check_array
from pyxlinalg.core.view import ElementCategory
from pyxlinalg.providers import ProviderChoice, resolve_provider

logger = logging.getLogger(__name__)


def promote(
    operands: dict[str, ArrayLike],
    outputs: dict[str, NDArray[Any] | None] | None = None,
) -> tuple[dict[str, NDArray[Any]], ElementCategory]:
    """
    Validate input operands and find their common element category.

    Output operands take part in the promotion but are not converted:
    they must already have the resulting dtype (checked by ``as_inout``).

    Returns:
        The validated input arrays by name, and the common category
    """
    arrays = {name: check_array(value, name) for name, value in operands.items()}
    dtypes = [arr.dtype for arr in arrays.values()]
    for out in (outputs or {}).values():
        if out is not None:
            dtypes.append(np.asarray(out).dtype)
    return arrays, common_category(*dtypes)


def scalar(value: Any, category: ElementCategory, name: str) -> Any:
    """
    Convert alpha/beta to the routine's element type.

    Raises:
        DTypeError: If a complex value is passed to a real routine
    """
    if not category.is_complex and np.iscomplexobj(value) and np.imag(value) != 0:
        raise DTypeError(
            f"{name}: complex scalar {value!r} for real {category.dtype} operands",
            dtype=str(category.dtype),
        )
    if category.is_complex:
        return complex(value)
    return float(np.real(value))


def lookup(
    base: str,
    category: ElementCategory,
    provider: ProviderChoice | None,
) -> tuple[str, Callable[..., Any]]:
    """Routine identity and provider callable for one BLAS call."""
    routine = routine_name(base, category)
    impl = resolve_provider(provider)
    logger.debug("%s via %s", routine, impl.name)
    return routine, impl.lookup(routine)
