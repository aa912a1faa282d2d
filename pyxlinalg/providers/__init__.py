"""
Compute providers and provider selection.

Available providers:
    ScipyProvider: CPU provider on SciPy's BLAS/LAPACK wrappers ('cpu_scipy')

Every public operation takes a ``provider=`` keyword. None means the
process default, which is ``ScipyProvider`` until ``set_provider`` or
``use_provider`` says otherwise.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Literal, Union

from pyxlinalg.core.protocols import Provider
from pyxlinalg.providers.cpu import ScipyProvider

logger = logging.getLogger(__name__)

# Type alias for provider selection
ProviderChoice = Union[Literal['auto', 'cpu', 'scipy', 'cpu_scipy'], Provider]

_scipy_provider: ScipyProvider | None = None
_default_provider: Provider | None = None


def _scipy() -> ScipyProvider:
    global _scipy_provider
    if _scipy_provider is None:
        _scipy_provider = ScipyProvider()
    return _scipy_provider


def select_provider(choice: ProviderChoice = 'auto') -> Provider:
    """
    Resolve a provider choice to a provider instance.

    Args:
        choice: Provider preference:
            - 'auto': Best available provider (currently the SciPy provider)
            - 'cpu', 'scipy', 'cpu_scipy': The SciPy provider
            - any object satisfying the Provider protocol, returned as-is

    Returns:
        Provider instance

    Raises:
        ValueError: If an unknown provider name is given
        TypeError: If ``choice`` is neither a name nor a provider
    """
    if isinstance(choice, str):
        if choice in ('auto', 'cpu', 'scipy', 'cpu_scipy'):
            return _scipy()
        raise ValueError(f"Unknown provider: {choice!r}")
    if isinstance(choice, Provider):
        return choice
    raise TypeError(
        f"provider must be a provider name or implement the Provider protocol, "
        f"got {type(choice).__name__}"
    )


def get_provider() -> Provider:
    """Process-default provider."""
    if _default_provider is None:
        return _scipy()
    return _default_provider


def set_provider(choice: ProviderChoice | None) -> Provider | None:
    """
    Set the process-default provider.

    Args:
        choice: Provider name or instance; None restores the built-in default

    Returns:
        The previously configured provider (None if the built-in default
        was in effect)
    """
    global _default_provider
    previous = _default_provider
    _default_provider = None if choice is None else select_provider(choice)
    logger.debug(
        "default provider set to %s",
        'built-in' if _default_provider is None else _default_provider.name,
    )
    return previous


@contextmanager
def use_provider(choice: ProviderChoice) -> Iterator[Provider]:
    """
    Temporarily replace the process-default provider.

    Usage:
        with use_provider(recording) as provider:
            result = gesdd(a)
    """
    previous = set_provider(choice)
    try:
        yield get_provider()
    finally:
        set_provider(previous)


def resolve_provider(choice: ProviderChoice | None = None) -> Provider:
    """Provider for a single call: the explicit choice, else the default."""
    if choice is None:
        return get_provider()
    return select_provider(choice)


__all__ = [
    "ProviderChoice",
    "ScipyProvider",
    "get_provider",
    "resolve_provider",
    "select_provider",
    "set_provider",
    "use_provider",
]
