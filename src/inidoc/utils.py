from functools import wraps
from typing import Callable, Concatenate
from .globals import GLOBAL_SECTION


def global_variant[
    S, **P, T
](method: Callable[Concatenate[S, str | None, P], T]) -> Callable[Concatenate[S, P], T]:
    """Create a variant of a method that acts on the global section.

    Args:
        method (Callable): A method taking the section name as first argument
            after self.

    Returns:
        Callable: A method with the same arguments minus the section name.
    """

    @wraps(method)
    def variant(self: S, *args: P.args, **kwargs: P.kwargs) -> T:
        return method(self, GLOBAL_SECTION, *args, **kwargs)

    variant.__name__ = f"{method.__name__}_g"
    variant.__qualname__ = f"{method.__qualname__}_g"
    variant.__doc__ = f"Same as {method.__name__} for the global section."
    # signature differs from method (no section argument)
    del variant.__wrapped__
    return variant
