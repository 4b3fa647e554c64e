"""
Shared orchestration steps for content use cases.

Two procedures cover every guarded operation:

- ``mutate_owned``: require a caller, load the resource, fail if it is
  absent, fail if the caller does not own it, then apply the action.
- ``toggle_relation``: require a caller, load the target, add or remove
  the caller's relation to it, then return its fresh representation.

Loaders, ownership extractors and actions are passed in, so the same
ordering of checks holds for articles, comments, favorites and follows.
"""

from typing import Any, Callable, Iterable, Optional, TypeVar

from conduit.domain.content.entities import Caller, ToggleDirection
from conduit.domain.content.errors import (
    FieldRequiredError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

R = TypeVar("R")
T = TypeVar("T")


def require_caller(caller: Optional[Caller]) -> Caller:
    """Return the caller, or raise UnauthorizedError when there is none."""
    if caller is None:
        raise UnauthorizedError()
    return caller


def is_blank(value: Any) -> bool:
    """Return True for None and for strings holding only whitespace."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(payload: Any, fields: Iterable[str]) -> None:
    """Raise FieldRequiredError naming the first missing or empty field.

    Args:
        payload: Any object exposing the fields as attributes.
        fields: Field names, checked in order.
    """
    for name in fields:
        if is_blank(getattr(payload, name, None)):
            raise FieldRequiredError(name)


def reject_blank(payload: Any, fields: Iterable[str]) -> None:
    """Raise FieldRequiredError naming the first supplied field that is blank.

    Fields left as None are not being changed and are not checked.
    """
    for name in fields:
        value = getattr(payload, name, None)
        if value is not None and is_blank(value):
            raise FieldRequiredError(name)


def mutate_owned(
    caller: Optional[Caller],
    resource_name: str,
    key: object,
    load: Callable[[Caller], Optional[R]],
    owner_of: Callable[[R], int],
    action: Callable[[Caller, R], T],
) -> T:
    """Run an ownership-gated mutation.

    Checks run in a fixed order: caller present, resource exists,
    caller owns it. Nothing is persisted unless all three pass.

    Args:
        caller: The authenticated caller, or None.
        resource_name: Name used in error messages ("article", "comment").
        key: External key of the resource, for error messages.
        load: Returns the resource for the caller, or None if absent.
        owner_of: Returns the owning user identifier of the resource.
        action: Applies the mutation and returns the result.

    Returns:
        Whatever the action returns.

    Raises:
        UnauthorizedError: If there is no caller.
        NotFoundError: If the resource does not exist.
        ForbiddenError: If the caller is not the owner.
    """
    caller = require_caller(caller)
    resource = load(caller)
    if resource is None:
        raise NotFoundError(resource_name.capitalize(), key)
    if owner_of(resource) != caller.id:
        raise ForbiddenError(resource_name)
    return action(caller, resource)


def toggle_relation(
    caller: Optional[Caller],
    direction: ToggleDirection,
    resource_name: str,
    key: object,
    load: Callable[[Caller], Optional[R]],
    add: Callable[[Caller, R], None],
    remove: Callable[[Caller, R], None],
    reload: Callable[[Caller, R], T],
) -> T:
    """Add or remove the caller's relation to a target resource.

    Redundant toggles are not errors: adding an existing relation or
    removing a missing one leaves the relation set unchanged.

    Raises:
        UnauthorizedError: If there is no caller.
        NotFoundError: If the target does not exist.
    """
    caller = require_caller(caller)
    target = load(caller)
    if target is None:
        raise NotFoundError(resource_name.capitalize(), key)
    if direction is ToggleDirection.ADD:
        add(caller, target)
    else:
        remove(caller, target)
    return reload(caller, target)
