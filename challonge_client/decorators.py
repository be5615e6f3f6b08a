"""
Helper decorators
"""

import logging
from functools import wraps

from .exceptions import DestroyedError


def with_logger(cls):
    """
    Add a `_logger` attribute to a class. The logger name will be the same as
    the class name.

    # Examples
    >>> @with_logger
    ... class Foo:
    ...    pass
    >>> assert Foo._logger.name == "Foo"
    """
    attr_name = "_logger"
    cls_name = cls.__qualname__
    setattr(cls, attr_name, logging.getLogger(cls_name))
    return cls


def requires_active(f):
    """
    Refuse to run a coroutine method on an entity that has been destroyed.

    The check happens before the wrapped coroutine body runs, so no request
    is ever made for a destroyed entity.

    # Examples
    >>> import asyncio
    >>> class Foo:
    ...    kind = "foo"
    ...    is_destroyed = True
    ...    @requires_active
    ...    async def bar(self):
    ...        return 1
    >>> asyncio.run(Foo().bar())
    Traceback (most recent call last):
    ...
    challonge_client.exceptions.DestroyedError: Foo has been destroyed
    """
    @wraps(f)
    async def wrapper(self, *args, **kwargs):
        if self.is_destroyed:
            raise DestroyedError(self.kind)
        return await f(self, *args, **kwargs)

    return wrapper
