"""Success/failure outcome type used by every I/O-facing call.

An :class:`Outcome` is either a :class:`Success` carrying a value or a
:class:`Failure` carrying an exception. Components return outcomes instead
of raising, so a caller always gets a value back and decides what to do
with the error.

Besides the usual ``map`` / ``flat_map`` family the type offers:

* :meth:`Outcome.decode` / :meth:`Outcome.encode` -- JSON (de)serialisation
  through a :class:`pydantic.TypeAdapter`, so any type pydantic can
  validate (models, dataclasses, builtins, ``TypedDict``...) works.
* :meth:`Outcome.fold` -- run exactly one of two side-effecting handlers.
* :meth:`Outcome.send` -- push the outcome into an :class:`asyncio.Queue`.
* ``async_*`` variants of the transforms, awaited on the calling task.

Example::

    outcome = await manager.load_object(StorageLocation.CACHE, "settings")
    outcome.decode(Settings).fold(
        success=apply_settings,
        failure=lambda exc: logger.debug("no cached settings: %s", exc),
    )
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, cast

from pydantic import TypeAdapter

T = TypeVar("T")
U = TypeVar("U")


class Outcome(Generic[T]):
    """Base class of :class:`Success` and :class:`Failure`.

    Not instantiated directly.
    """

    @property
    def is_success(self) -> bool:
        return isinstance(self, Success)

    @property
    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    @classmethod
    def catching(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
        """Call *fn* and capture its return value or raised exception."""
        try:
            return Success(fn(*args, **kwargs))
        except Exception as exc:
            return Failure(exc)

    def get(self) -> T:
        """Return the success value, or raise the carried error."""
        if isinstance(self, Failure):
            raise self.error
        return cast(Success[T], self).value

    # ------------------------------------------------------------------ #
    # Synchronous transforms
    # ------------------------------------------------------------------ #

    def map(self, transform: Callable[[T], U]) -> Outcome[U]:
        if isinstance(self, Success):
            return Success(transform(self.value))
        return self  # type: ignore[return-value]

    def map_error(self, transform: Callable[[Exception], Exception]) -> Outcome[T]:
        if isinstance(self, Failure):
            return Failure(transform(self.error))
        return self

    def flat_map(self, transform: Callable[[T], Outcome[U]]) -> Outcome[U]:
        if isinstance(self, Success):
            return transform(self.value)
        return self  # type: ignore[return-value]

    def flat_map_error(self, transform: Callable[[Exception], Outcome[T]]) -> Outcome[T]:
        if isinstance(self, Failure):
            return transform(self.error)
        return self

    # ------------------------------------------------------------------ #
    # Serialisation
    # ------------------------------------------------------------------ #

    def decode(self, model: type[U]) -> Outcome[U]:
        """Parse the JSON bytes of a success into *model*.

        Args:
            model: Target type; anything :class:`pydantic.TypeAdapter` accepts.

        Returns:
            ``Success`` with the validated value, or ``Failure`` carrying the
            :class:`pydantic.ValidationError`. A failure passes through
            unchanged.
        """
        if isinstance(self, Failure):
            return self  # type: ignore[return-value]
        value = cast(Success[T], self).value
        try:
            return Success(TypeAdapter(model).validate_json(value))
        except (ValueError, TypeError) as exc:
            return Failure(exc)

    def encode(self) -> Outcome[bytes]:
        """Serialise the success value to JSON bytes.

        The value's own type drives serialisation, so ``encode`` followed by
        ``decode(type(value))`` yields an equal value.
        """
        if isinstance(self, Failure):
            return self  # type: ignore[return-value]
        value = cast(Success[T], self).value
        try:
            return Success(TypeAdapter(type(value)).dump_json(value))
        except (ValueError, TypeError) as exc:
            return Failure(exc)

    # ------------------------------------------------------------------ #
    # Consumption
    # ------------------------------------------------------------------ #

    def fold(
        self,
        success: Callable[[T], Any],
        failure: Callable[[Exception], Any],
    ) -> None:
        """Invoke *success* or *failure* depending on the variant. Never both."""
        if isinstance(self, Success):
            success(self.value)
        elif isinstance(self, Failure):
            failure(self.error)

    def send(self, channel: asyncio.Queue[Outcome[T]]) -> None:
        """Push this outcome into *channel* without waiting for a consumer.

        The queue should be unbounded; a full bounded queue raises
        :class:`asyncio.QueueFull`.
        """
        channel.put_nowait(self)

    # ------------------------------------------------------------------ #
    # Asynchronous transforms
    # ------------------------------------------------------------------ #

    async def async_map(self, transform: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        """Await *transform* on the success value; failures pass through."""
        if isinstance(self, Success):
            return Success(await transform(self.value))
        return self  # type: ignore[return-value]

    async def async_map_error(
        self, transform: Callable[[Exception], Awaitable[Exception]]
    ) -> Outcome[T]:
        """Await *transform* on the error; successes pass through."""
        if isinstance(self, Failure):
            return Failure(await transform(self.error))
        return self

    async def async_flat_map(
        self, transform: Callable[[T], Awaitable[Outcome[U]]]
    ) -> Outcome[U]:
        """Await *transform* on the success value and return its outcome."""
        if isinstance(self, Success):
            return await transform(self.value)
        return self  # type: ignore[return-value]

    async def async_flat_map_error(
        self, transform: Callable[[Exception], Awaitable[Outcome[T]]]
    ) -> Outcome[T]:
        """Await *transform* on the error and return its outcome (recovery)."""
        if isinstance(self, Failure):
            return await transform(self.error)
        return self


@dataclass(frozen=True)
class Success(Outcome[T]):
    value: T


@dataclass(frozen=True)
class Failure(Outcome[T]):
    error: Exception
