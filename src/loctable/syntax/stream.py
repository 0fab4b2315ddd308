"""Token stream with single-token pushback.

The assembler reads locale/value pairs after a key until it meets the next
key. It only knows it has gone too far once it has read that key, so it
pushes the token back for the top-level loop to handle.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from loctable.syntax.tokens import Token

__all__ = ["TokenStream"]


class TokenStream:
    """Iterator wrapper allowing exactly one token to be unread.

    The underlying iterator can be swapped with ``resource()`` so a stream
    can continue across included sources.

    Example:
        >>> stream = TokenStream(iter([a, b]))
        >>> stream.next() is a
        True
        >>> stream.push_back(a)
        >>> stream.next() is a
        True
    """

    __slots__ = ("_buffer", "_tokens")

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._buffer: Token | None = None

    def next(self) -> Token | None:
        """Return the pushed-back token, else the next one, else None."""
        if self._buffer is not None:
            token, self._buffer = self._buffer, None
            return token
        return next(self._tokens, None)

    def push_back(self, token: Token) -> None:
        """Unread ``token`` so the next call to ``next()`` returns it.

        Raises:
            RuntimeError: If a token is already pushed back
        """
        if self._buffer is not None:
            msg = "TokenStream supports a single token of pushback"
            raise RuntimeError(msg)
        self._buffer = token

    def resource(self, tokens: Iterator[Token]) -> None:
        """Continue reading from a new token source.

        Raises:
            RuntimeError: If a pushed-back token has not been consumed
        """
        if self._buffer is not None:
            msg = "Cannot switch token source with a pushed-back token pending"
            raise RuntimeError(msg)
        self._tokens = tokens
