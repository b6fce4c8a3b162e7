from __future__ import annotations


class ParseError(RuntimeError):
    """Raised when the JSON engine fails to convert, bind or parse a value.

    The engine failure is always chained as ``__cause__`` (also exposed as
    ``cause``). Text-parse failures carry the offending input in ``text``.

    Example:
        >>> try:
        ...     parse("{")
        ... except ParseError as exc:
        ...     exc.text
        '{'
    """

    def __init__(self, message: str, *, text: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.text = text

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class ArgumentError(ValueError):
    """Raised when a required argument is missing or blank."""

    def __init__(self, argument: str, message: str) -> None:
        super().__init__(message)
        self.argument = argument


__all__ = ["ArgumentError", "ParseError"]
