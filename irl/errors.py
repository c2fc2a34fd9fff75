from __future__ import annotations

from typing import Any


class IrlError(Exception):
    """ Base class for all irl errors"""

    def __init__(self, message: str, form: Any = None):
        super().__init__(message)
        self.message = message
        self.form = form

    def with_form(self, form: Any) -> IrlError:
        """Attach the innermost form being evaluated, keeping one already set."""
        if self.form is None:
            self.form = form
        return self

    def __str__(self) -> str:
        if self.form is None:
            return self.message
        return f"{self.message} (in {self.form})"


class IrlLookupError(IrlError):
    """ Raised when a name cannot be resolved to something usable"""


class IrlUnboundSymbol(IrlLookupError):
    """ Raised when an identifier is used before it is bound"""


class IrlNotCallable(IrlLookupError):
    """ Raised when the operator of an s-expression resolves to a plain value"""


class IrlTypeError(IrlError):
    """ Raised when the types of arguments passed to a procedure are incorrect"""


class IrlArityError(IrlError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""


class IrlIndexError(IrlError):
    """ Raised when an array index is out of range"""


class IrlSyntaxError(IrlError):
    """ Raised on malformed source text or a malformed print escape"""


class IrlImportError(IrlError):
    """ Raised when a module cannot be read or fails while executing"""


class IrlRecursionError(IrlError):
    """ Raised when evaluation nests deeper than the interpreter allows"""
