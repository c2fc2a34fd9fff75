"""Operand preparation for special forms.

A special form is recognised by its operator name before any operand is
evaluated. The evaluator looks the name up in SPECIAL_FORMS and lets the
matching preparer push operands onto the shared stack, some of them as raw
unevaluated nodes; ordinary calls fall back to `prepare_call`. The native
procedure bound to the same name then consumes what was pushed.
"""

from irl.evaluation.special_forms.binding_form import prepare_binding
from irl.evaluation.special_forms.call_form import prepare_call
from irl.evaluation.special_forms.fn_form import prepare_fn
from irl.evaluation.special_forms.if_form import prepare_if

SPECIAL_FORMS = {
    "fn": prepare_fn,
    "if": prepare_if,
    "define": prepare_binding,
    "set": prepare_binding,
}

__all__ = ["SPECIAL_FORMS", "prepare_call"]
