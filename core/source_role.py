"""Roles of the widget that triggered a dialog.

The default "yes" action of a dialog depends only on the role of its source:

    Submit(form)  -> submit the enclosing form
    Link(target)  -> navigate to the target
    Other()       -> do nothing, callers supply their own action
"""

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Submit:
    form: Any = None  # anything with a submit() method, None when there is no form


@dataclass(frozen=True)
class Link:
    target: str


@dataclass(frozen=True)
class Other:
    pass


SourceRole = Union[Submit, Link, Other]


def default_yes_action(role: SourceRole, navigate: Callable[[str], Any]) -> Callable[[], None]:
    """Return the zero-arg action a dialog runs on "yes" for the given role."""
    if isinstance(role, Submit):
        def submit():
            if role.form is not None:
                role.form.submit()
        return submit

    if isinstance(role, Link):
        def follow():
            navigate(role.target)
        return follow

    def nothing():
        pass
    return nothing
