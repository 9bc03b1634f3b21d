"""Interactive front end: input handling and the matplotlib window."""

from .interaction import ClickDebouncer, InteractionController, PointerButton

__all__ = ['ClickDebouncer', 'InteractionController', 'PointerButton']
